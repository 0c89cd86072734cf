from typing import Any, Optional
from fastapi import status

class BaseAppException(Exception):
    """Base exception for application"""
    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR, details: Optional[Any] = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

    def to_dict(self):
        """Return error response body"""
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body

class MovieOperationException(BaseAppException):
    """Raised when a persistence operation on movies fails"""
    def __init__(self, message: str = "Movie operation failed"):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)

class MovieNotFoundException(BaseAppException):
    """Raised when movie is not found"""
    def __init__(self, message: str = "Movie not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)

class InvalidMovieDataException(BaseAppException):
    """Raised when a movie request body fails validation"""
    def __init__(self, details: Optional[Any] = None, message: str = "Invalid movie data"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)

class NoImageProvidedException(BaseAppException):
    """Raised when upload request carries no image"""
    def __init__(self, message: str = "No image file provided"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)

class ImageUploadException(BaseAppException):
    """Raised when the image host rejects or fails an upload"""
    def __init__(self, details: str = "Unknown error", message: str = "Failed to upload image"):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR, details)

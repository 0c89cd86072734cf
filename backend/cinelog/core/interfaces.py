from abc import ABC, abstractmethod
from typing import BinaryIO, Dict, List, Optional
from dataclasses import dataclass

@dataclass
class UploadProfile:
    """Transformation requested from the image host for every poster"""
    width: int = 400
    height: int = 600
    crop: str = "limit"
    quality: str = "auto"
    format: str = "auto"
    folder: str = "movies"

    def transformation(self) -> List[Dict]:
        return [
            {"width": self.width, "height": self.height, "crop": self.crop},
            {"quality": self.quality},
        ]

@dataclass
class CloudinaryConfig:
    """Credentials for the Cloudinary account"""
    cloud_name: Optional[str]
    api_key: Optional[str]
    api_secret: Optional[str]

    def missing(self) -> List[str]:
        names = {
            "CLOUDINARY_CLOUD_NAME": self.cloud_name,
            "CLOUDINARY_API_KEY": self.api_key,
            "CLOUDINARY_API_SECRET": self.api_secret,
        }
        return [name for name, value in names.items() if not value]

class ImageHostError(Exception):
    """Raised when the image host fails an upload"""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class ImageHostInterface(ABC):
    """Abstract interface for an image hosting service"""

    @abstractmethod
    def upload(self, file: BinaryIO, filename: Optional[str] = None) -> str:
        """Upload an image and return its public URL"""
        pass

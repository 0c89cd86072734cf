import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from cinelog.schemas.movie import MovieResponse

logger = logging.getLogger(__name__)

class ApiError(Exception):
    """Raised when the movie API is unreachable or answers with an error"""
    def __init__(self, message: str, status_code: Optional[int] = None, payload: Optional[Dict[str, Any]] = None):
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}
        super().__init__(self.message)

    @property
    def server_message(self) -> str:
        """Most specific message the server sent, else the transport message"""
        return self.payload.get("error") or self.payload.get("details") or self.message

class MovieApiClient:
    """HTTP client for the movie collection API"""

    def __init__(self, base_url: Optional[str] = None, session=None, timeout: Optional[float] = None):
        if base_url is None:
            from cinelog.core.config import get_settings
            base_url = get_settings().API_BASE_URL
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        if session is None:
            self.session.headers.update({"accept": "application/json"})

    def _request(self, method: str, endpoint: str, **kwargs) -> Any:
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        try:
            logger.info(f"{method} {url}")
            response = self.session.request(method, url, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request exception: {str(e)}")
            raise ApiError(f"Request failed: {str(e)}")

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.status_code >= 400:
            payload = data if isinstance(data, dict) else {}
            logger.error(f"API request failed: {response.status_code} - {payload}")
            raise ApiError(
                payload.get("error") or f"Request failed with status {response.status_code}",
                status_code=response.status_code,
                payload=payload,
            )
        if data is None:
            logger.error(f"Response from {url} is not JSON")
            raise ApiError(f"Malformed response from {endpoint}", status_code=response.status_code)
        return data

    def _field(self, data: Any, key: str) -> Any:
        if not isinstance(data, dict) or key not in data:
            raise ApiError(f"Malformed response: missing {key}")
        return data[key]

    def _movie(self, data: Any) -> MovieResponse:
        try:
            return MovieResponse.model_validate(data)
        except ValidationError as e:
            raise ApiError(f"Malformed movie in response: {e.error_count()} invalid fields")

    def upload_image(self, filename: str, content: bytes, content_type: Optional[str] = None) -> str:
        """Upload a poster and return its hosted URL"""
        files = {"image": (filename, content, content_type or "application/octet-stream")}
        data = self._request("POST", "/upload", files=files)
        return self._field(data, "imageUrl")

    def list_movies(self, skip: int = 0, take: int = 10) -> List[MovieResponse]:
        data = self._request("GET", "/movies", params={"skip": skip, "take": take})
        if not isinstance(data, list):
            raise ApiError("Malformed response: expected a list of movies")
        return [self._movie(item) for item in data]

    def create_movie(self, movie_data: Dict[str, Any]) -> MovieResponse:
        data = self._request("POST", "/movies", json=movie_data)
        return self._movie(data)

    def update_movie(self, movie_id: int, movie_data: Dict[str, Any]) -> MovieResponse:
        data = self._request("PUT", f"/movies/{movie_id}", json=movie_data)
        return self._movie(data)

    def delete_movie(self, movie_id: int) -> str:
        data = self._request("DELETE", f"/movies/{movie_id}")
        return self._field(data, "message")

    def db_info(self) -> Dict[str, Any]:
        data = self._request("GET", "/db-info")
        if not isinstance(data, dict):
            raise ApiError("Malformed response: expected an object")
        return data

import base64
import logging
import mimetypes
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from cinelog.client.api import ApiError, MovieApiClient
from cinelog.schemas.movie import MOVIE_FIELD_LABELS, MovieBase, MovieResponse, required_message

logger = logging.getLogger(__name__)

ADD_MODE = "add"
EDIT_MODE = "edit"

# Advisory only; the server accepts any file
IMAGE_HINT = "PNG, JPG or JPEG (MAX. 5MB)"
ADVISED_IMAGE_TYPES = ("image/png", "image/jpeg")
ADVISED_MAX_IMAGE_BYTES = 5 * 1024 * 1024

@dataclass
class ImageFile:
    """A poster picked by the user, not yet uploaded"""
    filename: str
    content: bytes
    content_type: Optional[str] = None

    def __post_init__(self):
        if self.content_type is None:
            self.content_type = mimetypes.guess_type(self.filename)[0] or "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.content)

    def data_url(self) -> str:
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.content_type};base64,{encoded}"

def log_alert(message: str) -> None:
    logger.warning(message)

def always_confirm(message: str) -> bool:
    return True

class MovieForm:
    """State and submit flow of the add/edit movie form"""

    def __init__(
        self,
        api: MovieApiClient,
        mode: str = ADD_MODE,
        movie: Optional[MovieResponse] = None,
        on_success: Optional[Callable[[], None]] = None,
        on_cancel: Optional[Callable[[], None]] = None,
        confirm: Callable[[str], bool] = always_confirm,
        alert: Callable[[str], None] = log_alert,
    ):
        if mode not in (ADD_MODE, EDIT_MODE):
            raise ValueError(f"Unknown form mode: {mode}")
        self.api = api
        self.mode = mode
        self.movie = movie
        self.on_success = on_success
        self.on_cancel = on_cancel
        self.confirm = confirm
        self.alert = alert
        self.reset()

    def _initial_values(self) -> Dict[str, str]:
        if self.movie is not None:
            return {field: getattr(self.movie, field) or "" for field in MOVIE_FIELD_LABELS}
        return {field: "" for field in MOVIE_FIELD_LABELS}

    def reset(self) -> None:
        """Back to the initial values for the current mode"""
        self.values = self._initial_values()
        self.errors: Dict[str, str] = {}
        self.selected_image: Optional[ImageFile] = None
        self.image_preview: Optional[str] = self.movie.image_url if self.movie is not None else None
        self.is_uploading = False
        self.is_submitting = False

    def set_field(self, field: str, value: str) -> None:
        if field not in MOVIE_FIELD_LABELS:
            raise KeyError(field)
        self.values[field] = value

    def select_image(self, filename: str, content: bytes, content_type: Optional[str] = None) -> None:
        """Keep the chosen file and show it as a local preview"""
        image = ImageFile(filename, content, content_type)
        if image.content_type not in ADVISED_IMAGE_TYPES or image.size > ADVISED_MAX_IMAGE_BYTES:
            logger.warning(f"{filename} is outside the advised {IMAGE_HINT}")
        self.selected_image = image
        self.image_preview = image.data_url()

    def validate(self) -> bool:
        self.errors = {
            field: required_message(field)
            for field, value in self.values.items()
            if not value or not value.strip()
        }
        return not self.errors

    @property
    def is_busy(self) -> bool:
        return self.is_uploading or self.is_submitting

    @property
    def submit_label(self) -> str:
        if self.is_uploading:
            return "Uploading image..."
        if self.is_submitting:
            return "Updating..." if self.mode == EDIT_MODE else "Adding..."
        return "Update Movie" if self.mode == EDIT_MODE else "Add Movie"

    def has_data(self) -> bool:
        return any(value and value.strip() for value in self.values.values())

    def _upload_image(self) -> Optional[str]:
        image = self.selected_image
        self.is_uploading = True
        try:
            logger.info(f"Uploading {image.filename} ({image.size} bytes, {image.content_type})")
            return self.api.upload_image(image.filename, image.content, image.content_type)
        except ApiError as e:
            logger.error(f"Error uploading image: {e.message}")
            self.alert(f"Failed to upload image: {e.server_message}")
            return None
        finally:
            self.is_uploading = False

    def submit(self) -> bool:
        """Validate, upload the new poster if any, then create or update"""
        if self.is_busy or not self.validate():
            return False

        self.is_submitting = True
        try:
            image_url = self.movie.image_url if self.movie is not None else None
            if self.selected_image is not None:
                image_url = self._upload_image()
                if not image_url:
                    return False

            payload = MovieBase(**self.values, image_url=image_url).model_dump(by_alias=True)
            try:
                if self.mode == EDIT_MODE and self.movie is not None:
                    self.api.update_movie(self.movie.id, payload)
                else:
                    self.api.create_movie(payload)
            except ApiError as e:
                action = "update" if self.mode == EDIT_MODE else "add"
                logger.error(f"Error saving movie ({action}): {e.message}")
                self.alert(f"Failed to {action} movie. Please try again.")
                return False
        finally:
            self.is_submitting = False

        self.reset()
        if self.on_success:
            self.on_success()
        return True

    def cancel(self) -> bool:
        """Close without saving, asking first when something would be lost"""
        if self.mode == EDIT_MODE:
            if not self.confirm("Are you sure you want to cancel editing? Any changes will be lost."):
                return False
        elif self.has_data():
            if not self.confirm("You have unsaved changes. Are you sure you want to cancel?"):
                return False

        self.reset()
        if self.on_cancel:
            self.on_cancel()
        return True

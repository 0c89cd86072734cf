import logging
from typing import BinaryIO, Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from .interfaces import ImageHostInterface, ImageHostError, UploadProfile, CloudinaryConfig

logger = logging.getLogger(__name__)

class CloudinaryImageHost(ImageHostInterface):
    """Uploads posters to Cloudinary with a fixed transformation profile"""

    def __init__(self, config: CloudinaryConfig, profile: Optional[UploadProfile] = None):
        self.config = config
        self.profile = profile or UploadProfile()

    def _configure(self) -> None:
        missing = self.config.missing()
        if missing:
            raise ImageHostError(f"Cloudinary is not configured: missing {', '.join(missing)}")

        cloudinary.config(
            cloud_name=self.config.cloud_name,
            api_key=self.config.api_key,
            api_secret=self.config.api_secret,
            secure=True,
        )

    def upload(self, file: BinaryIO, filename: Optional[str] = None) -> str:
        """Upload a single image; one attempt, no retry"""
        api_key_state = "Set" if self.config.api_key else "Not set"
        api_secret_state = "Set" if self.config.api_secret else "Not set"
        logger.info(f"Cloudinary config: cloud_name={self.config.cloud_name} api_key={api_key_state} api_secret={api_secret_state}")
        self._configure()

        try:
            logger.info(f"Starting Cloudinary upload of {filename or 'unnamed file'}")
            result = cloudinary.uploader.upload(
                file,
                resource_type="image",
                folder=self.profile.folder,
                transformation=self.profile.transformation(),
                fetch_format=self.profile.format,
            )
        except CloudinaryError as e:
            logger.error(f"Cloudinary upload error: {str(e)}")
            raise ImageHostError(str(e))
        except Exception as e:
            logger.error(f"Unexpected upload error: {str(e)}")
            raise ImageHostError(str(e))

        secure_url = (result or {}).get("secure_url")
        if not secure_url:
            raise ImageHostError("Image host returned no secure_url")

        logger.info(f"Cloudinary upload success: {result.get('public_id')}")
        return secure_url

class ImageHostFactory:
    """Factory class for creating image hosts"""

    @staticmethod
    def create_image_host() -> ImageHostInterface:
        """Create the configured image host"""
        from cinelog.core.config import get_settings

        settings = get_settings()
        config = CloudinaryConfig(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
        )
        return CloudinaryImageHost(config, UploadProfile(folder=settings.UPLOAD_FOLDER))

def get_image_host() -> ImageHostInterface:
    """Dependency to get the image host"""
    return ImageHostFactory.create_image_host()

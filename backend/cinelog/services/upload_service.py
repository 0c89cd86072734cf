import logging
from typing import BinaryIO, Optional
from cinelog.core.interfaces import ImageHostInterface, ImageHostError
from cinelog.core.exceptions import NoImageProvidedException, ImageUploadException

logger = logging.getLogger(__name__)

class UploadService:
    """Forwards a single poster image to the image host"""

    def __init__(self, image_host: ImageHostInterface):
        self.image_host = image_host

    def upload_image(self, file: Optional[BinaryIO], filename: Optional[str] = None,
                     content_type: Optional[str] = None, size: Optional[int] = None) -> str:
        """Upload the image and return its public URL"""
        if file is None:
            logger.info("Upload rejected: no file provided")
            raise NoImageProvidedException()

        logger.info(f"File details: name={filename} type={content_type} size={size}")
        try:
            image_url = self.image_host.upload(file, filename=filename)
        except ImageHostError as e:
            logger.error(f"Upload error: {e.message}")
            raise ImageUploadException(details=e.message)

        logger.info("Upload completed successfully")
        return image_url

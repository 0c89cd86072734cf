from fastapi import APIRouter, Depends, File, UploadFile
from typing import Optional

from cinelog.core.image_host import get_image_host
from cinelog.core.interfaces import ImageHostInterface
from cinelog.services.upload_service import UploadService
from cinelog.schemas.movie import UploadResponse

router = APIRouter(tags=["upload"])

@router.post("/upload", response_model=UploadResponse)
def upload_image(
    image: Optional[UploadFile] = File(None, description="Poster image (PNG, JPG or JPEG)"),
    image_host: ImageHostInterface = Depends(get_image_host)
):
    """Upload a poster and return its hosted URL"""
    upload_service = UploadService(image_host)
    if image is None:
        image_url = upload_service.upload_image(None)
    else:
        image_url = upload_service.upload_image(
            image.file,
            filename=image.filename,
            content_type=image.content_type,
            size=image.size,
        )
    return {"image_url": image_url}

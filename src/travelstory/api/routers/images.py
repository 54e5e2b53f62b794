"""Image upload and removal endpoints.

These endpoints take no bearer session. Stored files are served by the
``/uploads`` static mount.
"""

from typing import Annotated

from fastapi import APIRouter, File, Query, UploadFile
from pydantic import BaseModel

from travelstory.api.deps import Images
from travelstory.api.schemas import CamelModel
from travelstory.core.exceptions import InternalError, ValidationError

router = APIRouter()


class ImageUploadResponse(CamelModel):
    image_url: str


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str


@router.post("/image-upload", response_model=ImageUploadResponse)
async def image_upload(
    images: Images,
    image: Annotated[UploadFile | None, File()] = None,
) -> ImageUploadResponse:
    """Store the multipart ``image`` file and return its public URL."""
    if image is None or not image.filename:
        raise ValidationError("No image uploaded")

    try:
        image_url = await images.save(image)
    except OSError as e:
        raise InternalError(str(e)) from e
    return ImageUploadResponse(image_url=image_url)


@router.delete("/delete-image", response_model=MessageResponse)
async def delete_image(
    images: Images,
    image_url: Annotated[str | None, Query(alias="imageUrl")] = None,
) -> MessageResponse:
    """Remove an uploaded file named by the trailing part of ``imageUrl``.

    Raises:
        ValidationError: If imageUrl is missing
        NotFoundError: If no such file exists
    """
    if not image_url:
        raise ValidationError("image Url is required")

    try:
        await images.delete_by_url(image_url)
    except OSError as e:
        raise InternalError(str(e)) from e
    return MessageResponse(message="image deleted successfully")

"""Image editing routes."""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse

from common.error_messages import ErrorCode, error_code_for_kind, get_error_response
from image.models import DEFAULT_MIME_TYPE, EditImageError, EditImageResponse, ImageGenerationError
from image.services import StabilityImageAdapter, get_image_adapter
from utils.logger import get_logger

logger = get_logger("image")
router = APIRouter(tags=["image"])


@router.post(
    "/api/edit-image",
    response_model=EditImageResponse,
    responses={400: {"model": EditImageError}, 500: {"model": EditImageError}},
)
def edit_image(
    prompt: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    adapter: StabilityImageAdapter = Depends(get_image_adapter),
):
    """
    Edit an uploaded product photo, or generate one from scratch.

    Accepts multipart form data:
      prompt: instruction text (required)
      image:  optional product photo; an empty upload counts as no image

    Returns { imageUrl: "data:image/png;base64,..." } or { error: "..." }.
    """
    if not prompt or not prompt.strip():
        message, status_code = get_error_response(ErrorCode.INVALID_PROMPT)
        return JSONResponse(status_code=status_code, content={"error": message})

    image_bytes = None
    mime_type = None
    if image is not None:
        data = image.file.read()
        if data:
            image_bytes = data
            mime_type = image.content_type or DEFAULT_MIME_TYPE
            logger.info(f"Received image upload: {image.filename} ({mime_type}, {len(data)} bytes)")

    try:
        image_url = adapter.generate(prompt, image=image_bytes, mime_type=mime_type)
    except ImageGenerationError as e:
        logger.error(f"Error in /api/edit-image [{error_code_for_kind(e.kind).value}]: {e.message}")
        return JSONResponse(status_code=500, content={"error": e.message})

    return EditImageResponse(imageUrl=image_url)

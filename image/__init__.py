"""Product image editing module."""
from image.models import (
    GenerationMode,
    ErrorKind,
    ImageInput,
    GenerationRequest,
    ProviderRequest,
    GenerationResult,
    ImageGenerationError,
)
from image.prompts import compose_prompt
from image.services import StabilityImageAdapter, get_image_adapter, to_data_url

__all__ = [
    "GenerationMode",
    "ErrorKind",
    "ImageInput",
    "GenerationRequest",
    "ProviderRequest",
    "GenerationResult",
    "ImageGenerationError",
    "compose_prompt",
    "StabilityImageAdapter",
    "get_image_adapter",
    "to_data_url"
]

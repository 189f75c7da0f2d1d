"""Image editing Pydantic models."""
from enum import Enum
from typing import Optional, Dict, Tuple
from pydantic import BaseModel, Field, field_validator

DEFAULT_MIME_TYPE = "image/png"
DATA_URL_PREFIX = "data:image/png;base64,"


class GenerationMode(str, Enum):
    """Request variant, sent to the provider as the `mode` field."""
    GENERATE = "text-to-image"
    EDIT = "image-to-image"


class ErrorKind(str, Enum):
    """Where an adapter failure originated."""
    CONFIGURATION = "configuration"
    PROVIDER = "provider"
    TRANSPORT = "transport"


class ImageInput(BaseModel):
    """Raw uploaded image."""
    data: bytes = Field(..., description="Raw image bytes")
    mime_type: str = Field(DEFAULT_MIME_TYPE, description="Declared content type")

    @field_validator("mime_type", mode="before")
    @classmethod
    def _default_mime_type(cls, value: Optional[str]) -> str:
        return value or DEFAULT_MIME_TYPE


class GenerationRequest(BaseModel):
    instruction: str = Field(..., min_length=1, description="Free-text edit or generation instruction")
    image: Optional[ImageInput] = Field(None, description="Optional product photo to edit")

    @field_validator("instruction")
    @classmethod
    def _instruction_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("instruction must not be blank")
        return value

    @property
    def mode(self) -> GenerationMode:
        return GenerationMode.EDIT if self.image is not None else GenerationMode.GENERATE


class ProviderRequest(BaseModel):
    """Multipart payload for the provider: plain form fields plus file parts."""
    mode: GenerationMode
    data: Dict[str, str] = Field(default_factory=dict)
    files: Dict[str, Tuple[str, bytes, str]] = Field(default_factory=dict)


class GenerationResult(BaseModel):
    """Outcome of one adapter call: either a data URL or a tagged failure."""
    data_url: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    message: Optional[str] = None
    status_code: Optional[int] = None

    @classmethod
    def success(cls, data_url: str) -> "GenerationResult":
        return cls(data_url=data_url)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        status_code: Optional[int] = None
    ) -> "GenerationResult":
        return cls(error_kind=kind, message=message, status_code=status_code)

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @property
    def error(self) -> Optional["ImageGenerationError"]:
        if self.ok:
            return None
        return ImageGenerationError(self.error_kind, self.message, self.status_code)


class ImageGenerationError(RuntimeError):
    """Raised by StabilityImageAdapter.generate on any failure."""

    def __init__(self, kind: ErrorKind, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code


class EditImageResponse(BaseModel):
    imageUrl: str = Field(..., description="Generated PNG as a base64 data URL")


class EditImageError(BaseModel):
    error: str

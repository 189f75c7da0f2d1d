"""
User-friendly error messages and status codes.

This module provides centralized error message definitions that are
user-friendly and avoid exposing technical implementation details.
"""
from typing import Tuple, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for different types of failures."""

    # Validation Errors (400)
    INVALID_PROMPT = "INVALID_PROMPT"

    # External API Errors (502)
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"

    # Generation Errors (500)
    IMAGE_GENERATION_FAILED = "IMAGE_GENERATION_FAILED"

    # Configuration Errors (500)
    MISSING_API_KEY = "MISSING_API_KEY"

    # Generic Errors
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


ERROR_MESSAGES = {
    ErrorCode.INVALID_PROMPT: "Missing or invalid 'prompt' field",
    ErrorCode.EXTERNAL_SERVICE_ERROR: "The image service is temporarily unavailable. Please try again later.",
    ErrorCode.IMAGE_GENERATION_FAILED: "Image generation failed. Please try again or adjust your prompt.",
    ErrorCode.MISSING_API_KEY: "The service is not properly configured. Please contact support.",
    ErrorCode.UNKNOWN_ERROR: "Something unexpected happened. Please try again.",
}


ERROR_STATUS_CODES = {
    ErrorCode.INVALID_PROMPT: 400,
    ErrorCode.EXTERNAL_SERVICE_ERROR: 502,
    ErrorCode.IMAGE_GENERATION_FAILED: 500,
    ErrorCode.MISSING_API_KEY: 500,
    ErrorCode.UNKNOWN_ERROR: 500,
}


# Adapter failure kind -> catalogue entry
_KIND_TO_CODE = {
    "configuration": ErrorCode.MISSING_API_KEY,
    "provider": ErrorCode.IMAGE_GENERATION_FAILED,
    "transport": ErrorCode.EXTERNAL_SERVICE_ERROR,
}


def get_error_response(
    error_code: ErrorCode,
    custom_message: Optional[str] = None
) -> Tuple[str, int]:
    """
    Get user-friendly error message and HTTP status code.

    Args:
        error_code: The error code enum
        custom_message: Optional custom message to append to the standard message

    Returns:
        Tuple of (error_message, status_code)
    """
    message = ERROR_MESSAGES.get(error_code, ERROR_MESSAGES[ErrorCode.UNKNOWN_ERROR])
    status_code = ERROR_STATUS_CODES.get(error_code, 500)

    if custom_message:
        message = f"{message} {custom_message}"

    return message, status_code


def error_code_for_kind(kind: Optional[str]) -> ErrorCode:
    """Map an image adapter error kind ("configuration", "provider", "transport") to an ErrorCode."""
    key = getattr(kind, "value", kind)
    return _KIND_TO_CODE.get(key, ErrorCode.UNKNOWN_ERROR)

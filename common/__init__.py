"""Shared helpers."""
from common.error_messages import ErrorCode, get_error_response, error_code_for_kind

__all__ = ["ErrorCode", "get_error_response", "error_code_for_kind"]

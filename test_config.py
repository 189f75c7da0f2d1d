"""Tests for configuration parsing, the error catalogue and log cleanup."""
import os
import time

import pytest

from common.error_messages import ErrorCode, error_code_for_kind, get_error_response
from config import Config
from image.models import ErrorKind
from utils.logger import cleanup_old_logs, get_logger


def test_invalid_int_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("PORT_UNDER_TEST", "not-a-number")
    assert Config._get_int("PORT_UNDER_TEST", 8000) == 8000


def test_valid_float_is_parsed(monkeypatch):
    monkeypatch.setenv("TIMEOUT_UNDER_TEST", "42.5")
    assert Config._get_float("TIMEOUT_UNDER_TEST", 120.0) == 42.5


def test_validate_requires_stability_key(monkeypatch):
    monkeypatch.setattr(Config, "STABILITY_API_KEY", "")
    with pytest.raises(ValueError, match="STABILITY_API_KEY"):
        Config.validate()

    monkeypatch.setattr(Config, "STABILITY_API_KEY", "sk-test")
    Config.validate()
    assert Config.has_stability_api_key()


def test_error_kind_maps_to_catalogue():
    assert error_code_for_kind(ErrorKind.CONFIGURATION) == ErrorCode.MISSING_API_KEY
    assert error_code_for_kind(ErrorKind.PROVIDER) == ErrorCode.IMAGE_GENERATION_FAILED
    assert error_code_for_kind("transport") == ErrorCode.EXTERNAL_SERVICE_ERROR
    assert error_code_for_kind(None) == ErrorCode.UNKNOWN_ERROR


def test_get_error_response_appends_custom_message():
    message, status = get_error_response(ErrorCode.UNKNOWN_ERROR, "Request id abc.")
    assert status == 500
    assert message.endswith("Request id abc.")


def test_invalid_prompt_entry_matches_wire_message():
    assert get_error_response(ErrorCode.INVALID_PROMPT) == ("Missing or invalid 'prompt' field", 400)


def test_cleanup_old_logs_removes_only_expired_files(tmp_path):
    (tmp_path / "app.log.2000-01-01").write_text("old")
    (tmp_path / f"app.log.{time.strftime('%Y-%m-%d')}").write_text("new")
    stale = tmp_path / "app.log.backup"
    stale.write_text("stale")
    old_mtime = time.time() - 30 * 24 * 3600
    os.utime(stale, (old_mtime, old_mtime))

    assert cleanup_old_logs(str(tmp_path), retention_days=10) == 2
    assert sorted(p.name for p in tmp_path.iterdir()) == [f"app.log.{time.strftime('%Y-%m-%d')}"]


def test_get_logger_is_namespaced():
    assert get_logger("image").name == "app.image"
    assert get_logger().name == "app"

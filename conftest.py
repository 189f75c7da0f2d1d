"""Shared pytest fixtures."""
import os
import tempfile

# Keep test runs from writing into the repo's logs/ directory
os.environ.setdefault("LOGS_DIR", os.path.join(tempfile.gettempdir(), "product-image-editor-test-logs"))

import pytest


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int = 200, content: bytes = b"", text: str = ""):
        self.status_code = status_code
        self.content = content
        self.text = text


class FakeSession:
    """Records every POST and replays a canned response or raises a canned error."""

    def __init__(self, response: FakeResponse = None, error: Exception = None):
        self.response = response or FakeResponse(content=b"\x89PNG\r\n\x1a\nfake")
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_session():
    return FakeSession()

"""Endpoint tests for /api/edit-image and /healthz using FastAPI's TestClient."""
import base64
import logging

import pytest
import requests
from fastapi.testclient import TestClient

from app import app
from config import Config
from conftest import FakeResponse, FakeSession
from image.services import StabilityImageAdapter, get_image_adapter

PNG_BYTES = b"\x89PNG\r\n\x1a\nendpoint"


@pytest.fixture
def session():
    return FakeSession(FakeResponse(content=PNG_BYTES))


@pytest.fixture
def client(session):
    app.dependency_overrides[get_image_adapter] = lambda: StabilityImageAdapter(
        api_key="sk-test", api_url="https://stability.test/generate", session=session
    )
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_healthz(client, monkeypatch):
    monkeypatch.setattr(Config, "STABILITY_API_KEY", "")
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "image_provider_configured": False}


def test_missing_prompt_returns_400(client, session):
    response = client.post("/api/edit-image", data={})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing or invalid 'prompt' field"}
    assert session.calls == []


def test_blank_prompt_returns_400(client, session):
    response = client.post("/api/edit-image", data={"prompt": "   "})

    assert response.status_code == 400
    assert session.calls == []


def test_prompt_only_generates_from_scratch(client, session):
    response = client.post("/api/edit-image", data={"prompt": "a leather wallet on oak"})

    assert response.status_code == 200
    image_url = response.json()["imageUrl"]
    assert image_url.startswith("data:image/png;base64,")
    assert base64.b64decode(image_url.split(",", 1)[1]) == PNG_BYTES
    assert session.calls[0]["files"]["mode"] == (None, "text-to-image")


def test_uploaded_image_is_edited(client, session):
    response = client.post(
        "/api/edit-image",
        data={"prompt": "soft pastel background"},
        files={"image": ("bottle.jpg", b"jpeg-data", "image/jpeg")},
    )

    assert response.status_code == 200
    files = session.calls[0]["files"]
    assert files["mode"] == (None, "image-to-image")
    assert files["image"] == ("input-image.png", b"jpeg-data", "image/jpeg")
    assert "aspect_ratio" not in files


def test_empty_upload_counts_as_no_image(client, session):
    response = client.post(
        "/api/edit-image",
        data={"prompt": "minimalist product shot"},
        files={"image": ("empty.png", b"", "image/png")},
    )

    assert response.status_code == 200
    assert session.calls[0]["files"]["mode"] == (None, "text-to-image")


def test_provider_error_returns_500_with_message(client, session):
    session.response = FakeResponse(status_code=401, text="unauthorized: bad key")
    response = client.post("/api/edit-image", data={"prompt": "a watch"})

    assert response.status_code == 500
    error = response.json()["error"]
    assert "401" in error
    assert "unauthorized: bad key" in error


def test_transport_error_returns_500_with_wrapped_message(client, session):
    session.error = requests.ConnectionError("Connection refused")
    response = client.post("/api/edit-image", data={"prompt": "a watch"})

    assert response.status_code == 500
    assert response.json() == {"error": "Stability image generation failed: Connection refused"}


def test_missing_credential_returns_500_without_calling_provider(session):
    app.dependency_overrides[get_image_adapter] = lambda: StabilityImageAdapter(api_key="", session=session)
    try:
        with TestClient(app) as test_client:
            response = test_client.post("/api/edit-image", data={"prompt": "a watch"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "STABILITY_API_KEY is missing in environment variables."}
    assert session.calls == []


def test_startup_warns_once_when_key_is_unset(monkeypatch, caplog):
    monkeypatch.setattr(Config, "STABILITY_API_KEY", "")

    with caplog.at_level(logging.WARNING, logger="app"):
        with TestClient(app):
            pass

    warnings = [
        r.getMessage() for r in caplog.records
        if r.levelno == logging.WARNING and "Image generation will fail until you configure it." in r.getMessage()
    ]
    assert len(warnings) == 1
    assert "STABILITY_API_KEY" in warnings[0]


def test_startup_does_not_warn_when_key_is_set(monkeypatch, caplog):
    monkeypatch.setattr(Config, "STABILITY_API_KEY", "sk-test")

    with caplog.at_level(logging.WARNING, logger="app"):
        with TestClient(app):
            pass

    assert not [r for r in caplog.records if "Image generation will fail" in r.getMessage()]

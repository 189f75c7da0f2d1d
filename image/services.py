"""Image editing services - Stability AI integration."""
import base64
from typing import Optional, Callable, Dict

import requests

from config import Config
from image.models import (
    DATA_URL_PREFIX,
    DEFAULT_MIME_TYPE,
    ErrorKind,
    GenerationMode,
    GenerationRequest,
    GenerationResult,
    ImageInput,
    ProviderRequest,
)
from image.prompts import compose_prompt
from utils.logger import get_logger

logger = get_logger("image.services")

OUTPUT_FORMAT = "png"
GENERATE_ASPECT_RATIO = "1:1"
# How far edit-mode output may drift from the input pixels (0-1)
EDIT_STRENGTH = 0.25
INPUT_IMAGE_FILENAME = "input-image.png"

MISSING_KEY_MESSAGE = "STABILITY_API_KEY is missing in environment variables."
FAILURE_PREFIX = "Stability image generation failed: "
UNKNOWN_PROVIDER_ERROR = "Unknown error from Stability"


def to_data_url(image_bytes: bytes) -> str:
    """Wrap raw PNG bytes as a base64 data URL."""
    return DATA_URL_PREFIX + base64.b64encode(image_bytes).decode("ascii")


class StabilityImageAdapter:
    """
    Forwards one instruction (and optional product photo) to Stability and
    maps the reply to a GenerationResult.

    The credential, endpoint and HTTP session are injected; anything not
    passed falls back to Config. Instances hold no per-call state and may be
    shared between concurrent requests.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        model: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = Config.STABILITY_API_KEY if api_key is None else api_key
        self.api_url = api_url or Config.STABILITY_API_URL
        self.model = model or Config.STABILITY_MODEL
        self.session = session
        self.timeout = Config.STABILITY_TIMEOUT_SECONDS if timeout is None else timeout

        self._builders: Dict[GenerationMode, Callable[[GenerationRequest, ProviderRequest], None]] = {
            GenerationMode.GENERATE: self._build_generate_payload,
            GenerationMode.EDIT: self._build_edit_payload,
        }

    # ---------- Payload construction ----------
    def build_provider_request(self, request: GenerationRequest) -> ProviderRequest:
        """Build the multipart payload for `request`, dispatching once on its mode."""
        mode = request.mode
        payload = ProviderRequest(
            mode=mode,
            data={
                "prompt": compose_prompt(request.instruction, mode),
                "output_format": OUTPUT_FORMAT,
                "mode": mode.value,
                "model": self.model,
            },
        )
        self._builders[mode](request, payload)
        return payload

    @staticmethod
    def _build_generate_payload(request: GenerationRequest, payload: ProviderRequest) -> None:
        payload.data["aspect_ratio"] = GENERATE_ASPECT_RATIO

    @staticmethod
    def _build_edit_payload(request: GenerationRequest, payload: ProviderRequest) -> None:
        image = request.image
        payload.files["image"] = (INPUT_IMAGE_FILENAME, image.data, image.mime_type or DEFAULT_MIME_TYPE)
        payload.data["strength"] = str(EDIT_STRENGTH)

    # ---------- Transmission ----------
    def _post(self, payload: ProviderRequest) -> requests.Response:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "image/*",
        }
        # Every field goes out as a multipart part, even when there is no image
        parts = {name: (None, value) for name, value in payload.data.items()}
        parts.update(payload.files)

        post = self.session.post if self.session is not None else requests.post
        return post(self.api_url, headers=headers, files=parts, timeout=self.timeout)

    def run(self, request: GenerationRequest) -> GenerationResult:
        """
        Send `request` to Stability once and map the outcome.

        Never raises for configuration, provider or transport failures; those
        come back as a failed GenerationResult tagged with their ErrorKind.
        """
        if not self.api_key:
            logger.error(MISSING_KEY_MESSAGE)
            return GenerationResult.failure(ErrorKind.CONFIGURATION, MISSING_KEY_MESSAGE)

        payload = self.build_provider_request(request)
        logger.info(f"Sending {payload.mode.value} request to Stability (model: {self.model})")

        try:
            response = self._post(payload)

            if not 200 <= response.status_code < 300:
                try:
                    error_text = response.text
                except (ValueError, OSError):
                    error_text = ""
                message = (
                    f"{FAILURE_PREFIX}Stability API error {response.status_code}: "
                    f"{error_text or UNKNOWN_PROVIDER_ERROR}"
                )
                logger.error(message)
                return GenerationResult.failure(ErrorKind.PROVIDER, message, response.status_code)

            image_bytes = response.content
        except (OSError, ValueError) as e:
            # requests.RequestException is an OSError
            message = f"{FAILURE_PREFIX}{str(e) or type(e).__name__}"
            logger.error(message, exc_info=True)
            return GenerationResult.failure(ErrorKind.TRANSPORT, message)

        logger.info(f"Stability returned {len(image_bytes)} bytes ({payload.mode.value})")
        return GenerationResult.success(to_data_url(image_bytes))

    def generate(
        self,
        instruction: str,
        image: Optional[bytes] = None,
        mime_type: Optional[str] = None,
    ) -> str:
        """
        Generate or edit a product image.

        Args:
            instruction: Free-text instruction (must not be blank)
            image: Raw bytes of the photo to edit; omit to generate from scratch
            mime_type: Content type of `image` (defaults to image/png)

        Returns:
            PNG image as a `data:image/png;base64,...` string

        Raises:
            ValueError: blank instruction
            ImageGenerationError: missing credential, provider or transport failure
        """
        image_input = ImageInput(data=image, mime_type=mime_type) if image else None
        request = GenerationRequest(instruction=instruction, image=image_input)

        result = self.run(request)
        if not result.ok:
            raise result.error
        return result.data_url


def get_image_adapter() -> StabilityImageAdapter:
    """FastAPI dependency: adapter built from current configuration."""
    return StabilityImageAdapter()

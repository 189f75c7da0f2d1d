"""
Configuration module - loads all settings from environment variables.
"""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
try:
    load_dotenv()
except Exception as e:
    print(f"Warning: Failed to load .env file: {e}")
    print("Continuing with environment variables or defaults...")


class Config:
    """Application configuration loaded from environment variables."""

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Safely parse integer environment variable."""
        try:
            return int(os.getenv(key, str(default)))
        except (ValueError, TypeError) as e:
            print(f"Warning: Invalid integer for {key}, using default {default}: {e}")
            return default

    @staticmethod
    def _get_float(key: str, default: float) -> float:
        """Safely parse float environment variable."""
        try:
            return float(os.getenv(key, str(default)))
        except (ValueError, TypeError) as e:
            print(f"Warning: Invalid float for {key}, using default {default}: {e}")
            return default

    # Stability AI
    STABILITY_API_KEY: str = os.getenv("STABILITY_API_KEY", "")
    STABILITY_API_URL: str = os.getenv(
        "STABILITY_API_URL",
        "https://api.stability.ai/v2beta/stable-image/generate/sd3",
    )
    STABILITY_MODEL: str = os.getenv("STABILITY_MODEL", "sd3-medium")
    STABILITY_TIMEOUT_SECONDS: float = _get_float.__func__("STABILITY_TIMEOUT_SECONDS", 120.0)

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOGS_DIR: str = os.getenv(
        "LOGS_DIR", os.path.join(os.path.dirname(os.path.abspath(__file__)), "logs")
    )

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = _get_int.__func__("PORT", 8000)

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration."""
        if not cls.STABILITY_API_KEY:
            raise ValueError("STABILITY_API_KEY environment variable is required")

    @classmethod
    def has_stability_api_key(cls) -> bool:
        return bool(cls.STABILITY_API_KEY)

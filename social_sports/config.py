"""Client configuration via environment variables."""
from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "http://localhost:8080/api"


def normalize_base_url(url: str) -> str:
    """Return ``url`` without a trailing slash and ending in exactly one ``/api``."""
    url = (url or "").strip().rstrip("/")
    if not url:
        return DEFAULT_API_BASE_URL
    if url.endswith("/api"):
        return url
    return f"{url}/api"


class Settings(BaseSettings):
    """Settings loaded from .env or the environment (``SOCIAL_SPORTS_`` prefix)."""

    API_BASE_URL: str = DEFAULT_API_BASE_URL
    TOKEN_FILE: str = "~/.social_sports/session.json"
    REQUEST_TIMEOUT: Optional[float] = 10.0
    REGISTRATION_ENDPOINTS: list[str] = ["/users/register"]
    WHATSAPP_PROBE_PATH: str = "/whatsapp/status"
    DISPLAY_TIMEZONE: str = "UTC"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="SOCIAL_SPORTS_", extra="ignore")

    @field_validator("API_BASE_URL")
    @classmethod
    def _normalize_api_base_url(cls, value: str) -> str:
        return normalize_base_url(value)

    @field_validator("REGISTRATION_ENDPOINTS")
    @classmethod
    def _require_registration_endpoint(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("At least one registration endpoint is required")
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

"""Client settings loaded from keyword arguments or ``JSONAPI_*`` environment variables."""

from typing import Dict

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class JSONAPISettings(BaseSettings):
    """
    Settings for a JSON:API store.

    Environment variables use the ``JSONAPI_`` prefix, e.g.
    ``JSONAPI_ENDPOINT``, ``JSONAPI_KEBAB_CASE``, ``JSONAPI_HEADERS`` (JSON).
    """

    model_config = SettingsConfigDict(
        env_prefix="JSONAPI_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    endpoint: str

    # Convert kebab-case member names to camelCase on read
    kebab_case: bool = False
    # Convert camelCase record keys back to kebab-case on write
    dasherize_writes: bool = False

    timeout: float = 30.0
    headers: Dict[str, str] = {}
    atomic_path: str = "operations"

    @field_validator("endpoint")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("endpoint must be an absolute http(s) URL")
        return v.rstrip("/")

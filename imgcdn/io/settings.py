"""
Settings for the delivery URL encoder and the attachment metadata API.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

IMGCDN_ENV_FILENAME = "imgcdn.env"


class DeliverySettings(BaseSettings):
    """
    Settings model for URL delivery via environment variables
    or other settings sources supported by `pydantic-settings`.
    """

    CDN_BASE_URL: str = "https://cdn.bfldr.com"
    DEFAULT_FORMAT: Optional[str] = "jpg"
    PASSTHROUGH_FORMATS: List[str] = Field(default_factory=lambda: ["gif", "svg"])
    EXTRA_PARAMS: Dict[str, str] = Field(default_factory=dict)

    API_URL: str = "https://brandfolder.com/api/v4"
    API_KEY: Optional[SecretStr] = None
    API_RETRY_COUNT: int = 3
    API_RETRY_SLEEP_SEC: float = 1

    model_config = SettingsConfigDict(
        env_prefix="IMGCDN_",
        env_file=IMGCDN_ENV_FILENAME,
        extra="ignore",
    )

    @field_validator("CDN_BASE_URL", "API_URL")
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("DEFAULT_FORMAT")
    def normalize_format(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip().lower().lstrip(".")
        return v or None

    @field_validator("PASSTHROUGH_FORMATS")
    def normalize_passthrough(cls, v: List[str]) -> List[str]:
        return [item.strip().lower().lstrip(".") for item in v if item.strip()]

    def validate_credentials(self) -> None:
        """Validate that the metadata API can be reached with these settings."""
        if self.API_KEY is None or not self.API_KEY.get_secret_value():
            raise ValueError("IMGCDN_API_KEY is missing.")

"""Typed settings loader for the Meteomatics connector."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import AnyUrl, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError

DEFAULT_API_BASE_URL = "https://api.meteomatics.com"


class Settings(BaseSettings):
    """Connector settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    meteomatics_api_base_url: AnyUrl = Field(
        default=AnyUrl(DEFAULT_API_BASE_URL),
        alias="METEOMATICS_API_BASE_URL",
    )
    meteomatics_username: str = Field(alias="METEOMATICS_USERNAME")
    meteomatics_password: str = Field(alias="METEOMATICS_PASSWORD", repr=False)
    meteomatics_timeout_seconds: float = Field(default=10.0, alias="METEOMATICS_TIMEOUT_SECONDS")
    meteomatics_user_agent: str = Field(
        default="meteomatics-connector/0.1",
        alias="METEOMATICS_USER_AGENT",
    )

    journal_dir: Path = Field(default=Path("./data/journal"), alias="JOURNAL_DIR")
    raw_payload_dir: Path = Field(default=Path("./data/raw"), alias="RAW_PAYLOAD_DIR")
    journal_raw_payloads: bool = Field(default=True, alias="JOURNAL_RAW_PAYLOADS")
    query_max_print: int = Field(default=24, alias="QUERY_MAX_PRINT")

    @field_validator("meteomatics_username", "meteomatics_password", mode="before")
    @classmethod
    def strip_credentials(cls, value: Any) -> Any:
        """Drop surrounding whitespace picked up from `.env` files."""
        if isinstance(value, str):
            return value.strip()
        return value

    @model_validator(mode="after")
    def validate_settings(self) -> Settings:
        """Validate credentials and numeric limits."""
        if not self.meteomatics_username:
            raise ValueError("METEOMATICS_USERNAME must not be empty.")
        if not self.meteomatics_password:
            raise ValueError("METEOMATICS_PASSWORD must not be empty.")
        if self.meteomatics_api_base_url.scheme not in {"http", "https"}:
            raise ValueError("METEOMATICS_API_BASE_URL must be an http(s) URL.")
        if self.meteomatics_timeout_seconds <= 0:
            raise ValueError("METEOMATICS_TIMEOUT_SECONDS must be > 0.")
        if not self.meteomatics_user_agent.strip():
            raise ValueError("METEOMATICS_USER_AGENT must not be empty.")
        if self.query_max_print <= 0:
            raise ValueError("QUERY_MAX_PRINT must be > 0.")
        return self

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for journaling (no credentials)."""
        return {
            "base_url": str(self.meteomatics_api_base_url),
            "username": self.meteomatics_username,
            "timeout_seconds": self.meteomatics_timeout_seconds,
            "raw_journaling": self.journal_raw_payloads,
            "max_print": self.query_max_print,
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        settings = Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc

    settings.journal_dir.mkdir(parents=True, exist_ok=True)
    settings.raw_payload_dir.mkdir(parents=True, exist_ok=True)
    return settings

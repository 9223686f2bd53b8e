"""
config.py — Centralized Client Configuration Loader

Purpose:
- Define a single source of truth for client settings.
- Load and validate environment variables from `.env` or OS environment.

Settings cover:
- The XBRL US dispatch endpoint and HTTP defaults
- The API key (inline or read from a key file)
- Log level

This module does NOT:
- Make external API calls.
- Raise when the API key is missing (see core/credentials.py; the CIK lookup
  works without one).
"""

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# config.py is at: xbrlus/core/config.py, .env is looked up at the project root
_CONFIG_DIR = Path(__file__).parent
_PROJECT_DIR = _CONFIG_DIR.parent.parent
_ENV_FILE = _PROJECT_DIR / ".env"

if _ENV_FILE.exists():
    _ENV_FILE_PATH = str(_ENV_FILE.resolve())
else:
    # Fallback: pydantic looks for .env in CWD
    _ENV_FILE_PATH = ".env"


DEFAULT_XBRLUS_URL = "https://csuite.xbrl.us/php/dispatch.php"


class Settings(BaseSettings):
    """
    Settings container for the XBRL US client.

    Every field can be overridden with an environment variable of the same name.
    """
    XBRLUS_URL: str = Field(
        DEFAULT_XBRLUS_URL,
        description="XBRL US API dispatch endpoint",
    )
    XBRLUS_API_KEY: str = Field(
        "",
        description="XBRL US API key (required by every task except xbrlCIKLookup)",
    )
    XBRLUS_API_KEY_PATH: str = Field(
        "",
        description="Path to file containing the API key (alternative to XBRLUS_API_KEY)",
    )
    XBRLUS_USER_AGENT: str = Field(
        "xbrlus-python/0.1",
        description="User-Agent header sent with every request",
    )
    XBRLUS_REQUEST_TIMEOUT_SECONDS: int = Field(
        60,
        description="HTTP timeout for XBRL US requests (seconds)",
    )
    LOG_LEVEL: str = Field(
        "INFO",
        description="Root log level used by configure_logging()",
    )

    @field_validator("XBRLUS_API_KEY", mode="before")
    @classmethod
    def strip_api_key(cls, v: Any) -> str:
        """Strip whitespace from API key."""
        if isinstance(v, str):
            return v.strip()
        return v or ""

    @model_validator(mode="after")
    def load_api_key_from_file(self) -> "Settings":
        """Load API key from file if XBRLUS_API_KEY_PATH is provided."""
        if self.XBRLUS_API_KEY_PATH and not self.XBRLUS_API_KEY:
            key_path = Path(self.XBRLUS_API_KEY_PATH).expanduser()
            if not key_path.exists():
                raise ValueError(f"API key file not found: {key_path}")
            try:
                with key_path.open("r", encoding="utf-8") as f:
                    self.XBRLUS_API_KEY = f.read().strip()
            except OSError as e:
                raise ValueError(f"Failed to read API key from {key_path}: {e}") from e
        return self

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_PATH,
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Singleton pattern — settings imported anywhere will reference same object.
settings = Settings()

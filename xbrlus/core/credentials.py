"""
credentials.py — API key source for the XBRL US client.

The key is read once per process from settings (XBRLUS_API_KEY or the file
named by XBRLUS_API_KEY_PATH). A missing key raises before any network call.
"""

from __future__ import annotations

from typing import Optional

from xbrlus.core.config import Settings, settings as app_settings
from xbrlus.core.errors import XbrlUsConfigurationError


class CredentialSource:
    """Anything exposing `get() -> str` can supply the API key."""

    def get(self) -> str:
        raise NotImplementedError


class StaticCredentialSource(CredentialSource):
    """Credential passed in explicitly (tests, notebooks)."""

    def __init__(self, api_key: str):
        self._api_key = api_key

    def get(self) -> str:
        if not self._api_key or not self._api_key.strip():
            raise XbrlUsConfigurationError("API key is empty.")
        return self._api_key.strip()


class EnvCredentialSource(CredentialSource):
    """Credential from environment-backed settings, memoized after the first read."""

    def __init__(self, config: Optional[Settings] = None):
        self._config = config or app_settings
        self._cached: Optional[str] = None

    def get(self) -> str:
        if self._cached is None:
            key = self._config.XBRLUS_API_KEY
            if not key:
                raise XbrlUsConfigurationError(
                    "XBRLUS_API_KEY environment variable is empty. "
                    "Set XBRLUS_API_KEY (or XBRLUS_API_KEY_PATH) to your XBRL US API key."
                )
            self._cached = key
        return self._cached


_default_source: Optional[EnvCredentialSource] = None


def default_credential_source() -> EnvCredentialSource:
    """Process-wide credential source shared by clients built without one."""
    global _default_source
    if _default_source is None:
        _default_source = EnvCredentialSource()
    return _default_source

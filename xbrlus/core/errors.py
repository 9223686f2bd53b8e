"""
errors.py — Exception hierarchy for XBRL US client failures.

Configuration, transport and parse errors are fatal to the operation that
raised them and propagate to the caller unmodified. An empty result is not
an error.
"""

from typing import Optional


class XbrlUsClientError(RuntimeError):
    """Base exception for XBRL US client failures."""


class XbrlUsConfigurationError(XbrlUsClientError):
    """Raised when required configuration (the API key) is missing or invalid."""


class XbrlUsTransportError(XbrlUsClientError):
    """Raised on HTTP status >= 400, a non-XML content type or a connection failure."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class XbrlUsParseError(XbrlUsClientError):
    """Raised when a response body is not well-formed XML."""

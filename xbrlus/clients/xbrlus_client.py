"""
xbrlus_client.py — HTTP client for the XBRL US dispatch endpoint.

Responsibilities:
- Direct HTTP communication with the XBRL US API (no caching, no retries)
- Attach the API key to every task that needs one
- Validate status code and content type
- Parse the XML body into a Document

Every API task goes through one GET against the same dispatch URL; the task
name travels in the `Task` query parameter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

import requests

from xbrlus.core.config import settings
from xbrlus.core.credentials import CredentialSource, default_credential_source
from xbrlus.core.errors import XbrlUsTransportError
from xbrlus.core.logging import get_logger
from xbrlus.normalization.document import Document, parse_document, xml_text_summary


logger = get_logger(__name__)


XML_CONTENT_TYPES = ("text/xml", "application/xml")


@dataclass(frozen=True)
class XbrlUsClientSettings:
    url: str
    user_agent: str
    timeout_seconds: int

    @classmethod
    def from_app_settings(cls) -> "XbrlUsClientSettings":
        return cls(
            url=settings.XBRLUS_URL,
            user_agent=settings.XBRLUS_USER_AGENT,
            timeout_seconds=settings.XBRLUS_REQUEST_TIMEOUT_SECONDS,
        )


class XbrlUsClient:
    """
    Thin wrapper over `requests.Session` for the XBRL US dispatch endpoint.

    Sync/blocking; a failed request is fatal and is not retried.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        config: Optional[XbrlUsClientSettings] = None,
        credentials: Optional[CredentialSource] = None,
    ):
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._config = config or XbrlUsClientSettings.from_app_settings()
        self._credentials = credentials or default_credential_source()
        self._session.headers.update({"Accept": "text/xml", "User-Agent": self._config.user_agent})

    def close(self) -> None:
        """Close the session if this client created it; injected sessions belong to the caller."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "XbrlUsClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # --------------------------------------------------------------------- #
    # Public API
    # --------------------------------------------------------------------- #
    def execute(
        self,
        task: str,
        params: Mapping[str, Optional[str]],
        requires_credential: bool = True,
    ) -> Document:
        """
        Run one remote task and return the parsed response.

        Parameters with a None value are left out of the query string.

        Raises:
            XbrlUsConfigurationError: if a key is required but not configured
                (before any request is sent).
            XbrlUsTransportError: on connection failure, HTTP status >= 400
                or a non-XML response.
            XbrlUsParseError: if the body is not well-formed XML.
        """
        query = self._build_query(task, params, requires_credential)
        response = self._request(task, query)
        self._validate(response)
        return parse_document(response.content)

    # ------------------------------------------------------------------ #
    # Request helpers
    # ------------------------------------------------------------------ #
    def _build_query(
        self,
        task: str,
        params: Mapping[str, Optional[str]],
        requires_credential: bool,
    ) -> List[Tuple[str, str]]:
        query: List[Tuple[str, str]] = [("Task", task)]
        query.extend((name, value) for name, value in params.items() if value is not None)
        if requires_credential:
            query.append(("API_Key", self._credentials.get()))
        return query

    def _request(self, task: str, query: List[Tuple[str, str]]) -> requests.Response:
        logger.debug(
            "Requesting %s with %s",
            task,
            [name for name, _ in query if name not in ("Task", "API_Key")],
        )
        try:
            return self._session.get(
                self._config.url, params=query, timeout=self._config.timeout_seconds
            )
        except requests.RequestException as e:
            logger.warning("XBRL US request for %s failed: %s", task, e)
            raise XbrlUsTransportError(f"Request for {task} failed: {e}") from e

    def _validate(self, response: requests.Response) -> None:
        if response.status_code >= 400:
            body = response.text
            message = xml_text_summary(response.content)
            if message is None:
                message = body
            logger.warning("XBRL US returned HTTP %s", response.status_code)
            raise XbrlUsTransportError(
                f"HTTP error: {response.status_code}\n{message}",
                status_code=response.status_code,
                body=body,
            )

        content_type = response.headers.get("content-type", "")
        if not content_type.lower().startswith(XML_CONTENT_TYPES):
            raise XbrlUsTransportError(
                "Returned message is not an xml",
                status_code=response.status_code,
                body=response.text,
            )

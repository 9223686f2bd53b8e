"""
Shared fixtures: a fake requests.Session that replays canned XML responses.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from xbrlus.clients.xbrlus_client import XbrlUsClient, XbrlUsClientSettings
from xbrlus.core.credentials import StaticCredentialSource


TEST_URL = "https://xbrlus.test/php/dispatch.php"


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200, content_type: str = "text/xml; charset=UTF-8"):
        self.text = text
        self.content = text.encode("utf-8")
        self.status_code = status_code
        self.headers = {"content-type": content_type}


class FakeSession:
    """Records every GET and answers with the next queued response."""

    def __init__(self, responses: Optional[List[FakeResponse]] = None):
        self.headers: Dict[str, str] = {}
        self.responses = list(responses or [])
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def close(self) -> None:
        self.closed = True

    def get(self, url: str, params=None, timeout=None) -> FakeResponse:
        self.calls.append({"url": url, "params": list(params or []), "timeout": timeout})
        if not self.responses:
            raise AssertionError("Unexpected extra request")
        return self.responses.pop(0)

    def query(self, index: int) -> Dict[str, str]:
        return dict(self.calls[index]["params"])


def xml_response(body: str, **kwargs: Any) -> FakeResponse:
    return FakeResponse('<?xml version="1.0" encoding="UTF-8"?>' + body, **kwargs)


@pytest.fixture
def make_client():
    """Build a client over a FakeSession queued with `responses`."""

    def _make(*responses: FakeResponse, api_key: str = "test-key"):
        session = FakeSession(list(responses))
        client = XbrlUsClient(
            session=session,
            config=XbrlUsClientSettings(url=TEST_URL, user_agent="xbrlus-tests", timeout_seconds=5),
            credentials=StaticCredentialSource(api_key),
        )
        return client, session

    return _make

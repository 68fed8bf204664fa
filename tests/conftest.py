"""Pytest configuration and shared fixtures.

The wiki is faked with ``httpx.MockTransport``: a test supplies a responder
(request -> httpx.Response, or a coroutine returning one) and gets back a real
MediaWikiClient plus the list of requests it sent.

asyncio_mode = auto (pyproject.toml), so async tests need no marker.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Union

import httpx
import pytest

from core.config import WikiConfig
from core.wiki_client import MediaWikiClient

BASE_URL = "https://wiki.example.org/w"

Responder = Callable[[httpx.Request], Union[httpx.Response, Awaitable[httpx.Response]]]


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=payload)


def query_params(request: httpx.Request) -> dict[str, str]:
    return dict(request.url.params)


class FakeWiki:
    """Records every request and answers with ``responder``."""

    def __init__(self, responder: Responder) -> None:
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def handle(self, request: httpx.Request) -> Union[httpx.Response, Awaitable[httpx.Response]]:
        # MockTransport awaits the result when the responder is a coroutine
        self.requests.append(request)
        return self.responder(request)

    @property
    def last_params(self) -> dict[str, str]:
        return query_params(self.requests[-1])


@pytest.fixture
def wiki_config() -> WikiConfig:
    return WikiConfig(base_url=BASE_URL + "/")


@pytest.fixture
async def make_client(wiki_config: WikiConfig):
    """Factory: ``make_client(responder, config=None) -> (client, fake_wiki)``."""
    clients: list[MediaWikiClient] = []

    def _make(responder: Responder, config: WikiConfig | None = None) -> tuple[MediaWikiClient, FakeWiki]:
        fake = FakeWiki(responder)
        http = httpx.AsyncClient(transport=httpx.MockTransport(fake.handle))
        client = MediaWikiClient(config or wiki_config, http_client=http)
        clients.append(client)
        return client, fake

    yield _make

    for client in clients:
        await client._http.aclose()

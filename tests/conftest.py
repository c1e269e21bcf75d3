"""Shared fixtures for unit tests.

HTTP traffic is served by ``httpx.MockTransport``; every request the client
sends is recorded so tests can assert on the wire format.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from ptcloud_client import CloudClient, CloudConfig
from ptcloud_client.auth import TokenStore

Handler = Callable[[httpx.Request], httpx.Response]

_OAUTH_PARAM = re.compile(r'(oauth_[a-z_]+)="([^"]*)"')


def oauth_params(request: httpx.Request) -> dict[str, str]:
    """Parse the OAuth parameters of a request's Authorization header."""
    header = request.headers.get("Authorization", "")
    return dict(_OAUTH_PARAM.findall(header))


class RecordingHandler:
    """MockTransport handler that records requests before answering."""

    def __init__(self, handler: Handler) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        return self.handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def config() -> CloudConfig:
    """Create a test configuration."""
    return CloudConfig(consumer_key="test_key", consumer_secret="test_secret")


@pytest.fixture
def make_client(
    config: CloudConfig, tmp_path: Path
) -> Callable[..., tuple[CloudClient, RecordingHandler]]:
    """Factory for a client wired to a mock transport.

    Usage:
        client, recorder = make_client(lambda request: httpx.Response(200, json={}))
    """

    def _make(
        handler: Handler,
        *,
        authenticated: bool = True,
        client_config: CloudConfig | None = None,
    ) -> tuple[CloudClient, RecordingHandler]:
        recorder = RecordingHandler(handler)
        http_client = httpx.Client(transport=httpx.MockTransport(recorder))
        client = CloudClient(
            client_config or config,
            token_store=TokenStore(tmp_path / "tokens.json"),
            http_client=http_client,
        )
        if authenticated:
            client.set_access_token("access_token", "access_secret")
        return client, recorder

    return _make

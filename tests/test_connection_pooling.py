"""Tests for connection pooling functionality."""

import httpx
import pytest

from ptcloud_client import CloudClient, CloudConfig


@pytest.fixture
def config() -> CloudConfig:
    """Create a test configuration."""
    return CloudConfig(
        consumer_key="test_key",
        consumer_secret="test_secret",
        sandbox=True,
    )


class TestContextManager:
    """Tests for context manager usage."""

    def test_context_manager_creates_http_client(self, config: CloudConfig) -> None:
        """Context manager should create an http client on entry."""
        with CloudClient(config) as client:
            assert client._http_client is not None
            assert isinstance(client._http_client, httpx.Client)

    def test_context_manager_closes_http_client(self, config: CloudConfig) -> None:
        """Context manager should close http client on exit."""
        with CloudClient(config) as client:
            http_client = client._http_client
            assert http_client is not None

        assert client._http_client is None
        assert http_client.is_closed

    def test_context_manager_propagates_to_session_and_api_modules(
        self, config: CloudConfig
    ) -> None:
        """Context manager should set http client on the session and all API modules."""
        with CloudClient(config) as client:
            http_client = client._http_client
            assert client.auth._http_client is http_client
            assert client.account._http_client is http_client
            assert client.files._http_client is http_client
            assert client.fileops._http_client is http_client
            assert client.sharing._http_client is http_client


class TestExternalHttpClient:
    """Tests for external http client usage."""

    def test_external_client_is_used(self, config: CloudConfig) -> None:
        """External http client should be used by the session and API modules."""
        with httpx.Client(timeout=60.0) as external_client:
            client = CloudClient(config, http_client=external_client)

            assert client._http_client is external_client
            assert client.auth._http_client is external_client
            assert client.account._http_client is external_client
            assert client.files._http_client is external_client
            assert client.fileops._http_client is external_client
            assert client.sharing._http_client is external_client

    def test_external_client_not_closed_by_context_manager(self, config: CloudConfig) -> None:
        """External http client should NOT be closed when exiting context manager."""
        with httpx.Client(timeout=60.0) as external_client:
            with CloudClient(config, http_client=external_client) as client:
                assert client._http_client is external_client

            assert not external_client.is_closed
            assert client._http_client is external_client

    def test_external_client_receives_requests(self, config: CloudConfig) -> None:
        """Requests should go through the external client's transport."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"display_name": "Test"})

        with httpx.Client(transport=httpx.MockTransport(handler)) as external_client:
            client = CloudClient(config, http_client=external_client)
            client.set_access_token("token", "secret")
            result = client.account.account_info()

        assert result.ok
        assert len(seen) == 1


class TestManualOpenClose:
    """Tests for manual open/close without context manager."""

    def test_open_creates_client(self, config: CloudConfig) -> None:
        """open() should create an http client."""
        client = CloudClient(config)
        assert client._http_client is None

        client.open()
        try:
            assert client._http_client is not None
        finally:
            client.close()

    def test_close_clears_client(self, config: CloudConfig) -> None:
        """close() should clear the http client."""
        client = CloudClient(config)
        client.open()
        client.close()

        assert client._http_client is None
        assert client.files._http_client is None
        assert client.auth._http_client is None

    def test_open_is_idempotent(self, config: CloudConfig) -> None:
        """Calling open() twice should keep the first pool."""
        client = CloudClient(config)
        client.open()
        try:
            first = client._http_client
            client.open()
            assert client._http_client is first
        finally:
            client.close()

    def test_close_without_open_is_safe(self, config: CloudConfig) -> None:
        """close() on a never-opened client should do nothing."""
        client = CloudClient(config)
        client.close()
        assert client._http_client is None


class TestNoPooling:
    """Tests for usage without a pool."""

    def test_api_modules_start_without_client(self, config: CloudConfig) -> None:
        """Without a pool each request creates its own client."""
        client = CloudClient(config)
        assert client.files._http_client is None
        assert client.auth._http_client is None

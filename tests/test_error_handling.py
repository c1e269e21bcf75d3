"""Tests for error types, the Result wrapper and response normalization."""

import httpx
import pytest

from ptcloud_client.exceptions import (
    CloudAuthError,
    CloudError,
    CloudLocalIOError,
    CloudTransportError,
    CloudValidationError,
)
from ptcloud_client.models.responses import Decoded, Raw
from ptcloud_client.result import Result

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"


class TestExceptionHierarchy:
    """All client errors share a common base."""

    @pytest.mark.parametrize(
        "error",
        [
            CloudValidationError("bad", field="path"),
            CloudAuthError("401 Unauthorized", stage="request_token", status_code=401),
            CloudTransportError("500 Internal Server Error", status_code=500),
            CloudLocalIOError("cannot read", path="/tmp/x"),
        ],
    )
    def test_subclasses_cloud_error(self, error: CloudError) -> None:
        assert isinstance(error, CloudError)
        assert str(error) == error.message

    def test_validation_error_field(self) -> None:
        error = CloudValidationError("Parameter 'path' is required.", field="path")
        assert error.field == "path"

    def test_auth_error_attributes(self) -> None:
        response = Decoded(data={"http_response_code": 403}, status_code=403)
        error = CloudAuthError(
            "403 Forbidden",
            stage="protected_resource",
            status_code=403,
            response=response,
        )
        assert error.stage == "protected_resource"
        assert error.status_code == 403
        assert error.response is response

    def test_transport_error_without_response(self) -> None:
        """Network failures have no status code."""
        error = CloudTransportError("connection refused")
        assert error.status_code is None
        assert error.response is None


class TestResult:
    """Tests for the Result wrapper."""

    def test_success(self) -> None:
        result = Result.success(42)
        assert result.ok
        assert bool(result)
        assert result.value == 42
        assert result.error is None
        assert result.unwrap() == 42

    def test_failure(self) -> None:
        error = CloudValidationError("bad")
        result: Result[int] = Result.failure(error)
        assert not result.ok
        assert not result
        assert result.value is None
        assert result.error is error

    def test_unwrap_raises_stored_error(self) -> None:
        error = CloudTransportError("404 Not Found", status_code=404)
        result: Result[int] = Result.failure(error)
        with pytest.raises(CloudTransportError) as exc_info:
            result.unwrap()
        assert exc_info.value is error


class TestResponseNormalization:
    """Tests for how response bodies become Decoded or Raw."""

    def test_json_object_gets_status_code(self, make_client) -> None:
        client, _ = make_client(lambda request: httpx.Response(200, json={"size": 10, "path": "/x"}))

        response = client.files.metadata("/x").unwrap()

        assert isinstance(response, Decoded)
        assert response.data == {"size": 10, "path": "/x", "http_response_code": 200}
        assert response.payload == {"size": 10, "path": "/x"}
        assert response["size"] == 10
        assert response.get("missing", "default") == "default"

    def test_json_array_is_not_augmented(self, make_client) -> None:
        client, _ = make_client(lambda request: httpx.Response(200, json=[{"path": "/a"}]))

        response = client.files.search("a").unwrap()

        assert isinstance(response, Decoded)
        assert response.data == [{"path": "/a"}]
        assert response.status_code == 200
        assert response.get("path") is None

    def test_binary_body_is_raw(self, make_client) -> None:
        client, _ = make_client(
            lambda request: httpx.Response(
                200, content=PNG_BYTES, headers={"Content-Type": "image/png"}
            )
        )

        response = client.files.get_file("/Photos/logo.png").unwrap()

        assert isinstance(response, Raw)
        assert response.content == PNG_BYTES
        assert response.content_type == "image/png"
        assert response.status_code == 200

    def test_plain_text_body_is_raw(self, make_client) -> None:
        client, _ = make_client(lambda request: httpx.Response(200, content=b"hello world"))

        response = client.files.get_file("/notes.txt").unwrap()

        assert isinstance(response, Raw)
        assert response.content == b"hello world"

    def test_empty_success_body(self, make_client) -> None:
        client, _ = make_client(lambda request: httpx.Response(200))

        response = client.fileops.create_folder("/New").unwrap()

        assert isinstance(response, Decoded)
        assert response.data == {"http_response_code": 200}

    def test_not_found_carries_only_status(self, make_client) -> None:
        client, _ = make_client(lambda request: httpx.Response(404))

        result = client.files.metadata("/missing")

        assert not result.ok
        assert isinstance(result.error, CloudTransportError)
        assert result.error.status_code == 404
        assert result.error.response == Decoded(
            data={"http_response_code": 404}, status_code=404
        )
        assert client.error() == "404 Not Found"

    def test_error_body_is_discarded(self, make_client) -> None:
        """Error responses keep only the status, whatever the body says."""
        client, _ = make_client(
            lambda request: httpx.Response(500, json={"error": "internal"})
        )

        result = client.files.list("/")

        assert isinstance(result.error, CloudTransportError)
        assert result.error.response is not None
        assert result.error.response.data == {"http_response_code": 500}

    @pytest.mark.parametrize("status", [401, 403])
    def test_credential_rejection_is_auth_error(self, make_client, status: int) -> None:
        client, _ = make_client(lambda request: httpx.Response(status))

        result = client.account.account_info()

        assert isinstance(result.error, CloudAuthError)
        assert result.error.stage == "protected_resource"
        assert result.error.status_code == status
        assert result.error.response is not None
        assert result.error.response.data == {"http_response_code": status}

    def test_network_failure_is_transport_error(self, make_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client, _ = make_client(handler)

        result = client.account.account_info()

        assert isinstance(result.error, CloudTransportError)
        assert result.error.status_code is None
        assert "connection refused" in client.error()


class TestLastError:
    """Tests for the last-error side channel."""

    def test_cleared_by_success(self, make_client) -> None:
        responses = iter([httpx.Response(500), httpx.Response(200, json={})])
        client, _ = make_client(lambda request: next(responses))

        client.account.account_info()
        assert client.error() == "500 Internal Server Error"

        client.account.account_info()
        assert client.error() == ""

    def test_validation_failure_sends_nothing(self, make_client) -> None:
        client, recorder = make_client(lambda request: httpx.Response(200, json={}))

        result = client.files.revisions("")

        assert isinstance(result.error, CloudValidationError)
        assert result.error.field == "path"
        assert client.error() == "Parameter 'path' is required."
        assert recorder.requests == []

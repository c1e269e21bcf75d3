"""Typed errors for the CloudPT / MEO Cloud client."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ptcloud_client.models.responses import ApiResponse


class CloudError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class CloudValidationError(CloudError):
    """Invalid argument or configuration, detected before any request is sent."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class CloudAuthError(CloudError):
    """OAuth handshake failure or a protected resource refusing our credentials."""

    def __init__(
        self,
        message: str,
        *,
        stage: str | None = None,  # "request_token", "access_token", "protected_resource"
        status_code: int | None = None,
        response: ApiResponse | None = None,
    ) -> None:
        self.stage = stage
        self.status_code = status_code
        self.response = response
        super().__init__(message)


class CloudTransportError(CloudError):
    """Unsuccessful HTTP exchange (non-2xx status or network failure)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        response: ApiResponse | None = None,
    ) -> None:
        self.status_code = status_code  # None when no response was received
        self.response = response
        super().__init__(message)


class CloudLocalIOError(CloudError):
    """Local file could not be read for upload."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        self.path = path
        super().__init__(message)

"""Response variants produced by the request dispatcher."""

from typing import Any

from pydantic import BaseModel, Field

STATUS_FIELD = "http_response_code"


class Decoded(BaseModel):
    """JSON response body.

    When the body is a JSON object, ``data`` also holds the HTTP status code
    under ``http_response_code``.
    """

    data: Any = Field(description="Decoded JSON value")
    status_code: int = Field(description="HTTP status code")

    @property
    def payload(self) -> Any:
        """The decoded body without the injected status field."""
        if isinstance(self.data, dict):
            return {k: v for k, v in self.data.items() if k != STATUS_FIELD}
        return self.data

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a key when the decoded value is a mapping."""
        if isinstance(self.data, dict):
            return self.data.get(key, default)
        return default

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


class Raw(BaseModel):
    """Body that is not JSON, such as a downloaded file or a thumbnail."""

    content: bytes = Field(description="Unmodified response body")
    status_code: int = Field(description="HTTP status code")
    content_type: str | None = Field(default=None, description="Content-Type header, if any")


class SignedRequest(BaseModel):
    """A request signed for later use, with the OAuth parameters in its query string."""

    method: str = Field(description="HTTP method")
    url: str = Field(description="Fully signed URL")


ApiResponse = Decoded | Raw

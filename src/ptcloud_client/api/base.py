"""Request dispatcher shared by all API modules."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from ptcloud_client.api.commands import Payload
from ptcloud_client.auth.oauth import status_line
from ptcloud_client.exceptions import CloudAuthError, CloudTransportError, CloudValidationError
from ptcloud_client.models.responses import STATUS_FIELD, ApiResponse, Decoded, Raw, SignedRequest
from ptcloud_client.result import Result

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ptcloud_client.api.commands import Command
    from ptcloud_client.auth import OAuthSession
    from ptcloud_client.config import CloudConfig

logger = logging.getLogger(__name__)

_DUPLICATE_SLASHES = re.compile(r"/{2,}")

# Reserved characters left as-is in non-final segments by legacy escaping
_LEGACY_SAFE = "!$&'()*+,;=:@[]"


def normalize_path(path: str, *, escape_all: bool = True) -> str:
    """Normalize a remote path into URL path segments.

    Leading slashes are stripped, runs of slashes collapse to one, and reserved
    characters (space, ``[ ] ? # @ ! $ & ' ( ) * + , ; : =``) are
    percent-encoded.

    With ``escape_all=False`` only the final segment is fully escaped; earlier
    segments keep their reserved characters.

        >>> normalize_path("//Photos//a b.png")
        'Photos/a%20b.png'
    """
    path = _DUPLICATE_SLASHES.sub("/", path.lstrip("/"))
    if not path:
        return ""

    segments = path.split("/")
    if escape_all:
        return "/".join(quote(segment, safe="") for segment in segments)

    head = [quote(segment, safe=_LEGACY_SAFE) for segment in segments[:-1]]
    return "/".join([*head, quote(segments[-1], safe="")])


def require(value: str | None, field: str) -> CloudValidationError | None:
    """Validation error for a missing required argument, or None."""
    if value:
        return None
    return CloudValidationError(f"Parameter '{field}' is required.", field=field)


class BaseAPI:
    """Base class for API modules.

    Builds the URL for a command, signs it with the session's access token,
    sends it and normalizes the response into ``Decoded`` or ``Raw``.
    """

    def __init__(
        self,
        config: CloudConfig,
        auth: OAuthSession,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.config = config
        self.auth = auth
        self._http_client = http_client

    def set_http_client(self, http_client: httpx.Client | None) -> None:
        """Set the shared HTTP client for connection pooling."""
        self._http_client = http_client

    def build_url(
        self,
        command: Command,
        *,
        root: str | None = None,
        path: str | None = None,
    ) -> str:
        """Build ``https://<host>/1/<command>[/<root>][/<path>]``."""
        parts = [self.config.endpoint_base_url(command.endpoint), command.name]
        if root is not None:
            parts.append(quote(root, safe=""))
        if path is not None:
            normalized = normalize_path(path, escape_all=not self.config.legacy_path_escaping)
            if normalized:
                parts.append(normalized)
        return "/".join(parts)

    def presign(
        self,
        command: Command,
        *,
        root: str | None = None,
        path: str | None = None,
        options: Mapping[str, str] | None = None,
    ) -> SignedRequest:
        """Sign a command without sending it."""
        url = self.build_url(command, root=root, path=path)
        signed_url = self.auth.presign(command.method, url, dict(options) if options else None)
        return SignedRequest(method=command.method, url=signed_url)

    def _execute(
        self,
        command: Command,
        *,
        root: str | None = None,
        path: str | None = None,
        options: Mapping[str, str] | None = None,
        content: bytes | None = None,
    ) -> Result[ApiResponse]:
        """Execute a command against the protected resources.

        Args:
            command: Command descriptor
            root: Namespace segment (e.g. ``meocloud``, ``sandbox`` or a share id)
            path: Remote path, normalized by ``normalize_path``
            options: Query string or form body, depending on the command payload
            content: Raw body for upload commands

        Returns:
            Result holding the normalized response. Failed calls carry a
            ``CloudAuthError`` (401/403) or ``CloudTransportError`` whose
            ``response`` is the normalized body.
        """
        url = self.build_url(command, root=root, path=path)

        query: dict[str, str] = {}
        form: dict[str, str] = {}
        if options:
            if command.payload is Payload.FORM:
                form = {k: str(v) for k, v in options.items()}
            else:
                query = {k: str(v) for k, v in options.items()}

        # Query and form parameters are covered by the signature, a raw body is not
        headers = self.auth.sign_request(command.method, url, {**query, **form} or None)

        logger.debug("Request: %s %s", command.method, url)
        if self.config.debug:
            logger.debug("Params: %s", query or form)
            token = self.auth.access_token
            if token:
                logger.debug("Access Token: '%s'", token.token)
                logger.debug("Access Secret: '%s'", token.token_secret)

        try:
            response = self._send(
                command.method,
                url,
                headers=headers,
                params=query,
                data=form,
                content=content,
            )
        except httpx.HTTPError as e:
            return self.auth.record_failure(
                CloudTransportError(f"{command.method} {url} failed: {e}")
            )

        result = self._handle_response(response)

        if self.config.debug and isinstance(result, Decoded):
            logger.debug("Response content: '%s'", result.data)

        if response.is_success:
            self.auth.record_success()
            return Result.success(result)

        if response.status_code in (401, 403):
            return self.auth.record_failure(
                CloudAuthError(
                    status_line(response),
                    stage="protected_resource",
                    status_code=response.status_code,
                    response=result,
                )
            )

        return self.auth.record_failure(
            CloudTransportError(
                status_line(response),
                status_code=response.status_code,
                response=result,
            )
        )

    def _send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        params: dict[str, str],
        data: dict[str, str],
        content: bytes | None,
    ) -> httpx.Response:
        kwargs: dict[str, Any] = {"headers": headers}
        if params:
            kwargs["params"] = params
        if method == "POST":
            if data:
                kwargs["data"] = data
            elif content is not None:
                kwargs["content"] = content
                headers["Content-Type"] = "application/octet-stream"

        if self._http_client is not None:
            # Use shared connection pool
            return self._http_client.request(method, url, **kwargs)

        # Fallback: create per-request client (no pooling)
        with httpx.Client(timeout=self.config.timeout) as client:
            return client.request(method, url, **kwargs)

    def _handle_response(self, response: httpx.Response) -> ApiResponse:
        """Normalize a response body.

        - non-2xx or empty body: ``Decoded({"http_response_code": status})``
        - JSON body: ``Decoded``, objects augmented with ``http_response_code``
        - anything else (file content, thumbnails): ``Raw``, unmodified
        """
        status = response.status_code

        if not response.is_success or not response.content:
            return Decoded(data={STATUS_FIELD: status}, status_code=status)

        try:
            data = response.json()
        except ValueError:
            # Not JSON; file content
            return Raw(
                content=response.content,
                status_code=status,
                content_type=response.headers.get("Content-Type"),
            )

        if isinstance(data, dict):
            data[STATUS_FIELD] = status
        return Decoded(data=data, status_code=status)

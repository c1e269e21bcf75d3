"""OAuth 1.0a session for the CloudPT / MEO Cloud APIs."""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import secrets
import time
from typing import TYPE_CHECKING, TypeVar
from urllib.parse import parse_qs, quote, urlencode

import httpx

from ptcloud_client.config import OUT_OF_BAND
from ptcloud_client.exceptions import (
    CloudAuthError,
    CloudError,
    CloudTransportError,
    CloudValidationError,
)
from ptcloud_client.models.auth import AccessToken, RequestToken
from ptcloud_client.result import Result

T = TypeVar("T")

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ptcloud_client.config import CloudConfig

logger = logging.getLogger(__name__)


def percent_encode(value: str) -> str:
    """RFC 3986 percent-encoding as required by OAuth 1.0a (section 3.6)."""
    return quote(value, safe="~")


def signature_base_string(method: str, url: str, params: Mapping[str, str]) -> str:
    """Build the OAuth 1.0a signature base string.

    ``url`` must not contain a query string; query and form-body parameters
    belong in ``params``.
    """
    pairs = sorted((percent_encode(k), percent_encode(v)) for k, v in params.items())
    param_string = "&".join(f"{k}={v}" for k, v in pairs)
    return "&".join([method.upper(), percent_encode(url), percent_encode(param_string)])


def status_line(response: httpx.Response) -> str:
    """Status line of a response, e.g. ``401 Unauthorized``."""
    return f"{response.status_code} {response.reason_phrase}".strip()


def _parse_token_response(body: str) -> tuple[str, str]:
    data = parse_qs(body)
    token = data.get("oauth_token", [""])[0]
    token_secret = data.get("oauth_token_secret", [""])[0]
    return token, token_secret


class OAuthSession:
    """Credential state and the OAuth 1.0a handshake.

    Implements the three-step flow:
    1. ``login()`` obtains a request token and returns the authorization URL
    2. The user authorizes the application and receives a verifier (PIN)
    3. ``authorize(verifier)`` exchanges the request token for an access token

    Failures never raise. Each step returns a ``Result`` and records a
    human-readable message, available from ``error()``.
    """

    def __init__(
        self,
        config: CloudConfig,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.config = config
        self._http_client = http_client
        self._access_token: AccessToken | None = None
        self._request_token: str | None = None
        self._request_token_secret: str | None = None
        self.last_error = ""

    def set_http_client(self, http_client: httpx.Client | None) -> None:
        """Set the shared HTTP client for connection pooling."""
        self._http_client = http_client

    @property
    def is_authenticated(self) -> bool:
        """Check if we hold an access token pair."""
        return self._access_token is not None

    @property
    def access_token(self) -> AccessToken | None:
        """Get current access token if authenticated."""
        return self._access_token

    @property
    def request_token(self) -> str | None:
        """Request token obtained by the last successful ``login()``."""
        return self._request_token

    def set_access_token(self, token: AccessToken) -> None:
        """Set access token (e.g., loaded from storage)."""
        self._access_token = token

    def error(self) -> str:
        """Last recorded error message, empty when the last operation succeeded."""
        return self.last_error

    def record_success(self) -> None:
        self.last_error = ""

    def record_failure(self, error: CloudError) -> Result[T]:
        """Store ``error`` as the last error and wrap it in a failed ``Result``."""
        self.last_error = error.message
        logger.warning("ERROR: %s", error.message)
        return Result.failure(error)

    def login(self) -> Result[RequestToken]:
        """Step 1: get a request token and build the authorization URL."""
        url = self.config.request_token_url

        oauth_params = self._build_oauth_params()
        oauth_params["oauth_callback"] = self.config.callback_url
        oauth_params["oauth_signature"] = self._generate_signature(
            method="POST",
            url=url,
            oauth_params=oauth_params,
            token_secret="",
        )

        try:
            response = self._post(url, oauth_params)
        except httpx.HTTPError as e:
            return self.record_failure(
                CloudTransportError(f"Request token request failed: {e}")
            )

        if not response.is_success:
            return self.record_failure(
                CloudAuthError(
                    status_line(response),
                    stage="request_token",
                    status_code=response.status_code,
                )
            )

        token, token_secret = _parse_token_response(response.text)
        if not token or not token_secret:
            return self.record_failure(
                CloudAuthError("Invalid request token response", stage="request_token")
            )

        # Replaces any request token left over from a previous login
        self._request_token = token
        self._request_token_secret = token_secret

        if self.config.debug:
            logger.debug("Request Token: '%s'", token)
            logger.debug("Request Secret: '%s'", token_secret)

        query = {"oauth_token": token}
        if self.config.callback_url and self.config.callback_url != OUT_OF_BAND:
            query["oauth_callback"] = self.config.callback_url
        auth_url = f"{self.config.authorize_url}?{urlencode(query, quote_via=quote)}"

        if self.config.debug:
            logger.debug("Authorization URL: '%s'", auth_url)

        self.record_success()
        return Result.success(
            RequestToken(token=token, token_secret=token_secret, authorization_url=auth_url)
        )

    def authorize(self, verifier: str | None) -> Result[AccessToken]:
        """Step 3: exchange the verifier for an access token.

        Args:
            verifier: The PIN shown to the user after authorizing the application
        """
        if not verifier:
            return self.record_failure(
                CloudValidationError("Authorization 'verifier' needed.", field="verifier")
            )

        if not self._request_token or not self._request_token_secret:
            return self.record_failure(
                CloudAuthError(
                    "No request token available. Call login() first.",
                    stage="access_token",
                )
            )

        url = self.config.access_token_url

        oauth_params = self._build_oauth_params()
        oauth_params["oauth_token"] = self._request_token
        oauth_params["oauth_verifier"] = verifier
        oauth_params["oauth_signature"] = self._generate_signature(
            method="POST",
            url=url,
            oauth_params=oauth_params,
            token_secret=self._request_token_secret,
        )

        try:
            response = self._post(url, oauth_params)
        except httpx.HTTPError as e:
            return self.record_failure(CloudTransportError(f"Access token request failed: {e}"))

        if not response.is_success:
            return self.record_failure(
                CloudAuthError(
                    status_line(response),
                    stage="access_token",
                    status_code=response.status_code,
                )
            )

        token, token_secret = _parse_token_response(response.text)
        if not token or not token_secret:
            return self.record_failure(
                CloudAuthError("Invalid access token response", stage="access_token")
            )

        self._access_token = AccessToken(token=token, token_secret=token_secret)

        # Request token is single use
        self._request_token = None
        self._request_token_secret = None

        if self.config.debug:
            logger.debug("Access Token: '%s'", token)
            logger.debug("Access Secret: '%s'", token_secret)

        self.record_success()
        return Result.success(self._access_token)

    def sign_request(
        self,
        method: str,
        url: str,
        params: Mapping[str, str] | None = None,
    ) -> dict[str, str]:
        """Generate OAuth headers for a protected resource request.

        Args:
            method: HTTP method (GET, POST)
            url: Request URL without query string
            params: Query and form-body parameters

        Returns:
            Headers dict with Authorization header
        """
        oauth_params = self._protected_oauth_params(method, url, params)
        return {"Authorization": self._build_auth_header(oauth_params)}

    def presign(
        self,
        method: str,
        url: str,
        params: Mapping[str, str] | None = None,
    ) -> str:
        """Sign a protected resource request, carrying OAuth parameters in the URL."""
        oauth_params = self._protected_oauth_params(method, url, params)
        query = {**(params or {}), **oauth_params}
        return f"{url}?{urlencode(sorted(query.items()), quote_via=quote)}"

    def _protected_oauth_params(
        self,
        method: str,
        url: str,
        params: Mapping[str, str] | None,
    ) -> dict[str, str]:
        oauth_params = self._build_oauth_params()
        token_secret = ""
        if self._access_token:
            oauth_params["oauth_token"] = self._access_token.token
            token_secret = self._access_token.token_secret
        else:
            # The service rejects the call with an auth error
            logger.debug("Signing %s %s without an access token", method, url)

        # Combine OAuth params with request params for signature
        all_params = {**oauth_params}
        if params:
            all_params.update(params)

        oauth_params["oauth_signature"] = self._generate_signature(
            method=method,
            url=url,
            oauth_params=all_params,
            token_secret=token_secret,
        )
        return oauth_params

    def _post(self, url: str, oauth_params: dict[str, str]) -> httpx.Response:
        headers = {"Authorization": self._build_auth_header(oauth_params)}
        logger.debug("Request: POST %s", url)

        if self._http_client is not None:
            return self._http_client.post(url, headers=headers)

        with httpx.Client(timeout=self.config.timeout) as client:
            return client.post(url, headers=headers)

    def _build_oauth_params(self) -> dict[str, str]:
        """Build base OAuth parameters."""
        return {
            "oauth_consumer_key": self.config.consumer_key,
            "oauth_nonce": secrets.token_hex(16),
            "oauth_signature_method": "HMAC-SHA1",
            "oauth_timestamp": str(int(time.time())),
            "oauth_version": "1.0",
        }

    def _generate_signature(
        self,
        method: str,
        url: str,
        oauth_params: Mapping[str, str],
        token_secret: str,
    ) -> str:
        """Generate OAuth 1.0a HMAC-SHA1 signature."""
        base_string = signature_base_string(method, url, oauth_params)

        signing_key = (
            f"{percent_encode(self.config.consumer_secret)}&{percent_encode(token_secret)}"
        )

        signature = hmac.new(
            signing_key.encode(),
            base_string.encode(),
            hashlib.sha1,
        ).digest()

        return base64.b64encode(signature).decode()

    def _build_auth_header(self, oauth_params: Mapping[str, str]) -> str:
        """Build OAuth Authorization header."""
        auth_parts = [f'{k}="{percent_encode(v)}"' for k, v in sorted(oauth_params.items())]
        return "OAuth " + ", ".join(auth_parts)

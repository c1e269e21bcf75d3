"""Main CloudPT / MEO Cloud client."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from ptcloud_client.api.account import AccountAPI
from ptcloud_client.api.fileops import FileOpsAPI
from ptcloud_client.api.files import FilesAPI
from ptcloud_client.api.sharing import SharingAPI
from ptcloud_client.auth import OAuthSession, TokenStore
from ptcloud_client.config import CloudConfig, Service
from ptcloud_client.models.auth import AccessToken

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from ptcloud_client.api.commands import Command
    from ptcloud_client.models.auth import RequestToken
    from ptcloud_client.models.responses import SignedRequest
    from ptcloud_client.result import Result


class CloudClient:
    """CloudPT / MEO Cloud API client.

    Usage (context manager - recommended for connection pooling):
        with CloudClient(config) as client:
            token = client.login().unwrap()
            print(f"Visit: {token.authorization_url}")
            client.authorize(input("PIN: "))
            result = client.files.metadata("/Photos")

    Usage (external HTTP client - shared with other code):
        http_client = httpx.Client(timeout=30.0)
        client = CloudClient(config, http_client=http_client)
        # Client uses shared pool, doesn't close it

    Usage (no pooling - creates connection per request):
        client = CloudClient(config)
        result = client.account.account_info()
    """

    def __init__(
        self,
        config: CloudConfig,
        *,
        token_store: TokenStore | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Configuration with consumer credentials
            token_store: Optional token storage (uses default if not provided)
            http_client: Optional httpx.Client for connection pooling.
                        If provided, the client will use this pool and NOT close it.
        """
        self.config = config
        self.token_store = token_store or TokenStore()
        self.auth = OAuthSession(config, http_client)

        # HTTP client management
        self._http_client = http_client
        self._owns_http_client = http_client is None

        # Initialize API modules
        self.account = AccountAPI(config, self.auth, http_client)
        self.files = FilesAPI(config, self.auth, http_client)
        self.fileops = FileOpsAPI(config, self.auth, http_client)
        self.sharing = SharingAPI(config, self.auth, http_client)

    def _set_http_client(self, http_client: httpx.Client | None) -> None:
        """Update HTTP client on the session and all API modules."""
        self._http_client = http_client
        self.auth.set_http_client(http_client)
        self.account.set_http_client(http_client)
        self.files.set_http_client(http_client)
        self.fileops.set_http_client(http_client)
        self.sharing.set_http_client(http_client)

    def open(self) -> None:
        """Open connection pool for HTTP requests.

        Only needed if not using context manager or external http_client.
        """
        if self._http_client is None and self._owns_http_client:
            self._set_http_client(httpx.Client(timeout=self.config.timeout))

    def close(self) -> None:
        """Close connection pool.

        Only closes the pool if this client owns it (not external).
        """
        if self._owns_http_client and self._http_client is not None:
            self._http_client.close()
            self._set_http_client(None)

    def __enter__(self) -> CloudClient:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    @classmethod
    def from_env(
        cls,
        service: Service = Service.MEOCLOUD,
        *,
        sandbox: bool = False,
    ) -> CloudClient:
        """Create client from ``<PREFIX>_CONSUMER_KEY`` / ``<PREFIX>_CONSUMER_SECRET``."""
        return cls(CloudConfig.from_env(service, sandbox=sandbox))

    # OAuth handshake

    def login(self) -> Result[RequestToken]:
        """Start the OAuth flow; the result holds the authorization URL."""
        return self.auth.login()

    def authorize(self, verifier: str | None) -> Result[AccessToken]:
        """Finish the OAuth flow with the verifier PIN."""
        return self.auth.authorize(verifier)

    def error(self) -> str:
        """Last error message, empty when the last operation succeeded."""
        return self.auth.error()

    @property
    def is_authenticated(self) -> bool:
        """Check if the client holds an access token (no network call)."""
        return self.auth.is_authenticated

    def is_authorized(self) -> bool:
        """Check with the service that the access token is accepted."""
        return self.account.is_authorized()

    def presign(
        self,
        command: Command,
        *,
        path: str | None = None,
        root: str | None = None,
        options: Mapping[str, str] | None = None,
    ) -> SignedRequest:
        """Sign a command without sending it, e.g. to hand a download URL to a browser.

        ``root`` defaults to the configured namespace when a path is given.
        """
        if root is None and path is not None:
            root = self.config.root
        return self.files.presign(command, root=root, path=path, options=options)

    # Token persistence

    def load_token(self) -> bool:
        """Load saved access token.

        Returns:
            True if token was loaded, False if no token saved
        """
        token = self.token_store.load()
        if token:
            self.auth.set_access_token(token)
            return True
        return False

    def save_token(self) -> None:
        """Save current access token."""
        if self.auth.access_token:
            self.token_store.save(self.auth.access_token)

    def clear_token(self) -> None:
        """Clear saved access token."""
        self.token_store.clear()

    def set_access_token(self, token: str, token_secret: str) -> None:
        """Set access token directly.

        Useful when you have tokens from another source.
        """
        self.auth.set_access_token(AccessToken(token=token, token_secret=token_secret))

"""Configuration management for the CloudPT / MEO Cloud client."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from ptcloud_client.exceptions import CloudValidationError

OUT_OF_BAND = "oob"
API_VERSION = "1"
SANDBOX_ROOT = "sandbox"


def _get_config_dir() -> Path:
    """Get XDG-compliant config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "ptcloud-client"
    return Path.home() / ".config" / "ptcloud-client"


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


class Service(StrEnum):
    """Supported storage services. Both expose the same API on different domains."""

    MEOCLOUD = "meocloud"
    CLOUDPT = "cloudpt"

    @property
    def domain(self) -> str:
        return f"{self.value}.pt"

    @property
    def default_root(self) -> str:
        """Production namespace for file paths."""
        return self.value

    @property
    def env_prefix(self) -> str:
        return self.value.upper()

    @property
    def oauth_base_url(self) -> str:
        return f"https://{self.domain}/oauth"


@dataclass(frozen=True, slots=True)
class CloudConfig:
    """Client configuration.

    Only ``consumer_key`` and ``consumer_secret`` are required; every other
    value defaults to the service's documented endpoints and the production
    namespace.
    """

    consumer_key: str
    consumer_secret: str
    service: Service = Service.MEOCLOUD
    sandbox: bool = False
    callback_url: str = OUT_OF_BAND
    timeout: float = 30.0
    debug: bool = False
    # Escape only the final path segment, as the first releases of these clients did
    legacy_path_escaping: bool = False

    # OAuth endpoint overrides (None = service default)
    _request_token_url: str | None = field(default=None, repr=False)
    _authorize_url: str | None = field(default=None, repr=False)
    _access_token_url: str | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.consumer_key or not self.consumer_secret:
            raise CloudValidationError(
                "Please specify both the consumer key and the consumer secret",
                field="consumer_key" if not self.consumer_key else "consumer_secret",
            )
        # Accept plain strings for the service
        object.__setattr__(self, "service", Service(self.service))

    @property
    def root(self) -> str:
        """Namespace prepended to file paths (production or sandbox)."""
        return SANDBOX_ROOT if self.sandbox else self.service.default_root

    @property
    def environment(self) -> str:
        return "sandbox" if self.sandbox else "production"

    @property
    def request_token_url(self) -> str:
        return self._request_token_url or f"{self.service.oauth_base_url}/request_token"

    @property
    def authorize_url(self) -> str:
        return self._authorize_url or f"{self.service.oauth_base_url}/authorize"

    @property
    def access_token_url(self) -> str:
        return self._access_token_url or f"{self.service.oauth_base_url}/access_token"

    def endpoint_base_url(self, endpoint: str) -> str:
        """Versioned base URL for an API host (``publicapi`` or ``api-content``)."""
        return f"https://{endpoint}.{self.service.domain}/{API_VERSION}"

    @classmethod
    def with_endpoints(
        cls,
        consumer_key: str,
        consumer_secret: str,
        *,
        request_token_url: str | None = None,
        authorize_url: str | None = None,
        access_token_url: str | None = None,
        **kwargs: object,
    ) -> CloudConfig:
        """Create a config with custom OAuth endpoint URLs."""
        return cls(
            consumer_key,
            consumer_secret,
            _request_token_url=request_token_url,
            _authorize_url=authorize_url,
            _access_token_url=access_token_url,
            **kwargs,  # type: ignore[arg-type]
        )

    @classmethod
    def from_env(
        cls,
        service: Service = Service.MEOCLOUD,
        *,
        sandbox: bool = False,
    ) -> CloudConfig:
        """Create config from environment variables.

        Expected env vars (prefix ``MEOCLOUD`` or ``CLOUDPT``):
        - <PREFIX>_CONSUMER_KEY
        - <PREFIX>_CONSUMER_SECRET
        - <PREFIX>_DEBUG (optional)
        """
        service = Service(service)
        prefix = service.env_prefix
        consumer_key = os.environ.get(f"{prefix}_CONSUMER_KEY")
        consumer_secret = os.environ.get(f"{prefix}_CONSUMER_SECRET")

        if not consumer_key or not consumer_secret:
            msg = (
                "Missing required environment variables: "
                f"{prefix}_CONSUMER_KEY and {prefix}_CONSUMER_SECRET"
            )
            raise CloudValidationError(msg)

        return cls(
            consumer_key=consumer_key,
            consumer_secret=consumer_secret,
            service=service,
            sandbox=sandbox,
            debug=_env_flag(f"{prefix}_DEBUG"),
        )

    @classmethod
    def from_file(
        cls,
        path: Path | None = None,
        service: Service = Service.MEOCLOUD,
        *,
        sandbox: bool = False,
    ) -> CloudConfig:
        """Load config from JSON file.

        Default path: ~/.config/ptcloud-client/config.json

        Expected format:
        {
            "consumer_key": "...",
            "consumer_secret": "...",
            "callback_url": "oob"
        }
        """
        if path is None:
            path = _get_config_dir() / "config.json"

        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with path.open() as f:
            data = json.load(f)

        return cls(
            consumer_key=data.get("consumer_key", ""),
            consumer_secret=data.get("consumer_secret", ""),
            service=Service(data.get("service", service)),
            sandbox=sandbox,
            callback_url=data.get("callback_url", OUT_OF_BAND),
            debug=bool(data.get("debug", False)),
        )

    @classmethod
    def load(
        cls,
        service: Service = Service.MEOCLOUD,
        *,
        sandbox: bool = False,
    ) -> CloudConfig:
        """Load config from environment or file (env takes precedence)."""
        try:
            return cls.from_env(service, sandbox=sandbox)
        except CloudValidationError:
            return cls.from_file(service=service, sandbox=sandbox)

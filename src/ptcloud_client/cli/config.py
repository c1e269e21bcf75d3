"""CLI configuration with XDG-compliant paths and environment variable overrides."""

import json
import logging
import os
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from ptcloud_client.config import CloudConfig, Service

logger = logging.getLogger(__name__)


class OutputFormat(StrEnum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"
    CSV = "csv"


def _default_config_dir() -> Path:
    """Get XDG-compliant config directory for credentials.

    Uses XDG_CONFIG_HOME if set, otherwise ~/.config/ptcloud-cli.
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "ptcloud-cli"
    return Path.home() / ".config" / "ptcloud-cli"


def _default_data_dir() -> Path:
    """Get XDG-compliant data directory for tokens.

    Uses XDG_DATA_HOME if set, otherwise ~/.local/share/ptcloud-cli.
    """
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data) / "ptcloud-cli"
    return Path.home() / ".local" / "share" / "ptcloud-cli"


@dataclass
class CLIConfig:
    """Configuration passed through Typer context.

    Attributes:
        service: Storage service (meocloud or cloudpt).
        sandbox: Use the sandbox namespace instead of the production one.
        verbose: Enable debug logging, including tokens.
        config_dir: Directory for configuration files (credentials).
        data_dir: Directory for data files (tokens).

    Directory Structure:
        config_dir/
        ├── meocloud.json                   # MEO Cloud credentials
        └── cloudpt.json                    # CloudPT credentials

        data_dir/
        ├── meocloud-production-token.json
        └── meocloud-sandbox-token.json
    """

    service: Service = Service.MEOCLOUD
    sandbox: bool = False
    verbose: bool = False
    config_dir: Path = field(default_factory=_default_config_dir)
    data_dir: Path = field(default_factory=_default_data_dir)

    @property
    def environment(self) -> str:
        """Get the environment name."""
        return "sandbox" if self.sandbox else "production"

    @property
    def token_path(self) -> Path:
        """Token file for the current service and environment."""
        return self.data_dir / f"{self.service.value}-{self.environment}-token.json"

    @property
    def credentials_path(self) -> Path:
        """Credentials file for the current service."""
        return self.config_dir / f"{self.service.value}.json"

    def load_credentials(self) -> tuple[str, str]:
        """Load credentials from config file with environment variable overrides.

        Environment variables (prefix MEOCLOUD or CLOUDPT) override file values:
        - <PREFIX>_CONSUMER_KEY
        - <PREFIX>_CONSUMER_SECRET

        Returns:
            Tuple of (consumer_key, consumer_secret)

        Raises:
            ValueError: If credentials cannot be determined from file or env vars
        """
        consumer_key: str | None = None
        consumer_secret: str | None = None

        if self.credentials_path.exists():
            try:
                with self.credentials_path.open() as f:
                    data = json.load(f)
                consumer_key = data.get("consumer_key")
                consumer_secret = data.get("consumer_secret")
            except (json.JSONDecodeError, OSError) as e:
                logger.warning("Failed to read %s: %s", self.credentials_path, e)

        prefix = self.service.env_prefix
        if env_key := os.environ.get(f"{prefix}_CONSUMER_KEY"):
            consumer_key = env_key
        if env_secret := os.environ.get(f"{prefix}_CONSUMER_SECRET"):
            consumer_secret = env_secret

        if not consumer_key or not consumer_secret:
            missing = []
            if not consumer_key:
                missing.append("consumer_key")
            if not consumer_secret:
                missing.append("consumer_secret")

            msg = (
                f"Missing credentials: {', '.join(missing)}. "
                f"Set via environment variables ({prefix}_CONSUMER_KEY, "
                f"{prefix}_CONSUMER_SECRET) or create config file at {self.credentials_path}"
            )
            raise ValueError(msg)

        return consumer_key, consumer_secret

    def save_credentials(self, consumer_key: str, consumer_secret: str) -> None:
        """Save credentials to the service's config file."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

        data = {
            "consumer_key": consumer_key,
            "consumer_secret": consumer_secret,
        }

        with self.credentials_path.open("w") as f:
            json.dump(data, f, indent=2)

        # Owner read/write only
        self.credentials_path.chmod(0o600)

    def has_credentials(self) -> bool:
        """Check if credentials are available from file or environment."""
        try:
            self.load_credentials()
            return True
        except ValueError:
            return False

    def client_config(self) -> CloudConfig:
        """Build the library configuration for this CLI invocation."""
        consumer_key, consumer_secret = self.load_credentials()
        return CloudConfig(
            consumer_key=consumer_key,
            consumer_secret=consumer_secret,
            service=self.service,
            sandbox=self.sandbox,
            debug=self.verbose,
        )

"""Client factory for CLI commands."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from ptcloud_client.auth import TokenStore
from ptcloud_client.client import CloudClient

if TYPE_CHECKING:
    from ptcloud_client.cli.config import CLIConfig


@contextmanager
def get_client(config: CLIConfig) -> Generator[CloudClient, None, None]:
    """Create and configure a CloudClient for CLI use.

    This context manager:
    1. Loads credentials from config file with env var overrides
    2. Uses service- and environment-specific token storage (XDG_DATA_HOME)
    3. Manages connection pooling lifecycle

    Usage:
        with get_client(cli_config) as client:
            result = client.account.account_info()
    """
    token_store = TokenStore(path=config.token_path)
    client = CloudClient(config.client_config(), token_store=token_store)

    # Load any saved token
    client.load_token()

    with client:
        yield client

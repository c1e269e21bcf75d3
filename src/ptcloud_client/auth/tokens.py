"""Access token persistence."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from ptcloud_client.models.auth import AccessToken

logger = logging.getLogger(__name__)


def _get_token_path() -> Path:
    """Get default token storage path."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg_data) if xdg_data else Path.home() / ".local" / "share"
    return base / "ptcloud-client" / "tokens.json"


@dataclass
class TokenStore:
    """Persistent storage for the OAuth access token pair.

    Access tokens do not expire on their own, so keeping them on disk is what
    lets an application skip the browser handshake on the next run.
    """

    path: Path

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or _get_token_path()

    def save(self, token: AccessToken) -> None:
        """Save access token to storage."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

        with self.path.open("w") as f:
            json.dump(token.model_dump(), f, indent=2)

        # Owner read/write only
        self.path.chmod(0o600)

    def load(self) -> AccessToken | None:
        """Load access token from storage.

        Returns None if no token is stored or the file is unreadable.
        """
        if not self.path.exists():
            return None

        try:
            with self.path.open() as f:
                data = json.load(f)
            return AccessToken(
                token=data["token"],
                token_secret=data["token_secret"],
            )
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValidationError) as e:
            logger.warning("Ignoring unreadable token file %s: %s", self.path, e)
            return None

    def clear(self) -> None:
        """Remove stored token."""
        if self.path.exists():
            self.path.unlink()

    def has_token(self) -> bool:
        """Check if a token is stored."""
        return self.path.exists()

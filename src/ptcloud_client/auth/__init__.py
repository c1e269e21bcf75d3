"""OAuth authentication for the CloudPT / MEO Cloud APIs."""

from ptcloud_client.auth.oauth import OAuthSession
from ptcloud_client.auth.tokens import TokenStore

__all__ = ["OAuthSession", "TokenStore"]

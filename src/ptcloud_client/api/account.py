"""Account API endpoints."""

from ptcloud_client.api import commands
from ptcloud_client.api.base import BaseAPI
from ptcloud_client.models.responses import ApiResponse
from ptcloud_client.result import Result


class AccountAPI(BaseAPI):
    """Information about the authorized user."""

    def account_info(self) -> Result[ApiResponse]:
        """Get the user's account information (name, quota, usage)."""
        return self._execute(commands.ACCOUNT_INFO)

    def is_authorized(self) -> bool:
        """Check with the service whether the current credentials are accepted.

        Returns:
            True if the account information call answers with HTTP 200
        """
        result = self.account_info()
        return result.value is not None and result.value.status_code == 200

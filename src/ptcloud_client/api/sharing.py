"""Sharing endpoints: public links and shared folders."""

from ptcloud_client.api import commands
from ptcloud_client.api.base import BaseAPI, require
from ptcloud_client.models.responses import ApiResponse
from ptcloud_client.result import Result


class SharingAPI(BaseAPI):
    """Public links and folders shared with other users."""

    def share(self, path: str) -> Result[ApiResponse]:
        """Create a public link to a file or folder."""
        if error := require(path, "path"):
            return self.auth.record_failure(error)

        return self._execute(commands.SHARES, root=self.config.root, path=path)

    def share_folder(self, path: str, email: str) -> Result[ApiResponse]:
        """Share a folder with another user, identified by e-mail."""
        if error := require(path, "path") or require(email, "email"):
            return self.auth.record_failure(error)

        return self._execute(
            commands.SHARE_FOLDER,
            root=self.config.root,
            path=path,
            options={"to_email": email},
        )

    def list_links(self) -> Result[ApiResponse]:
        """List the public links created by the user."""
        return self._execute(commands.LIST_LINKS)

    def delete_link(self, share_id: str) -> Result[ApiResponse]:
        """Remove a public link."""
        if error := require(share_id, "share_id"):
            return self.auth.record_failure(error)

        return self._execute(commands.DELETE_LINK, options={"shareid": share_id})

    def list_shared_folders(self) -> Result[ApiResponse]:
        """List the shared folders the user has access to."""
        return self._execute(commands.LIST_SHARED_FOLDERS)

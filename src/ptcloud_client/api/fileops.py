"""File operation endpoints: copy, move, create, delete."""

from ptcloud_client.api import commands
from ptcloud_client.api.base import BaseAPI, require
from ptcloud_client.exceptions import CloudValidationError
from ptcloud_client.models.responses import ApiResponse
from ptcloud_client.result import Result


class FileOpsAPI(BaseAPI):
    """Copy, move, create and delete files and folders."""

    def copy(
        self,
        to_path: str,
        *,
        from_path: str | None = None,
        from_copy_ref: str | None = None,
    ) -> Result[ApiResponse]:
        """Copy a file or folder to ``to_path``.

        The source is either ``from_path`` or a reference created by
        ``copy_ref`` (possibly in another user's account), never both.
        """
        if error := require(to_path, "to_path"):
            return self.auth.record_failure(error)
        if bool(from_path) == bool(from_copy_ref):
            return self.auth.record_failure(
                CloudValidationError(
                    "Exactly one of 'from_path' or 'from_copy_ref' is required.",
                    field="from_path",
                )
            )

        content = {"root": self.config.root, "to_path": to_path}
        if from_path:
            content["from_path"] = from_path
        else:
            content["from_copy_ref"] = from_copy_ref  # type: ignore[assignment]

        return self._execute(commands.COPY, options=content)

    def copy_ref(self, path: str) -> Result[ApiResponse]:
        """Create a reference to ``path`` that ``copy`` accepts as a source."""
        if error := require(path, "path"):
            return self.auth.record_failure(error)

        return self._execute(commands.COPY_REF, root=self.config.root, path=path)

    def move(self, from_path: str, to_path: str) -> Result[ApiResponse]:
        """Move (or rename) a file or folder."""
        if error := require(from_path, "from_path") or require(to_path, "to_path"):
            return self.auth.record_failure(error)

        return self._execute(
            commands.MOVE,
            options={"root": self.config.root, "from_path": from_path, "to_path": to_path},
        )

    def create_folder(self, path: str) -> Result[ApiResponse]:
        """Create a folder."""
        if error := require(path, "path"):
            return self.auth.record_failure(error)

        return self._execute(
            commands.CREATE_FOLDER,
            options={"root": self.config.root, "path": path},
        )

    def delete(self, path: str) -> Result[ApiResponse]:
        """Delete a file or folder."""
        if error := require(path, "path"):
            return self.auth.record_failure(error)

        return self._execute(
            commands.DELETE,
            options={"root": self.config.root, "path": path},
        )

    def undelete(self, path: str) -> Result[ApiResponse]:
        """Restore a deleted file or folder tree."""
        if error := require(path, "path"):
            return self.auth.record_failure(error)

        return self._execute(commands.UNDELETE, root=self.config.root, path=path)

"""Files API endpoints: metadata, search, revisions and transfers."""

from pathlib import Path

from ptcloud_client.api import commands
from ptcloud_client.api.base import BaseAPI, require
from ptcloud_client.exceptions import CloudLocalIOError
from ptcloud_client.models.params import (
    DeltaParams,
    GetFileParams,
    ListParams,
    MediaParams,
    MetadataParams,
    PutFileParams,
    RevisionsParams,
    SearchParams,
    ThumbnailParams,
)
from ptcloud_client.models.responses import ApiResponse
from ptcloud_client.result import Result


class FilesAPI(BaseAPI):
    """Metadata, listings and file transfer.

    Paths are relative to the configured root namespace (``meocloud``,
    ``cloudpt`` or ``sandbox``).
    """

    def metadata(
        self,
        path: str = "/",
        *,
        params: MetadataParams | None = None,
    ) -> Result[ApiResponse]:
        """Get all metadata of a file or folder.

        Args:
            path: Remote path, e.g. ``/Photos``
            params: Listing limit, change hash, revision, ...

        Returns:
            Result with the decoded metadata
        """
        return self._execute(
            commands.METADATA,
            root=self.config.root,
            path=path,
            options=(params or MetadataParams()).to_options(),
        )

    def metadata_share(
        self,
        share_id: str,
        name: str,
        *,
        params: MetadataParams | None = None,
    ) -> Result[ApiResponse]:
        """Get the metadata of a shared resource.

        Args:
            share_id: Share identifier returned when the link was created
            name: Name of the shared file or folder
            params: Same options as ``metadata``
        """
        if error := require(share_id, "share_id") or require(name, "name"):
            return self.auth.record_failure(error)

        return self._execute(
            commands.METADATA_SHARE,
            root=share_id,
            path=name,
            options=(params or MetadataParams()).to_options(),
        )

    def list(
        self,
        path: str = "",
        *,
        params: ListParams | None = None,
    ) -> Result[ApiResponse]:
        """List a folder. Lighter than ``metadata`` but with more filters."""
        return self._execute(
            commands.LIST,
            root=self.config.root,
            path=path,
            options=(params or ListParams()).to_options(),
        )

    def search(
        self,
        query: str,
        path: str = "",
        *,
        params: SearchParams | None = None,
    ) -> Result[ApiResponse]:
        """Search ``path`` for files and folders whose name matches ``query``."""
        if error := require(query, "query"):
            return self.auth.record_failure(error)

        options = {"query": query, **(params or SearchParams()).to_options()}
        return self._execute(
            commands.SEARCH,
            root=self.config.root,
            path=path,
            options=options,
        )

    def revisions(
        self,
        path: str,
        *,
        params: RevisionsParams | None = None,
    ) -> Result[ApiResponse]:
        """List the most recent revisions of a file."""
        if error := require(path, "path"):
            return self.auth.record_failure(error)

        return self._execute(
            commands.REVISIONS,
            root=self.config.root,
            path=path,
            options=(params or RevisionsParams()).to_options(),
        )

    def restore(self, path: str, revision: str) -> Result[ApiResponse]:
        """Restore a file to one of its revisions (see ``revisions``)."""
        if error := require(path, "path") or require(revision, "revision"):
            return self.auth.record_failure(error)

        return self._execute(
            commands.RESTORE,
            root=self.config.root,
            path=path,
            options={"rev": revision},
        )

    def thumbnail(
        self,
        path: str,
        *,
        params: ThumbnailParams | None = None,
    ) -> Result[ApiResponse]:
        """Get an image thumbnail. On success the result holds ``Raw`` image bytes."""
        if error := require(path, "path"):
            return self.auth.record_failure(error)

        return self._execute(
            commands.THUMBNAILS,
            root=self.config.root,
            path=path,
            options=(params or ThumbnailParams()).to_options(),
        )

    def media(
        self,
        path: str,
        *,
        params: MediaParams | None = None,
    ) -> Result[ApiResponse]:
        """Get a direct link to a file; audio and video get a streaming link."""
        if error := require(path, "path"):
            return self.auth.record_failure(error)

        return self._execute(
            commands.MEDIA,
            root=self.config.root,
            path=path,
            options=(params or MediaParams()).to_options(),
        )

    def delta(self, *, params: DeltaParams | None = None) -> Result[ApiResponse]:
        """List changes available for syncing since ``params.cursor``."""
        return self._execute(commands.DELTA, options=(params or DeltaParams()).to_options())

    def get_file(
        self,
        path: str,
        *,
        params: GetFileParams | None = None,
    ) -> Result[ApiResponse]:
        """Download a file. On success the result holds the ``Raw`` content.

        A JSON file is returned decoded, like any other JSON body.
        """
        if error := require(path, "path"):
            return self.auth.record_failure(error)

        return self._execute(
            commands.GET_FILE,
            root=self.config.root,
            path=path,
            options=(params or GetFileParams()).to_options(),
        )

    def put_file(
        self,
        file: str | Path,
        *,
        path: str = "",
        content: bytes | None = None,
        params: PutFileParams | None = None,
    ) -> Result[ApiResponse]:
        """Upload a file.

        The remote name is the base name of ``file``. Its body is ``content``
        when given, otherwise the bytes of the local ``file``.

        Args:
            file: Local file (or just the remote file name when ``content`` is given)
            path: Remote folder to upload into
            content: Inline file content
            params: Overwrite flag and parent revision

        Returns:
            Result with the uploaded file's metadata, or a ``CloudLocalIOError``
            when the local file cannot be read
        """
        name = Path(file).name
        if error := require(name, "file"):
            return self.auth.record_failure(error)

        if content is None:
            try:
                content = Path(file).read_bytes()
            except OSError as e:
                return self.auth.record_failure(
                    CloudLocalIOError(f"Unable to open file '{file}': {e}", path=str(file))
                )

        return self._execute(
            commands.PUT_FILE,
            root=self.config.root,
            path=f"{path}/{name}",
            options=(params or PutFileParams()).to_options(),
            content=content,
        )

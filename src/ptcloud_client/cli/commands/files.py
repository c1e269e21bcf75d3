"""File commands."""

import json
from pathlib import Path

import typer

from ptcloud_client.api import commands
from ptcloud_client.cli.client_factory import get_client
from ptcloud_client.cli.config import CLIConfig, OutputFormat
from ptcloud_client.cli.formatters import (
    console,
    format_response,
    print_error,
    print_success,
)
from ptcloud_client.cli.runner import cli_command
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
from ptcloud_client.models.responses import Decoded, Raw

app = typer.Typer(no_args_is_help=True)

ENTRY_COLUMNS = ["path", "size", "modified", "is_dir"]

OUTPUT_OPTION = typer.Option(
    OutputFormat.TABLE,
    "--output",
    "-o",
    help="Output format.",
)


@app.command("ls")
@cli_command
def list_folder(
    ctx: typer.Context,
    path: str = typer.Argument("/", help="Remote folder."),
    limit: int | None = typer.Option(None, "--limit", "-n", help="Maximum entries."),
    deleted: bool = typer.Option(False, "--deleted", help="Include deleted entries."),
    mime_type: str | None = typer.Option(None, "--mime-type", help="Filter by MIME type."),
    output: OutputFormat = OUTPUT_OPTION,
) -> None:
    """List a folder."""
    config: CLIConfig = ctx.obj
    params = ListParams(file_limit=limit, include_deleted=deleted or None, mime_type=mime_type)

    with get_client(config) as client:
        response = client.files.list(path, params=params).unwrap()
        format_response(response, output, title=path, items_key="contents", columns=ENTRY_COLUMNS)


@app.command("meta")
@cli_command
def metadata(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Remote file or folder."),
    rev: str | None = typer.Option(None, "--rev", help="File revision."),
    deleted: bool = typer.Option(False, "--deleted", help="Include deleted entries."),
    output: OutputFormat = typer.Option(OutputFormat.JSON, "--output", "-o"),
) -> None:
    """Show all metadata of a file or folder."""
    config: CLIConfig = ctx.obj
    params = MetadataParams(rev=rev, include_deleted=deleted or None)

    with get_client(config) as client:
        response = client.files.metadata(path, params=params).unwrap()
        format_response(response, output, title=path)


@app.command("search")
@cli_command
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Text to search for."),
    path: str = typer.Argument("/", help="Folder to search in."),
    limit: int | None = typer.Option(None, "--limit", "-n", help="Maximum results."),
    mime_type: str | None = typer.Option(None, "--mime-type", help="Filter by MIME type."),
    output: OutputFormat = OUTPUT_OPTION,
) -> None:
    """Search for files and folders by name."""
    config: CLIConfig = ctx.obj
    params = SearchParams(file_limit=limit, mime_type=mime_type)

    with get_client(config) as client:
        response = client.files.search(query, path, params=params).unwrap()
        format_response(response, output, title=f"Search: {query}", columns=ENTRY_COLUMNS)


@app.command("revisions")
@cli_command
def revisions(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Remote file."),
    limit: int | None = typer.Option(None, "--limit", "-n", help="Maximum revisions."),
    output: OutputFormat = OUTPUT_OPTION,
) -> None:
    """List the revisions of a file."""
    config: CLIConfig = ctx.obj

    with get_client(config) as client:
        response = client.files.revisions(path, params=RevisionsParams(rev_limit=limit)).unwrap()
        format_response(
            response, output, title=path, columns=["rev", "size", "modified", "is_deleted"]
        )


@app.command("restore")
@cli_command
def restore(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Remote file."),
    rev: str = typer.Argument(..., help="Revision to restore."),
) -> None:
    """Restore a file to an earlier revision."""
    config: CLIConfig = ctx.obj

    with get_client(config) as client:
        client.files.restore(path, rev).unwrap()
    print_success(f"Restored {path} to revision {rev}")


@app.command("get")
@cli_command
def get_file(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Remote file."),
    dest: Path | None = typer.Option(None, "--dest", "-d", help="Local file (default: name)."),
    rev: str | None = typer.Option(None, "--rev", help="Revision to download."),
) -> None:
    """Download a file."""
    config: CLIConfig = ctx.obj
    target = dest or Path(Path(path).name)

    with get_client(config) as client:
        response = client.files.get_file(path, params=GetFileParams(rev=rev)).unwrap()

    if isinstance(response, Raw):
        content = response.content
    else:
        # JSON files arrive decoded
        content = json.dumps(response.payload, indent=2).encode()
    target.write_bytes(content)
    print_success(f"Downloaded {path} to {target} ({len(content)} bytes)")


@app.command("put")
@cli_command
def put_file(
    ctx: typer.Context,
    local: Path = typer.Argument(..., help="Local file to upload."),
    folder: str = typer.Argument("/", help="Remote folder."),
    overwrite: bool | None = typer.Option(
        None, "--overwrite/--no-overwrite", help="Replace an existing file."
    ),
    parent_rev: str | None = typer.Option(None, "--parent-rev", help="Revision being replaced."),
) -> None:
    """Upload a file."""
    config: CLIConfig = ctx.obj
    params = PutFileParams(overwrite=overwrite, parent_rev=parent_rev)

    with get_client(config) as client:
        response = client.files.put_file(local, path=folder, params=params).unwrap()

    remote = response.get("path", folder) if isinstance(response, Decoded) else folder
    print_success(f"Uploaded {local} to {remote}")


@app.command("thumbnail")
@cli_command
def thumbnail(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Remote image."),
    dest: Path = typer.Argument(..., help="Local file for the thumbnail."),
    image_format: str | None = typer.Option(None, "--format", help="jpeg or png."),
    size: str | None = typer.Option(None, "--size", help="xs, s, m, l or xl."),
) -> None:
    """Download an image thumbnail."""
    config: CLIConfig = ctx.obj
    params = ThumbnailParams.model_validate({"format": image_format, "size": size})

    with get_client(config) as client:
        response = client.files.thumbnail(path, params=params).unwrap()

    if not isinstance(response, Raw):
        print_error("The service did not return an image.")
        raise typer.Exit(1)

    dest.write_bytes(response.content)
    print_success(f"Saved thumbnail to {dest}")


@app.command("mkdir")
@cli_command
def create_folder(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Folder to create."),
) -> None:
    """Create a folder."""
    config: CLIConfig = ctx.obj

    with get_client(config) as client:
        client.fileops.create_folder(path).unwrap()
    print_success(f"Created {path}")


@app.command("rm")
@cli_command
def delete(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File or folder to delete."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation."),
) -> None:
    """Delete a file or folder."""
    config: CLIConfig = ctx.obj

    if not yes:
        typer.confirm(f"Delete {path}?", abort=True)

    with get_client(config) as client:
        client.fileops.delete(path).unwrap()
    print_success(f"Deleted {path}")


@app.command("undelete")
@cli_command
def undelete(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Deleted file or folder."),
) -> None:
    """Restore a deleted file or folder tree."""
    config: CLIConfig = ctx.obj

    with get_client(config) as client:
        client.fileops.undelete(path).unwrap()
    print_success(f"Undeleted {path}")


@app.command("mv")
@cli_command
def move(
    ctx: typer.Context,
    from_path: str = typer.Argument(..., help="Source."),
    to_path: str = typer.Argument(..., help="Destination."),
) -> None:
    """Move or rename a file or folder."""
    config: CLIConfig = ctx.obj

    with get_client(config) as client:
        client.fileops.move(from_path, to_path).unwrap()
    print_success(f"Moved {from_path} to {to_path}")


@app.command("cp")
@cli_command
def copy(
    ctx: typer.Context,
    to_path: str = typer.Argument(..., help="Destination."),
    from_path: str | None = typer.Option(None, "--from", help="Source path."),
    copy_ref: str | None = typer.Option(None, "--ref", help="Copy reference (see copy-ref)."),
) -> None:
    """Copy a file or folder, from a path or a copy reference."""
    config: CLIConfig = ctx.obj

    with get_client(config) as client:
        client.fileops.copy(to_path, from_path=from_path, from_copy_ref=copy_ref).unwrap()
    print_success(f"Copied to {to_path}")


@app.command("copy-ref")
@cli_command
def copy_ref(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File to reference."),
    output: OutputFormat = OUTPUT_OPTION,
) -> None:
    """Create a copy reference usable by 'cp --ref'."""
    config: CLIConfig = ctx.obj

    with get_client(config) as client:
        response = client.fileops.copy_ref(path).unwrap()
        format_response(response, output, title="Copy reference")


@app.command("media")
@cli_command
def media(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Remote file."),
    protocol: str | None = typer.Option(None, "--protocol", help="http or rtsp."),
    output: OutputFormat = OUTPUT_OPTION,
) -> None:
    """Get a direct (or streaming) link to a file."""
    config: CLIConfig = ctx.obj
    params = MediaParams.model_validate({"protocol": protocol})

    with get_client(config) as client:
        response = client.files.media(path, params=params).unwrap()
        format_response(response, output, title="Media link")


@app.command("delta")
@cli_command
def delta(
    ctx: typer.Context,
    cursor: str | None = typer.Option(None, "--cursor", help="Cursor from the previous call."),
    output: OutputFormat = typer.Option(OutputFormat.JSON, "--output", "-o"),
) -> None:
    """List changes since the given cursor."""
    config: CLIConfig = ctx.obj

    with get_client(config) as client:
        response = client.files.delta(params=DeltaParams(cursor=cursor)).unwrap()
        format_response(response, output, title="Delta")


@app.command("url")
@cli_command
def signed_url(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Remote file."),
) -> None:
    """Print a signed download URL without downloading."""
    config: CLIConfig = ctx.obj

    with get_client(config) as client:
        signed = client.presign(commands.GET_FILE, path=path)
    console.print(signed.url, soft_wrap=True)

"""Sharing commands."""

import typer

from ptcloud_client.cli.client_factory import get_client
from ptcloud_client.cli.config import CLIConfig, OutputFormat
from ptcloud_client.cli.formatters import format_response, print_success
from ptcloud_client.cli.runner import cli_command

app = typer.Typer(no_args_is_help=True)


@app.command("link")
@cli_command
def share(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File or folder to share."),
    output: OutputFormat = typer.Option(OutputFormat.TABLE, "--output", "-o"),
) -> None:
    """Create a public link."""
    config: CLIConfig = ctx.obj

    with get_client(config) as client:
        response = client.sharing.share(path).unwrap()
        format_response(response, output, title="Public link")


@app.command("folder")
@cli_command
def share_folder(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Folder to share."),
    email: str = typer.Argument(..., help="E-mail of the user to share with."),
) -> None:
    """Share a folder with another user."""
    config: CLIConfig = ctx.obj

    with get_client(config) as client:
        client.sharing.share_folder(path, email).unwrap()
    print_success(f"Shared {path} with {email}")


@app.command("links")
@cli_command
def list_links(
    ctx: typer.Context,
    output: OutputFormat = typer.Option(OutputFormat.TABLE, "--output", "-o"),
) -> None:
    """List public links."""
    config: CLIConfig = ctx.obj

    with get_client(config) as client:
        response = client.sharing.list_links().unwrap()
        format_response(response, output, title="Public links", columns=["shareid", "url", "path"])


@app.command("unlink")
@cli_command
def delete_link(
    ctx: typer.Context,
    share_id: str = typer.Argument(..., help="Share id of the link."),
) -> None:
    """Remove a public link."""
    config: CLIConfig = ctx.obj

    with get_client(config) as client:
        client.sharing.delete_link(share_id).unwrap()
    print_success(f"Removed link {share_id}")


@app.command("folders")
@cli_command
def list_shared_folders(
    ctx: typer.Context,
    output: OutputFormat = typer.Option(OutputFormat.JSON, "--output", "-o"),
) -> None:
    """List folders shared with or by the user."""
    config: CLIConfig = ctx.obj

    with get_client(config) as client:
        response = client.sharing.list_shared_folders().unwrap()
        format_response(response, output, title="Shared folders")

"""Account commands."""

import typer

from ptcloud_client.cli.client_factory import get_client
from ptcloud_client.cli.config import CLIConfig, OutputFormat
from ptcloud_client.cli.formatters import format_response
from ptcloud_client.cli.runner import cli_command

app = typer.Typer(no_args_is_help=True)


@app.command("info")
@cli_command
def info(
    ctx: typer.Context,
    output: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--output",
        "-o",
        help="Output format.",
    ),
) -> None:
    """Show account name, quota and usage."""
    config: CLIConfig = ctx.obj

    with get_client(config) as client:
        response = client.account.account_info().unwrap()
        format_response(response, output, title="Account")

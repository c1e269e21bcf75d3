"""Main Typer application."""

import logging
import os
from pathlib import Path

import typer

from ptcloud_client.cli.config import CLIConfig
from ptcloud_client.config import Service

# Create main app
app = typer.Typer(
    name="ptcloud",
    help="MEO Cloud / CloudPT command-line interface.",
    no_args_is_help=True,
)


def _get_config_dir() -> Path:
    """Get XDG-compliant config directory for CLI."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "ptcloud-cli"
    return Path.home() / ".config" / "ptcloud-cli"


@app.callback()
def main(
    ctx: typer.Context,
    service: Service = typer.Option(
        Service.MEOCLOUD,
        "--service",
        "-S",
        help="Storage service.",
        envvar="PTCLOUD_SERVICE",
    ),
    sandbox: bool = typer.Option(
        False,
        "--sandbox/--production",
        "-s/-p",
        help="Use the sandbox namespace or production (default).",
        envvar="PTCLOUD_SANDBOX",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug output, including tokens.",
    ),
    config_dir: Path | None = typer.Option(
        None,
        "--config-dir",
        "-c",
        help="Config directory (default: ~/.config/ptcloud-cli).",
        envvar="PTCLOUD_CLI_CONFIG_DIR",
    ),
) -> None:
    """MEO Cloud / CloudPT command-line interface.

    Use --sandbox to work in the application's sandbox folder.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    ctx.obj = CLIConfig(
        service=service,
        sandbox=sandbox,
        verbose=verbose,
        config_dir=config_dir or _get_config_dir(),
    )

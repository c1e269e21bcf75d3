"""ptcloud - command-line interface for MEO Cloud and CloudPT."""

from ptcloud_client.cli.app import app

# Import command modules to register them with the app
from ptcloud_client.cli.commands import account, auth, files, share

# Register sub-apps
app.add_typer(auth.app, name="auth", help="Authentication commands.")
app.add_typer(account.app, name="account", help="Account information.")
app.add_typer(files.app, name="files", help="Files and folders.")
app.add_typer(share.app, name="share", help="Public links and shared folders.")


def main() -> None:
    """Entry point for the CLI."""
    app()


__all__ = ["app", "main"]

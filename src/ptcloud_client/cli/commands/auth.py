"""Authentication commands."""

import webbrowser

import typer

from ptcloud_client.auth import TokenStore
from ptcloud_client.cli.client_factory import get_client
from ptcloud_client.cli.config import CLIConfig
from ptcloud_client.cli.formatters import console, print_error, print_info, print_success
from ptcloud_client.cli.runner import cli_command

app = typer.Typer(no_args_is_help=True)


@app.command("login")
@cli_command
def login(
    ctx: typer.Context,
    no_browser: bool = typer.Option(
        False,
        "--no-browser",
        help="Don't open browser automatically.",
    ),
) -> None:
    """Authenticate with OAuth.

    This command starts the OAuth flow:
    1. Opens browser for authorization
    2. Prompts for the verification PIN
    3. Saves access token for future use
    """
    config: CLIConfig = ctx.obj

    with get_client(config) as client:
        print_info(f"Starting OAuth flow for {config.service} ({config.environment})...")
        request_token = client.login().unwrap()

        if no_browser:
            console.print("\nOpen this URL in your browser:")
            console.print(f"[link]{request_token.authorization_url}[/link]")
        else:
            print_info("Opening browser for authorization...")
            webbrowser.open(request_token.authorization_url)
            console.print("\n[dim]If browser didn't open, visit:[/dim]")
            console.print(f"[link]{request_token.authorization_url}[/link]")

        console.print()
        verifier = typer.prompt("Enter the verification PIN")

        print_info("Exchanging verification PIN for access token...")
        client.authorize(verifier.strip()).unwrap()
        client.save_token()

    print_success(f"Authenticated successfully! Token saved to {config.token_path}")


@app.command("status")
@cli_command
def status(
    ctx: typer.Context,
    check: bool = typer.Option(
        False,
        "--check",
        help="Ask the service whether the saved token is still accepted.",
    ),
) -> None:
    """Check authentication status."""
    config: CLIConfig = ctx.obj

    token_store = TokenStore(path=config.token_path)

    console.print(f"Service: [bold]{config.service}[/bold] ({config.environment})")
    console.print(f"Token path: {config.token_path}")

    if not config.has_credentials():
        print_info("No consumer credentials - run 'ptcloud auth configure' to add them")

    if not token_store.has_token():
        print_info("Not authenticated - run 'ptcloud auth login' to authenticate")
        return

    if not check:
        print_success("Token found - you are authenticated")
        return

    with get_client(config) as client:
        if client.is_authorized():
            print_success("Token accepted by the service")
        else:
            print_error(f"Token rejected: {client.error()}")
            raise typer.Exit(1)


@app.command("logout")
def logout(ctx: typer.Context) -> None:
    """Log out by clearing the saved token."""
    config: CLIConfig = ctx.obj

    token_store = TokenStore(path=config.token_path)

    if not token_store.has_token():
        print_info("No token to clear.")
        return

    token_store.clear()
    print_success(f"Logged out from {config.service} ({config.environment}).")


@app.command("configure")
def configure(
    ctx: typer.Context,
    consumer_key: str = typer.Option(..., prompt=True, help="Application consumer key."),
    consumer_secret: str = typer.Option(
        ..., prompt=True, hide_input=True, help="Application consumer secret."
    ),
) -> None:
    """Save the application's consumer credentials."""
    config: CLIConfig = ctx.obj

    config.save_credentials(consumer_key.strip(), consumer_secret.strip())
    print_success(f"Credentials saved to {config.credentials_path}")

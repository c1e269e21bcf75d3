"""Error handling for CLI commands."""

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

import typer

from ptcloud_client.exceptions import CloudAuthError, CloudError

T = TypeVar("T")


def _is_token_invalid_error(e: CloudError) -> bool:
    """Check if the service rejected the stored access token."""
    return (
        isinstance(e, CloudAuthError)
        and e.stage == "protected_resource"
        and e.status_code == 401
    )


def _handle_token_invalid(ctx: typer.Context) -> None:
    """Handle a rejected token by prompting for re-authentication."""
    from ptcloud_client.cli.formatters import console, print_error, print_info

    print_error("Your access token is missing or was rejected.")
    console.print()

    re_auth = typer.confirm("Would you like to authenticate now?", default=True)

    if re_auth:
        # login is wrapped by @cli_command; __wrapped__ is the plain function
        from ptcloud_client.cli.commands.auth import login

        console.print()
        login.__wrapped__(ctx, no_browser=False)
    else:
        print_info("Run 'ptcloud auth login' when ready to authenticate.")
        raise typer.Exit(1)


def cli_command(f: Callable[..., T]) -> Callable[..., T]:
    """Decorator turning library errors into CLI messages.

    Commands call ``Result.unwrap()`` and let errors propagate here. A
    rejected access token offers to run the login flow and re-runs the
    command; any other error is printed and exits with status 1.

    Usage:
        @app.command()
        @cli_command
        def my_command(ctx: typer.Context):
            with get_client(ctx.obj) as client:
                response = client.account.account_info().unwrap()
                ...
    """

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        from ptcloud_client.cli.formatters import print_error

        try:
            return f(*args, **kwargs)
        except CloudError as e:
            if _is_token_invalid_error(e):
                ctx = next((a for a in args if isinstance(a, typer.Context)), None)
                if ctx is None:
                    # typer passes ctx as keyword arg
                    ctx = kwargs.get("ctx")
                if ctx is not None:
                    _handle_token_invalid(ctx)
                    # Authenticated now; re-run the original command
                    return f(*args, **kwargs)
            print_error(e.message)
            raise typer.Exit(1) from None
        except ValueError as e:
            # Missing credentials
            print_error(str(e))
            raise typer.Exit(1) from None

    return wrapper

"""Typer application and CLI entry point for graph_tutorial.

:func:`run` is the whole program: load settings, sign in with a device
code, then hand the session to the menu loop. Sign-in finishes completely
before the menu is shown.

:func:`main` is the console-script entry point declared in
``pyproject.toml``. It installs a Ctrl-C handler and turns any
:class:`~graph_tutorial.exceptions.GraphTutorialError` that escapes the
command into a clean exit with the matching code.

See Also:
    :mod:`graph_tutorial.config`: Settings file loading.
    :mod:`graph_tutorial.output`: Output initialised in :func:`run`.
"""

from __future__ import annotations

import asyncio
import signal
import sys
from pathlib import Path
from typing import Any

import typer

from graph_tutorial import __version__
from graph_tutorial.auth import DeviceCodeAuthProvider
from graph_tutorial.config import SETTINGS_FILENAME, load_app_settings
from graph_tutorial.exceptions import AuthError
from graph_tutorial.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CANCELLED,
    EXIT_CONFIG_ERROR,
    EXIT_GENERIC_FAILURE,
)
from graph_tutorial.menu import run_menu
from graph_tutorial.models import Session
from graph_tutorial.output import (
    OutputManager,
    error,
    print_data,
    set_output,
    success,
)

BANNER = "Python Graph Tutorial"

app = typer.Typer(
    name="graph-tutorial",
    help="Sign in with a device code and work with Microsoft Graph.",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"graph-tutorial {__version__}")
        raise typer.Exit()


@app.command()
def run(
    settings: Path = typer.Option(
        Path(SETTINGS_FILENAME),
        "--settings",
        "-s",
        help="Path to the settings file.",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Sign in, then show the interactive menu."""
    set_output(OutputManager(no_color=no_color, quiet=quiet, verbose=verbose))

    print_data(f"{BANNER}\n")

    app_settings = load_app_settings(settings)
    if app_settings is None:
        print_data(f"Missing or invalid {settings.name}...exiting")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    # Initialize the auth provider with values from the settings file
    auth_provider = DeviceCodeAuthProvider(
        app_settings.app_id,
        app_settings.scopes,
        authority=app_settings.authority,
    )

    # Request a token to sign in the user
    try:
        access_token = asyncio.run(auth_provider.get_access_token())
    except AuthError as exc:
        error(f"Authentication failed: {exc}")
        raise typer.Exit(code=EXIT_AUTH_FAILURE) from exc

    success("Signed in.")
    session = Session(access_token=access_token)
    run_menu(session)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_CANCELLED)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``graph-tutorial`` console script.

    Unhandled :class:`~graph_tutorial.exceptions.GraphTutorialError`
    instances cause a clean exit with the error's ``exit_code``. Any other
    exception is reported and exits with :data:`EXIT_GENERIC_FAILURE`.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_CANCELLED)
    except Exception as exc:
        from graph_tutorial.exceptions import GraphTutorialError

        if isinstance(exc, GraphTutorialError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)

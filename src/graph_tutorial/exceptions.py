"""Exception hierarchy for graph_tutorial.

All exceptions inherit from :class:`GraphTutorialError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`graph_tutorial.exit_codes`. The application edge in
:mod:`graph_tutorial.app` catches these and exits with the matching code.

Subclass hierarchy::

    GraphTutorialError (exit 1)
    +-- ConfigError     (exit 1)
    +-- AuthError       (exit 3)
"""

from graph_tutorial.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONFIG_ERROR,
    EXIT_GENERIC_FAILURE,
)


class GraphTutorialError(Exception):
    """Base exception for all graph_tutorial errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(GraphTutorialError):
    """Raised when ``appsettings.json`` is missing, malformed, or incomplete."""

    exit_code = EXIT_CONFIG_ERROR


class AuthError(GraphTutorialError):
    """Raised when the device-code sign-in fails (declined, expired, network)."""

    exit_code = EXIT_AUTH_FAILURE

"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to an error category and is referenced by the
corresponding :class:`~graph_tutorial.exceptions.GraphTutorialError`
subclass, so shell wrappers can tell a bad settings file from a failed
sign-in without parsing stderr.

Example::

    $ graph-tutorial
    $ echo $?
    3   # EXIT_AUTH_FAILURE -- the device code expired or was declined
"""

EXIT_SUCCESS = 0
"""The program completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_CONFIG_ERROR = 1
"""``appsettings.json`` is missing or invalid."""

EXIT_AUTH_FAILURE = 3
"""The device-code sign-in failed (declined, expired, or unreachable)."""

EXIT_CANCELLED = 130
"""The user interrupted the program with Ctrl-C."""

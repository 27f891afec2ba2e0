"""graph_tutorial -- sign in with a device code and call Microsoft Graph.

A small interactive console program: it reads ``appsettings.json``, signs
the user in through the OAuth2 Device Authorization Grant, and then offers a
numbered menu for working with the resulting access token.

Typical workflow::

    graph-tutorial                        # uses ./appsettings.json
    graph-tutorial --settings other.json

Modules:
    app: Typer application and CLI entry point.
    config: Loading and validating ``appsettings.json``.
    auth: Device-code token acquisition.
    menu: The interactive menu loop.
    models: Pydantic models shared across the package.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric process exit codes.
    output: stdout/stderr output helpers built on Rich.
"""

__version__ = "0.1.0"

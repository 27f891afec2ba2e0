"""User sign-in for graph_tutorial.

- :class:`AuthProvider` -- abstract base for anything that can produce an
  access token.
- :class:`DeviceCodeAuthProvider` -- OAuth2 Device Authorization Grant
  (:rfc:`8628`) against the Microsoft identity platform.

Typical usage::

    import asyncio
    from graph_tutorial.auth import DeviceCodeAuthProvider

    provider = DeviceCodeAuthProvider(app_id, ["User.Read"])
    token = asyncio.run(provider.get_access_token())
"""

from graph_tutorial.auth.base import AuthProvider
from graph_tutorial.auth.device_code import DeviceCodeAuthProvider

__all__ = ["AuthProvider", "DeviceCodeAuthProvider"]

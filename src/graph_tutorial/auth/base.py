"""Abstract base class for access-token providers.

To add another sign-in strategy, subclass :class:`AuthProvider` and
implement :meth:`~AuthProvider.get_access_token`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AuthProvider(ABC):
    """Produces a bearer access token for the signed-in user."""

    @abstractmethod
    async def get_access_token(self) -> str:
        """Sign the user in and return an access token.

        Returns:
            The opaque bearer token string.

        Raises:
            AuthError: If sign-in fails. Callers treat this as fatal.
        """
        ...

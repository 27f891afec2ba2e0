"""OAuth2 Device Authorization Grant (:rfc:`8628`) against Microsoft identity.

For console programs that have no way to receive a browser redirect. No
client secret is involved: the app registration only needs to allow public
client flows.

Flow:
    1. POST to ``{authority}/oauth2/v2.0/devicecode`` to obtain
       ``device_code`` + ``user_code``.
    2. Print instructions: "Go to {verification_uri} and enter code:
       {user_code}".
    3. Poll ``{authority}/oauth2/v2.0/token`` until the user signs in or
       the code expires.
    4. Return the ``access_token``.

Polling waits with :func:`asyncio.sleep`, so the event loop stays free
while the user signs in elsewhere. Tokens are neither cached nor refreshed.
"""

from __future__ import annotations

import asyncio
import sys
import time
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from graph_tutorial.auth.base import AuthProvider
from graph_tutorial.exceptions import AuthError
from graph_tutorial.models import DEFAULT_AUTHORITY, DeviceCodeGrant
from graph_tutorial.output import debug

DEVICE_CODE_GRANT_TYPE = "urn:ietf:params:oauth:grant-type:device_code"


class DeviceCodeAuthProvider(AuthProvider):
    """Sign a user in with a device code and return their access token.

    Args:
        app_id: Application (client) ID of the app registration.
        scopes: Permission scopes to request, e.g. ``["User.Read"]``.
        authority: Identity platform authority including the tenant
            segment. Defaults to the multi-tenant ``common`` endpoint.
        transport: Optional ``httpx`` transport, used by tests to stand in
            for the identity platform.
    """

    def __init__(
        self,
        app_id: str,
        scopes: list[str],
        authority: str = DEFAULT_AUTHORITY,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._app_id = app_id
        self._scopes = list(scopes)
        self._authority = authority.rstrip("/")
        self._transport = transport

    @property
    def device_authorization_url(self) -> str:
        return f"{self._authority}/oauth2/v2.0/devicecode"

    @property
    def token_url(self) -> str:
        return f"{self._authority}/oauth2/v2.0/token"

    async def get_access_token(self) -> str:
        """Run the device code flow and return the access token.

        Blocks (asynchronously) until the user completes sign-in in a
        browser, declines, or the code expires.

        Returns:
            The access token string.

        Raises:
            AuthError: If the device code request fails, the user declines,
                the code expires, or the identity platform is unreachable.
        """
        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=30.0,
            headers={"Accept": "application/json"},
        ) as client:
            # Step 1: Request device code
            grant = await self._request_device_code(client)

            # Step 2: Display instructions
            self._display_user_code(grant)

            # Step 3: Poll for token
            token_data = await self._poll_for_token(
                client, grant.device_code, grant.interval, grant.expires_in
            )

        debug("Device code sign-in completed")
        return token_data["access_token"]

    async def _request_device_code(self, client: httpx.AsyncClient) -> DeviceCodeGrant:
        """POST to the device authorization endpoint.

        Raises:
            AuthError: On HTTP errors or if ``device_code``/``user_code``
                are missing from the response.
        """
        data: dict[str, str] = {"client_id": self._app_id}
        if self._scopes:
            data["scope"] = " ".join(self._scopes)

        debug(f"Requesting device code from {self.device_authorization_url}")
        try:
            response = await client.post(self.device_authorization_url, data=data)
            response.raise_for_status()
            result = response.json()
        except httpx.HTTPStatusError as exc:
            raise AuthError(
                f"Device authorization request failed with status "
                f"{exc.response.status_code}: {exc.response.text}"
            ) from exc
        except httpx.HTTPError as exc:
            raise AuthError(f"Device authorization request failed: {exc}") from exc
        except ValueError as exc:
            raise AuthError(f"Device authorization response is not JSON: {exc}") from exc

        if not isinstance(result, dict):
            raise AuthError("Device authorization response is not a JSON object")
        if "device_code" not in result:
            raise AuthError("Device authorization response missing 'device_code'")
        if "user_code" not in result:
            raise AuthError("Device authorization response missing 'user_code'")

        try:
            return DeviceCodeGrant.model_validate(result)
        except ValidationError as exc:
            raise AuthError(f"Malformed device authorization response: {exc}") from exc

    def _display_user_code(self, grant: DeviceCodeGrant) -> None:
        """Print the sign-in instructions to the terminal."""
        sys.stderr.write("\n")
        if grant.message:
            sys.stderr.write(f"{grant.message}\n")
        else:
            sys.stderr.write(f"Go to: {grant.verification_uri}\n")
            sys.stderr.write(f"Enter code: {grant.user_code}\n")
        sys.stderr.write("\nWaiting for authorization...\n")
        sys.stderr.flush()

    async def _poll_for_token(
        self,
        client: httpx.AsyncClient,
        device_code: str,
        interval: int,
        expires_in: int,
    ) -> dict[str, Any]:
        """Poll the token endpoint until the user authorizes or the code expires.

        Implements :rfc:`8628` section 3.5: ``authorization_pending`` keeps
        polling, ``slow_down`` adds five seconds to the interval, and
        ``access_denied``/``expired_token`` end the flow. Microsoft also
        reports ``authorization_declined`` and ``code_expired``.

        Args:
            client: Open HTTP client.
            device_code: The device code from the authorization endpoint.
            interval: Minimum polling interval in seconds.
            expires_in: Maximum time to poll before giving up, in seconds.

        Returns:
            The parsed JSON token response containing ``access_token``.

        Raises:
            AuthError: If the user declines, the code expires, polling
                times out, or an unexpected error is returned.
        """
        deadline = time.monotonic() + expires_in
        poll_interval = max(interval, 1)

        data: dict[str, str] = {
            "grant_type": DEVICE_CODE_GRANT_TYPE,
            "client_id": self._app_id,
            "device_code": device_code,
        }

        while time.monotonic() < deadline:
            await asyncio.sleep(poll_interval)

            try:
                response = await client.post(self.token_url, data=data)
            except httpx.HTTPError as exc:
                raise AuthError(f"Token polling failed: {exc}") from exc
            try:
                token_data = response.json()
            except ValueError as exc:
                raise AuthError(
                    f"Token endpoint returned a non-JSON response "
                    f"(status {response.status_code})"
                ) from exc

            if not isinstance(token_data, dict):
                raise AuthError(
                    f"Token endpoint returned a non-object JSON response "
                    f"(status {response.status_code})"
                )

            if response.status_code == 200 and "access_token" in token_data:
                access_token = token_data["access_token"]
                if not isinstance(access_token, str) or not access_token:
                    raise AuthError("Token response has an empty or non-string access_token")
                return token_data

            error = token_data.get("error", "")

            if error == "authorization_pending":
                continue
            elif error == "slow_down":
                poll_interval += 5
                debug(f"Identity platform asked to slow down; polling every {poll_interval}s")
                continue
            elif error in ("access_denied", "authorization_declined"):
                raise AuthError("Authorization declined by user")
            elif error in ("expired_token", "code_expired"):
                raise AuthError("Device code expired -- please try again")
            elif error:
                desc = token_data.get("error_description", error)
                raise AuthError(f"Device code authorization failed: {desc}")
            else:
                raise AuthError(
                    f"Unexpected token response with status {response.status_code}"
                )

        raise AuthError("Device code flow timed out -- please try again")

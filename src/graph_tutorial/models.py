"""Pydantic models shared across graph_tutorial.

**Configuration** -- :class:`AppSettings`, deserialised from
``appsettings.json`` with the camelCase keys the file uses (``appId``,
``scopes``, ``authority``).

**Authentication** -- :class:`DeviceCodeGrant`, the parsed response of the
device authorization endpoint, and :class:`Session`, which carries the
access token from sign-in into the menu loop.

**Menu** -- :class:`MenuChoice`, the fixed set of menu options.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

DEFAULT_AUTHORITY = "https://login.microsoftonline.com/common"


# --- Configuration ---


class AppSettings(BaseModel):
    """Application settings loaded from ``appsettings.json``.

    Validity is all-or-nothing: a missing or empty ``appId``, or a ``scopes``
    list without a non-empty first entry, rejects the whole file.

    Example::

        AppSettings.model_validate({"appId": "abc", "scopes": ["User.Read"]})
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    app_id: str = Field(
        alias="appId",
        min_length=1,
        description="Application (client) ID of the app registration",
    )
    scopes: list[str] = Field(
        min_length=1,
        description="Permission scopes to request, e.g. User.Read",
    )
    authority: str = Field(
        default=DEFAULT_AUTHORITY,
        description="Identity platform authority, tenant included",
    )

    @field_validator("scopes")
    @classmethod
    def _first_scope_present(cls, value: list[str]) -> list[str]:
        if not value[0]:
            raise ValueError("the first scope must be a non-empty string")
        return value

    @field_validator("authority")
    @classmethod
    def _normalise_authority(cls, value: str) -> str:
        value = value.rstrip("/")
        if not value:
            raise ValueError("authority must not be empty")
        return value


# --- Authentication ---


class DeviceCodeGrant(BaseModel):
    """Response of the device authorization endpoint (:rfc:`8628` section 3.2)."""

    model_config = ConfigDict(extra="ignore")

    device_code: str
    user_code: str
    verification_uri: str = Field(
        default="",
        validation_alias=AliasChoices("verification_uri", "verification_url"),
    )
    interval: int = 5
    expires_in: int = 900
    message: Optional[str] = None


class Session(BaseModel):
    """State produced by sign-in and handed to the menu loop.

    Frozen: nothing in the menu loop may replace the token.
    """

    model_config = ConfigDict(frozen=True)

    access_token: str


# --- Menu ---


class MenuChoice(enum.IntEnum):
    """Options offered by the interactive menu."""

    EXIT = 0
    DISPLAY_TOKEN = 1
    LIST_EVENTS = 2

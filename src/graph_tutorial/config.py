"""Loading and validation of ``appsettings.json``.

The settings file lives in the current working directory unless a path is
given explicitly. Two entry points are provided:

* :func:`read_app_settings` -- strict; raises
  :class:`~graph_tutorial.exceptions.ConfigError` describing exactly what
  is wrong.
* :func:`load_app_settings` -- fail-closed; returns ``None`` for any
  problem so the caller only learns "configuration invalid". The detailed
  reason is emitted as a debug diagnostic.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from graph_tutorial.exceptions import ConfigError
from graph_tutorial.models import AppSettings
from graph_tutorial.output import debug

SETTINGS_FILENAME = "appsettings.json"


def default_settings_path() -> Path:
    """Return ``appsettings.json`` in the current working directory."""
    return Path.cwd() / SETTINGS_FILENAME


def read_app_settings(path: Optional[Path] = None) -> AppSettings:
    """Read and validate the settings file.

    Args:
        path: Settings file to read. Defaults to
            :func:`default_settings_path`.

    Returns:
        The validated :class:`~graph_tutorial.models.AppSettings`.

    Raises:
        ConfigError: If the file does not exist, cannot be read, is not a
            JSON object, or fails validation.
    """
    path = path if path is not None else default_settings_path()
    try:
        if not path.is_file():
            raise ConfigError(f"Settings file not found at {path}")
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read settings file {path}: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in settings file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a JSON object")

    try:
        return AppSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings in {path}: {exc}") from exc


def load_app_settings(path: Optional[Path] = None) -> Optional[AppSettings]:
    """Load the settings file, returning ``None`` if it is missing or invalid.

    A missing file and a missing field are indistinguishable to the
    caller.
    """
    try:
        settings = read_app_settings(path)
    except ConfigError as exc:
        debug(str(exc))
        return None
    debug(f"Loaded settings for app {settings.app_id} ({len(settings.scopes)} scope(s))")
    return settings

"""Typed application settings with Pydantic validation."""

from __future__ import annotations

import getpass
import json
from pathlib import Path

import tomllib
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


def default_store_directory() -> str:
    """Return the default directory holding item JSON files."""
    return str(Path.home() / ".itemdesk" / "items")


def default_owner_id() -> str:
    """Return the operating system user name used as the session owner."""
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "local"


def _normalize_timeout(value: float | int | str | None) -> float | None:
    """Coerce *value* into a positive number of seconds or ``None``."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("Boolean is not a valid timeout value")
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        try:
            parsed = float(raw)
        except ValueError:  # pragma: no cover - delegated to Pydantic
            return value
    else:
        parsed = float(value)
    if parsed <= 0:
        return None
    return parsed


class StoreSettings(BaseModel):
    """Where and how items are persisted."""

    model_config = ConfigDict(validate_assignment=True)

    directory: str = Field(default_factory=default_store_directory)
    workers: int = Field(1, ge=1, le=8)

    @field_validator("directory", mode="before")
    @classmethod
    def _normalize_directory(cls, value: str | Path | None) -> str:
        if value is None:
            return default_store_directory()
        text = str(value).strip()
        return text or default_store_directory()


class SessionSettings(BaseModel):
    """Identity of the principal creating items."""

    model_config = ConfigDict(validate_assignment=True)

    owner_id: str = Field(default_factory=default_owner_id)

    @field_validator("owner_id", mode="before")
    @classmethod
    def _normalize_owner_id(cls, value: str | None) -> str:
        if value is None:
            return default_owner_id()
        text = str(value).strip()
        return text or default_owner_id()


class DialogSettings(BaseModel):
    """Timeouts applied by the edit item dialog."""

    model_config = ConfigDict(validate_assignment=True)

    submit_timeout_seconds: float | None = None
    fetch_timeout_seconds: float | None = None

    @field_validator("submit_timeout_seconds", "fetch_timeout_seconds", mode="before")
    @classmethod
    def _normalize_timeouts(cls, value: float | int | str | None) -> float | None:
        """Treat empty and non-positive timeouts as disabled."""
        return _normalize_timeout(value)


class UISettings(BaseModel):
    """Settings related to the graphical user interface."""

    model_config = ConfigDict(validate_assignment=True)

    language: str | None = None
    window_width: int = 640
    window_height: int = 480

    @field_validator("language", mode="before")
    @classmethod
    def _normalise_language(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        return text or None


class AppSettings(BaseModel):
    """Aggregate settings for the application."""

    model_config = ConfigDict(validate_assignment=True)

    store: StoreSettings = Field(default_factory=StoreSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)
    dialog: DialogSettings = Field(default_factory=DialogSettings)
    ui: UISettings = Field(default_factory=UISettings)


def load_app_settings(path: str | Path) -> AppSettings:
    """Load :class:`AppSettings` from *path* with validation.

    Format is detected by file extension: ``.toml`` uses :mod:`tomllib`,
    everything else is treated as JSON. Validation errors are wrapped into
    :class:`ValueError`.
    """
    p = Path(path)
    with p.open("rb") as fh:
        data = tomllib.load(fh) if p.suffix.lower() == ".toml" else json.load(fh)
    try:
        return AppSettings.model_validate(data)
    except ValidationError as exc:
        raise ValueError(str(exc)) from exc

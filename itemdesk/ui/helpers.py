"""Common helpers for UI components."""

from __future__ import annotations

from ..i18n import _


def format_error_message(error: BaseException | None, *, fallback: str | None = None) -> str:
    """Return the text shown to the user for a failed store call.

    Store errors carry a translated message as their text. Errors without
    any text yield *fallback*, or "Unknown error" when none is given.
    """
    text = str(error) if error is not None else ""
    if text.strip():
        return text
    return fallback if fallback is not None else _("Unknown error")

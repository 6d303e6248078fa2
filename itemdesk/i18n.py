"""Runtime gettext translations for ItemDesk."""

from __future__ import annotations

import gettext as _gettext
import os
from collections.abc import Iterable
from gettext import GNUTranslations, NullTranslations
from io import BytesIO
from pathlib import Path

import polib

__all__ = ["_", "N_", "gettext", "ngettext", "install"]

_TRANSLATION: NullTranslations = NullTranslations()


def gettext(message: str) -> str:
    """Translate *message* using the active catalogue."""
    return _TRANSLATION.gettext(message)


def ngettext(singular: str, plural: str, number: int) -> str:
    return _TRANSLATION.ngettext(singular, plural, number)


def N_(message: str) -> str:
    """Mark *message* for extraction and return it untranslated."""
    return message


_ = gettext


def install(
    domain: str,
    localedir: str | os.PathLike[str],
    languages: Iterable[str] = (),
) -> NullTranslations:
    """Activate the catalogue for the first of *languages* that has one.

    A compiled ``.mo`` file wins. Otherwise the ``.po`` source is compiled
    in memory with :mod:`polib` so a checkout works without ``msgfmt``.
    """
    global _TRANSLATION
    localedir = Path(localedir)
    requested = [language for language in languages if language]
    translation = _gettext.translation(
        domain, localedir=str(localedir), languages=requested or None, fallback=True
    )
    if type(translation) is NullTranslations:
        po_path = _find_po_source(localedir, domain, requested)
        if po_path is not None:
            catalog = polib.pofile(str(po_path))
            translation = GNUTranslations(BytesIO(catalog.to_binary()))
    _TRANSLATION = translation
    return translation


def _find_po_source(localedir: Path, domain: str, languages: list[str]) -> Path | None:
    for language in languages:
        # "ru_RU" falls back to "ru"
        for candidate in dict.fromkeys((language, language.split("_")[0])):
            po_path = localedir / candidate / "LC_MESSAGES" / f"{domain}.po"
            if po_path.exists():
                return po_path
    return None

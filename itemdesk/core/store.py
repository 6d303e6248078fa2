"""JSON file storage for items."""

from __future__ import annotations

import json
import os
import re
import tempfile
import uuid
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..i18n import _
from ..log import logger

_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")


class ItemStoreError(Exception):
    """Base class for item storage failures."""


class ItemNotFoundError(ItemStoreError):
    """Raised when an item identifier cannot be located."""

    def __init__(self, item_id: str) -> None:
        self.item_id = item_id
        super().__init__(_("item {item_id} not found").format(item_id=item_id))


def new_item_id() -> str:
    """Return a fresh opaque identifier."""
    return uuid.uuid4().hex


def filename_for(item_id: str) -> str:
    """Return filename for *item_id*, rejecting identifiers unsafe as paths."""
    if not _ID_RE.match(item_id):
        raise ItemNotFoundError(item_id)
    return f"{item_id}.json"


def _read_json(path: Path) -> Any:
    """Read JSON from *path* and raise :class:`ValueError` on invalid content."""
    try:
        with path.open("r", encoding="utf-8") as fh:
            return json.load(fh)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc


def load(directory: str | Path, item_id: str) -> dict[str, Any]:
    """Return raw data of item *item_id* stored in *directory*."""
    path = Path(directory) / filename_for(item_id)
    try:
        data = _read_json(path)
    except FileNotFoundError as exc:
        raise ItemNotFoundError(item_id) from exc
    if not isinstance(data, dict):
        raise ValueError(f"Invalid item data in {path}")
    return data


def load_all(directory: str | Path) -> list[dict[str, Any]]:
    """Return raw data for every readable item in *directory*."""
    path = Path(directory)
    if not path.is_dir():
        return []
    items: list[dict[str, Any]] = []
    for fp in sorted(path.glob("*.json")):
        try:
            data = _read_json(fp)
        except ValueError as exc:
            logger.warning("%s", exc)
            continue
        except OSError as exc:
            logger.warning("Failed to read %s: %s", fp, exc)
            continue
        if isinstance(data, dict):
            items.append(data)
    return items


def save(directory: str | Path, data: Mapping[str, Any]) -> Path:
    """Atomically write *data* into *directory* and return the file path."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename_for(str(data["id"]))
    fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=".item-", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(dict(data), fh, ensure_ascii=False, indent=2, sort_keys=True)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return path

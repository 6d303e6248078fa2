"""Item repository interface and its filesystem implementation."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Protocol

from ..log import logger
from ..util.time import utc_now_iso
from . import store
from .model import Item, item_from_dict, item_to_dict


class ItemRepository(Protocol):
    """Synchronous persistence operations for items."""

    def list_items(self) -> list[Item]:
        """Return all stored items."""

    def get(self, item_id: str) -> Item:
        """Return the item identified by *item_id*."""

    def create(self, fields: Mapping[str, str], owner_id: str) -> Item:
        """Store a new item owned by *owner_id* and return it."""

    def update(self, item_id: str, fields: Mapping[str, str]) -> Item:
        """Merge *fields* into item *item_id* and return the result."""


class FileItemRepository:
    """Store each item as a JSON file inside ``directory``."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)
        self._lock = threading.Lock()

    def list_items(self) -> list[Item]:
        """Return stored items ordered by creation time."""
        items: list[Item] = []
        for data in store.load_all(self.directory):
            try:
                items.append(item_from_dict(data))
            except ValueError as exc:
                logger.warning("Skipping item: %s", exc)
        items.sort(key=lambda item: (item.created_at, item.id))
        return items

    def get(self, item_id: str) -> Item:
        """Return item ``item_id`` or raise :class:`store.ItemNotFoundError`."""
        return item_from_dict(store.load(self.directory, item_id))

    def create(self, fields: Mapping[str, str], owner_id: str) -> Item:
        """Persist a new item and return it with its assigned identifier."""
        if not owner_id:
            raise store.ItemStoreError("an owner is required to create an item")
        now = utc_now_iso()
        item = Item(
            id=store.new_item_id(),
            owner=owner_id,
            fields=dict(fields),
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            store.save(self.directory, item_to_dict(item))
        return item

    def update(self, item_id: str, fields: Mapping[str, str]) -> Item:
        """Merge ``fields`` into the stored item; unknown ids raise."""
        with self._lock:
            current = self.get(item_id)
            item = replace(
                current,
                fields={**current.fields, **fields},
                updated_at=utc_now_iso(),
            )
            store.save(self.directory, item_to_dict(item))
        return item

"""Asynchronous item service used by the edit dialog and the items window."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Protocol, TypeVar

from ..core.model import Item
from ..core.repository import ItemRepository
from ..log import logger

_T = TypeVar("_T")


class ItemStore(Protocol):
    """Record store contract consumed by :class:`ItemEditController`."""

    def fetch_item(self, item_id: str) -> Future[Item]:
        """Start loading *item_id* and return a future with the item."""

    def create_item(self, fields: Mapping[str, str], owner_id: str) -> Future[Item]:
        """Start creating an item owned by *owner_id*."""

    def update_item(self, item_id: str, fields: Mapping[str, str]) -> Future[Item]:
        """Start writing *fields* into item *item_id*."""


class ItemsService:
    """Run repository calls on a worker pool and hand back futures."""

    def __init__(self, repository: ItemRepository, *, max_workers: int = 1) -> None:
        self.repository = repository
        self._pool = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="ItemStore",
        )

    def list_items(self) -> list[Item]:
        """Return all items synchronously."""
        return self.repository.list_items()

    def fetch_item(self, item_id: str) -> Future[Item]:
        return self._submit("fetch", lambda: self.repository.get(item_id))

    def create_item(self, fields: Mapping[str, str], owner_id: str) -> Future[Item]:
        snapshot = dict(fields)
        return self._submit("create", lambda: self.repository.create(snapshot, owner_id))

    def update_item(self, item_id: str, fields: Mapping[str, str]) -> Future[Item]:
        snapshot = dict(fields)
        return self._submit("update", lambda: self.repository.update(item_id, snapshot))

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker pool."""
        self._pool.shutdown(wait=wait)

    def _submit(self, operation: str, func: Callable[[], _T]) -> Future[_T]:
        def run() -> _T:
            try:
                return func()
            except Exception:
                logger.warning("Item %s failed", operation, exc_info=True)
                raise

        return self._pool.submit(run)

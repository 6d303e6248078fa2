"""Service layer abstractions for ItemDesk."""

from .items import ItemsService, ItemStore

__all__ = ["ItemsService", "ItemStore"]

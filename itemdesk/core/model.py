"""Domain model for items."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

_META_KEYS = ("id", "owner", "created_at", "updated_at")


@dataclass(frozen=True)
class Item:
    """Represent a stored item and its editable fields."""

    id: str
    owner: str
    fields: dict[str, str] = field(default_factory=dict)
    created_at: str = ""
    updated_at: str = ""

    @property
    def name(self) -> str:
        """Return the primary text field."""
        return self.fields.get("name", "")


def item_from_dict(data: Mapping[str, Any]) -> Item:
    """Create :class:`Item` from its serialised mapping.

    Editable fields are stored next to the metadata keys, so every key
    that is not metadata is treated as a field value.
    """
    try:
        item_id = str(data["id"])
        owner = str(data["owner"])
    except KeyError as exc:
        raise ValueError(f"item data is missing {exc.args[0]!r}") from exc
    fields = {
        str(key): "" if value is None else str(value)
        for key, value in data.items()
        if key not in _META_KEYS
    }
    return Item(
        id=item_id,
        owner=owner,
        fields=fields,
        created_at=str(data.get("created_at") or ""),
        updated_at=str(data.get("updated_at") or ""),
    )


def item_to_dict(item: Item) -> dict[str, Any]:
    """Serialise *item* into a flat JSON-compatible mapping."""
    data: dict[str, Any] = {"id": item.id, "owner": item.owner}
    data.update(item.fields)
    if item.created_at:
        data["created_at"] = item.created_at
    if item.updated_at:
        data["updated_at"] = item.updated_at
    return data

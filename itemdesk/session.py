"""Session provider supplying the principal that owns new items."""

from __future__ import annotations

from typing import Protocol

from .settings import SessionSettings


class SessionProvider(Protocol):
    """Expose the authenticated principal."""

    def current_owner_id(self) -> str:
        """Return the opaque identifier of the signed-in principal."""


class StaticSession:
    """Session bound to a fixed owner identifier."""

    def __init__(self, owner_id: str) -> None:
        if not owner_id:
            raise ValueError("owner_id must not be empty")
        self._owner_id = owner_id

    @classmethod
    def from_settings(cls, settings: SessionSettings) -> StaticSession:
        return cls(settings.owner_id)

    def current_owner_id(self) -> str:
        return self._owner_id

"""Composition root building shared dependencies for ItemDesk."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from .core.repository import FileItemRepository, ItemRepository
from .services.items import ItemsService
from .session import SessionProvider, StaticSession
from .settings import AppSettings, load_app_settings
from .ui.controllers.item_edit import Dispatch, ItemEditController, call_immediately


class ApplicationContext:
    """Central dependency registry shared by the GUI and tests."""

    def __init__(
        self,
        *,
        settings: AppSettings | None = None,
        repository_factory: Callable[[Path], ItemRepository] = FileItemRepository,
        session: SessionProvider | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._repository_factory = repository_factory
        self._session = session
        self._service: ItemsService | None = None

    @classmethod
    def for_gui(cls, settings_path: str | Path | None = None) -> ApplicationContext:
        """Return a context configured from *settings_path* when given."""
        settings = load_app_settings(settings_path) if settings_path else AppSettings()
        return cls(settings=settings)

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def items_service(self) -> ItemsService:
        """Return the lazily created items service."""
        if self._service is None:
            store_settings = self._settings.store
            repository = self._repository_factory(Path(store_settings.directory).expanduser())
            self._service = ItemsService(repository, max_workers=store_settings.workers)
        return self._service

    @property
    def session(self) -> SessionProvider:
        if self._session is None:
            self._session = StaticSession.from_settings(self._settings.session)
        return self._session

    def create_item_controller(
        self,
        *,
        on_done: Callable[[], None],
        item_id: str | None = None,
        dispatch: Dispatch = call_immediately,
    ) -> ItemEditController:
        """Build a controller for the edit item dialog."""
        dialog_settings = self._settings.dialog
        return ItemEditController(
            self.items_service,
            self.session,
            on_done=on_done,
            item_id=item_id,
            dispatch=dispatch,
            submit_timeout=dialog_settings.submit_timeout_seconds,
            fetch_timeout=dialog_settings.fetch_timeout_seconds,
        )

    def shutdown(self) -> None:
        """Release worker threads held by the context."""
        if self._service is not None:
            self._service.shutdown(wait=False)
            self._service = None

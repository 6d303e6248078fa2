"""State machine behind the edit-or-create item dialog.

The controller owns the form state of one dialog instance and reconciles
the optional pre-population fetch, submit-time validation and the single
in-flight write. It never touches widgets: views subscribe to change
notifications and read the public state back.

Store futures resolve on worker threads. Their outcome is handed to
``dispatch`` (``wx.CallAfter`` in the GUI) so every state change happens on
the thread that owns the view.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import Future
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ...core.fields import ITEM_FIELDS, FieldSpec, empty_fields, populate_fields, validate
from ...core.model import Item
from ...i18n import _
from ...log import log_event, logger
from ...services.items import ItemStore
from ...session import SessionProvider
from ..helpers import format_error_message

Dispatch = Callable[..., Any]
Listener = Callable[["ItemEditController"], None]


def call_immediately(func: Callable[..., Any], *args: Any) -> None:
    """Dispatcher running *func* synchronously on the calling thread."""
    func(*args)


class FetchStatus(str, Enum):
    """Progress of loading the item being edited."""

    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class FetchState:
    status: FetchStatus
    item: Item | None = None
    message: str | None = None


class SubmissionStatus(str, Enum):
    """Lifecycle of the write call."""

    IDLE = "idle"
    PENDING = "pending"
    FAILED = "failed"


@dataclass(frozen=True)
class SubmissionState:
    status: SubmissionStatus
    message: str | None = None


_IDLE = SubmissionState(SubmissionStatus.IDLE)
_PENDING = SubmissionState(SubmissionStatus.PENDING)


class ItemEditController:
    """Drive fetch, validation and submission for one dialog instance."""

    def __init__(
        self,
        store: ItemStore,
        session: SessionProvider,
        *,
        on_done: Callable[[], None],
        item_id: str | None = None,
        specs: Sequence[FieldSpec] = ITEM_FIELDS,
        dispatch: Dispatch = call_immediately,
        submit_timeout: float | None = None,
        fetch_timeout: float | None = None,
    ) -> None:
        self._store = store
        self._session = session
        self._on_done = on_done
        self._dispatch = dispatch
        self._submit_timeout = submit_timeout
        self._fetch_timeout = fetch_timeout
        self.item_id = item_id or None
        self.specs = tuple(specs)
        self.fields: dict[str, str] = empty_fields(self.specs)
        self.field_errors: dict[str, str] = {}
        self.submission: SubmissionState = _IDLE
        if self.item_id is None:
            self.fetch_state = FetchState(FetchStatus.READY)
        else:
            self.fetch_state = FetchState(FetchStatus.LOADING)
        self._listeners: list[Listener] = []
        self._started = False
        self._populated = False
        self._validated_once = False
        self._closed = False
        self._fetch_future: Future[Item] | None = None
        self._submit_token = 0
        self._timer: threading.Timer | None = None

    # ------------------------------------------------------------------
    @property
    def mode(self) -> str:
        return "create" if self.item_id is None else "update"

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def is_pending(self) -> bool:
        return self.submission.status is SubmissionStatus.PENDING

    @property
    def is_form_visible(self) -> bool:
        """Return ``True`` once the fetch gate has opened and fields are seeded."""
        return self.fetch_state.status is FetchStatus.READY and self._populated

    @property
    def can_submit(self) -> bool:
        return self.is_form_visible and not self.is_pending and not self._closed

    @property
    def can_cancel(self) -> bool:
        return not self.is_pending and not self._closed

    @property
    def alert(self) -> str | None:
        """Return the latest submission error, if any."""
        if self.submission.status is SubmissionStatus.FAILED:
            return self.submission.message
        return None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* for state changes and return an unsubscriber."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # fetch gate --------------------------------------------------------
    def start(self) -> None:
        """Open the fetch gate, loading the item first in edit mode."""
        if self._started:
            return
        self._started = True
        if self.item_id is None:
            self._populate(None)
            return
        log_event("item_dialog.fetch", {"item_id": self.item_id}, level=logging.DEBUG)
        try:
            future = self._store.fetch_item(self.item_id)
        except Exception as exc:
            self._fail_fetch(exc)
            return
        self._fetch_future = future
        if self._fetch_timeout is not None:
            self._arm_timer(self._fetch_timeout, self._on_fetch_timeout, future)
        future.add_done_callback(lambda fut: self._dispatch(self._on_fetch_done, fut))

    def _on_fetch_done(self, future: Future[Item]) -> None:
        if self._closed or future is not self._fetch_future:
            return
        if self.fetch_state.status is not FetchStatus.LOADING:
            return
        self._cancel_timer()
        if future.cancelled():
            self._fail_fetch(None)
            return
        exc = future.exception()
        if exc is not None:
            self._fail_fetch(exc)
            return
        self._populate(future.result())

    def _on_fetch_timeout(self, future: Future[Item]) -> None:
        if self._closed or future is not self._fetch_future:
            return
        if self.fetch_state.status is not FetchStatus.LOADING:
            return
        self._fail_fetch(TimeoutError(_("The request timed out")))

    def _fail_fetch(self, exc: BaseException | None) -> None:
        message = format_error_message(exc, fallback=_("Unable to load the item"))
        logger.warning("Failed to load item %s: %s", self.item_id, message)
        self.fetch_state = FetchState(FetchStatus.ERROR, message=message)
        self._notify()

    def _populate(self, item: Item | None) -> None:
        if self._populated:
            return
        self.fields = populate_fields(item.fields if item else None, self.specs)
        self.fetch_state = FetchState(FetchStatus.READY, item=item)
        self._populated = True
        self._notify()

    # form --------------------------------------------------------------
    def set_field(self, name: str, value: str) -> None:
        """Store user input for field *name*."""
        if name not in self.fields:
            raise KeyError(name)
        if not self.is_form_visible or self._closed:
            return
        if self.fields[name] == value:
            return
        self.fields[name] = value
        if self._validated_once:
            self.field_errors = validate(self.fields, self.specs)
        self._notify()

    def submit(self) -> Future[Item] | None:
        """Validate and issue the write call.

        Returns the write future, or ``None`` when nothing was sent because
        the form is not ready, a write is already pending or validation
        failed.
        """
        if not self.can_submit:
            if self.is_pending:
                logger.debug("Ignoring submit while a write is pending")
            return None
        self._validated_once = True
        self.field_errors = validate(self.fields, self.specs)
        if self.field_errors:
            log_event("item_dialog.invalid", sorted(self.field_errors), level=logging.DEBUG)
            self._notify()
            return None

        values = dict(self.fields)
        self._submit_token += 1
        token = self._submit_token
        self.submission = _PENDING
        self._notify()
        log_event("item_dialog.submit", {"mode": self.mode, "item_id": self.item_id})
        try:
            if self.item_id is None:
                future = self._store.create_item(values, self._session.current_owner_id())
            else:
                future = self._store.update_item(self.item_id, values)
        except Exception as exc:
            self._fail_submit(token, exc)
            return None
        if self._submit_timeout is not None:
            self._arm_timer(self._submit_timeout, self._on_submit_timeout, token)
        future.add_done_callback(
            lambda fut: self._dispatch(self._on_submit_done, token, fut)
        )
        return future

    def _on_submit_done(self, token: int, future: Future[Item]) -> None:
        if self._closed or token != self._submit_token or not self.is_pending:
            logger.debug("Discarding stale write outcome (token=%s)", token)
            return
        self._cancel_timer()
        if future.cancelled():
            self._fail_submit(token, None)
            return
        exc = future.exception()
        if exc is not None:
            self._fail_submit(token, exc)
            return
        self.submission = _IDLE
        saved_id = getattr(future.result(), "id", None)
        log_event("item_dialog.saved", {"mode": self.mode, "item_id": saved_id})
        self._complete()

    def _on_submit_timeout(self, token: int) -> None:
        if self._closed or token != self._submit_token or not self.is_pending:
            return
        self._fail_submit(token, TimeoutError(_("The request timed out")))

    def _fail_submit(self, token: int, exc: BaseException | None) -> None:
        if token != self._submit_token:
            return
        self._cancel_timer()
        message = format_error_message(exc)
        logger.warning("Failed to save item (%s): %s", self.mode, message)
        self.submission = SubmissionState(SubmissionStatus.FAILED, message)
        self._notify()

    # completion --------------------------------------------------------
    def cancel(self) -> bool:
        """Hand control back to the caller without writing.

        Returns ``False`` while a write is pending, when cancelling is
        unavailable.
        """
        if not self.can_cancel:
            return False
        log_event("item_dialog.cancel", {"mode": self.mode}, level=logging.DEBUG)
        self._complete()
        return True

    def dismiss(self) -> None:
        """Close the dialog frame in any state; a pending write is abandoned."""
        if self._closed:
            return
        if self.is_pending:
            logger.info("Dialog dismissed while a write is pending")
        self._complete()

    def _complete(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._cancel_timer()
        self._listeners.clear()
        self._on_done()

    # helpers -----------------------------------------------------------
    def _arm_timer(self, timeout: float, callback: Callable[..., None], *args: Any) -> None:
        self._cancel_timer()
        timer = threading.Timer(timeout, self._dispatch, args=(callback, *args))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _cancel_timer(self) -> None:
        timer = self._timer
        self._timer = None
        if timer is not None:
            timer.cancel()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)


__all__ = [
    "FetchState",
    "FetchStatus",
    "ItemEditController",
    "SubmissionState",
    "SubmissionStatus",
    "call_immediately",
]

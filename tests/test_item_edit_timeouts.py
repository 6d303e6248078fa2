import threading

from itemdesk.ui.controllers.item_edit import (
    FetchStatus,
    ItemEditController,
    SubmissionStatus,
)
from tests.store_utils import DoneRecorder, FixedSession, ManualItemStore, make_item


def _wait_for(controller, predicate, timeout=2.0):
    reached = threading.Event()

    def listener(c):
        if predicate(c):
            reached.set()

    controller.subscribe(listener)
    if predicate(controller):
        return True
    return reached.wait(timeout)


def test_submit_timeout_maps_to_failed_and_ignores_late_result():
    store = ManualItemStore()
    done = DoneRecorder()
    controller = ItemEditController(
        store, FixedSession(), on_done=done, submit_timeout=0.05
    )
    controller.start()
    controller.set_field("name", "Widget")
    controller.submit()

    assert _wait_for(controller, lambda c: c.submission.status is SubmissionStatus.FAILED)
    assert controller.alert == "The request timed out"
    assert controller.fields["name"] == "Widget"

    store.last("create").resolve(make_item("late", name="Widget"))
    assert done.count == 0
    assert controller.alert == "The request timed out"


def test_fetch_timeout_maps_to_fetch_error():
    store = ManualItemStore()
    controller = ItemEditController(
        store, FixedSession(), on_done=DoneRecorder(), item_id="abc", fetch_timeout=0.05
    )
    controller.start()

    assert _wait_for(controller, lambda c: c.fetch_state.status is FetchStatus.ERROR)
    assert controller.fetch_state.message == "The request timed out"

    store.last("fetch").resolve(make_item("abc", name="Widget"))
    assert not controller.is_form_visible


def test_write_resolving_before_timeout_cancels_timer():
    store = ManualItemStore()
    done = DoneRecorder()
    controller = ItemEditController(
        store, FixedSession(), on_done=done, submit_timeout=5
    )
    controller.start()
    controller.set_field("name", "Widget")
    controller.submit()
    store.last("create").resolve(make_item("n1", name="Widget"))

    assert done.count == 1
    assert controller._timer is None

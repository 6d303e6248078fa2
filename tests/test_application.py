import threading

import pytest

from itemdesk.application import ApplicationContext
from itemdesk.settings import AppSettings
from itemdesk.ui.controllers.item_edit import FetchStatus


@pytest.fixture
def context(tmp_path):
    settings = AppSettings.model_validate(
        {
            "store": {"directory": str(tmp_path)},
            "session": {"owner_id": "alice"},
            "dialog": {"submit_timeout_seconds": 30},
        }
    )
    ctx = ApplicationContext(settings=settings)
    yield ctx
    ctx.shutdown()


def test_session_comes_from_settings(context):
    assert context.session.current_owner_id() == "alice"


def test_controller_creates_item_in_store(context):
    done = []
    controller = context.create_item_controller(on_done=lambda: done.append(True))
    controller.start()
    controller.set_field("name", "Widget")

    future = controller.submit()
    item = future.result(timeout=5)

    assert item.owner == "alice"
    assert [i.name for i in context.items_service.list_items()] == ["Widget"]
    assert controller._submit_timeout == 30


def test_controller_edits_existing_item(context):
    created = context.items_service.create_item({"name": "Widget"}, "alice").result(timeout=5)
    controller = context.create_item_controller(item_id=created.id, on_done=lambda: None)
    ready = threading.Event()
    controller.subscribe(
        lambda c: ready.set() if c.fetch_state.status is FetchStatus.READY else None
    )
    controller.start()

    assert ready.wait(5)
    assert controller.fields["name"] == "Widget"

"""Pytest configuration for the GUI test suite."""

import pytest

from itemdesk.application import ApplicationContext
from itemdesk.settings import AppSettings


@pytest.fixture
def gui_context(tmp_path) -> ApplicationContext:
    """Provide an application context storing items under ``tmp_path``."""

    pytest.importorskip("wx")
    settings = AppSettings.model_validate(
        {"store": {"directory": str(tmp_path / "items")}, "session": {"owner_id": "tester"}}
    )
    context = ApplicationContext(settings=settings)
    yield context
    context.shutdown()

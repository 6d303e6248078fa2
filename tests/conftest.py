"""Pytest configuration for the ItemDesk test suite."""

from __future__ import annotations

import contextlib
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from gettext import NullTranslations
from types import MethodType, ModuleType
from typing import TYPE_CHECKING

import pytest

from itemdesk import i18n

if TYPE_CHECKING:  # pragma: no cover - typing hints for wx fixtures
    import wx


_SUITE_STASH_KEY = pytest.StashKey["SuiteDefinition"]()


@dataclass(frozen=True)
class SuiteDefinition:
    """Describe how a logical test suite filters collected tests."""

    name: str
    include_any: Sequence[str] = ()
    exclude_any: Sequence[str] = ()
    description: str = ""

    def should_run(self, item: pytest.Item) -> bool:
        markers = {marker.name for marker in item.iter_markers()}
        if self.include_any:
            return bool(markers & set(self.include_any))
        return not markers & set(self.exclude_any)


SUITES: Mapping[str, SuiteDefinition] = {
    "core": SuiteDefinition(
        name="core",
        exclude_any=("gui",),
        description="State machine, store and settings checks without a display",
    ),
    "gui": SuiteDefinition(
        name="gui",
        include_any=("gui",),
        description="wx dialog and window checks (needs Xvfb or a display)",
    ),
}


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--suite",
        action="store",
        choices=sorted(SUITES),
        help="Select the logical test suite to run",
    )


def pytest_configure(config: pytest.Config) -> None:
    suite_name = config.getoption("--suite")
    if suite_name is not None:
        config.stash[_SUITE_STASH_KEY] = SUITES[suite_name]


@pytest.hookimpl(trylast=True)
def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    suite = config.stash.get(_SUITE_STASH_KEY, None)
    if suite is None:
        return
    selected = [item for item in items if suite.should_run(item)]
    deselected = [item for item in items if not suite.should_run(item)]
    if deselected:
        config.hook.pytest_deselected(items=deselected)
        items[:] = selected


@pytest.fixture(autouse=True)
def _reset_translation(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep every test on the untranslated catalogue."""
    monkeypatch.setattr(i18n, "_TRANSLATION", NullTranslations())


def _destroy_top_windows(wx: ModuleType) -> None:
    """Hide and destroy any lingering top-level windows."""

    for window in list(wx.GetTopLevelWindows()):
        if not window:
            continue
        with contextlib.suppress(Exception):
            window.Hide()
            window.Destroy()


def _install_safe_yield(app: wx.App) -> None:
    """Replace ``wx.App.Yield`` with a pump over pending events."""

    def _safe_yield(self: wx.App, *args, **kwargs) -> None:
        for _ in range(5):
            had_events = False
            while self.HasPendingEvents():
                had_events = True
                self.ProcessPendingEvents()
            if not had_events:
                break

    app.Yield = MethodType(_safe_yield, app)


@pytest.fixture(scope="session")
def _wx_session_app(request: pytest.FixtureRequest, xvfb: None) -> tuple[ModuleType, wx.App]:
    """Create a shared ``wx.App`` guarded by the xvfb fixture."""

    wx = pytest.importorskip("wx")
    app = wx.App()
    _install_safe_yield(app)

    def _finalise() -> None:
        _destroy_top_windows(wx)
        with contextlib.suppress(Exception):
            app.Destroy()

    request.addfinalizer(_finalise)
    return wx, app


@pytest.fixture
def wx_app(_wx_session_app: tuple[ModuleType, wx.App]) -> wx.App:
    """Return the shared ``wx.App`` destroying windows left by each test."""

    wx, app = _wx_session_app
    _destroy_top_windows(wx)
    yield app
    _destroy_top_windows(wx)

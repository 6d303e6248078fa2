"""Application entry point for ItemDesk."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import wx

from itemdesk import i18n
from itemdesk.application import ApplicationContext
from itemdesk.log import (
    configure_logging,
    get_log_directory,
    install_exception_hooks,
    logger,
)
from itemdesk.ui.items_frame import ItemsFrame

APP_NAME = "ItemDesk"
LOCALE_DIR = Path(__file__).resolve().parent / "locale"


def init_locale(language: str | None = None) -> wx.Locale:
    """Initialize wx locale and load translations."""
    if language and hasattr(wx.Locale, "FindLanguageInfo"):
        info = wx.Locale.FindLanguageInfo(language)
        locale = wx.Locale(info.Language) if info else wx.Locale(wx.LANGUAGE_DEFAULT)
    else:
        locale = wx.Locale(wx.LANGUAGE_DEFAULT)
    languages: list[str] = []
    if language:
        languages.append(language)
    elif hasattr(locale, "GetName") and locale.GetName():
        languages.append(locale.GetName())
    i18n.install(APP_NAME, LOCALE_DIR, languages)
    return locale


class ItemDeskApp(wx.App):
    """Custom wx.App that logs unhandled GUI exceptions."""

    def OnExceptionInMainLoop(self) -> bool:  # pragma: no cover - GUI path
        logger.exception("Unhandled exception in GUI main loop", exc_info=sys.exc_info())
        return super().OnExceptionInMainLoop()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ItemDesk")
    parser.add_argument("--settings", help="path to JSON/TOML settings")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run the wx application with the items window."""
    args = build_parser().parse_args(argv)
    configure_logging()
    logger.info("Writing logs to %s", get_log_directory())
    install_exception_hooks()
    context = ApplicationContext.for_gui(args.settings)
    app = ItemDeskApp()
    app.locale = init_locale(context.settings.ui.language)
    frame = ItemsFrame(None, context=context)
    frame.Show()
    app.MainLoop()


if __name__ == "__main__":  # pragma: no cover
    main()

"""Main window listing items and launching the edit dialog."""

from __future__ import annotations

import wx

from ..application import ApplicationContext
from ..core.model import Item
from ..i18n import _, ngettext
from ..log import logger
from .edit_item_dialog import EditItemDialog, show_edit_item_dialog
from .helpers import format_error_message


class ItemsFrame(wx.Frame):
    """Top-level window owning the item list and at most one open dialog."""

    def __init__(self, parent: wx.Window | None, *, context: ApplicationContext) -> None:
        ui = context.settings.ui
        super().__init__(parent, title=_("Items"), size=(ui.window_width, ui.window_height))
        self.context = context
        self.items: list[Item] = []
        self.dialog: EditItemDialog | None = None

        panel = wx.Panel(self)
        self.list = wx.ListCtrl(panel, style=wx.LC_REPORT | wx.LC_SINGLE_SEL)
        self.list.InsertColumn(0, _("Name"), width=320)
        self.list.InsertColumn(1, _("Updated"), width=200)
        self.list.Bind(wx.EVT_LIST_ITEM_ACTIVATED, self._on_activate)
        self.list.Bind(wx.EVT_LIST_ITEM_SELECTED, self._on_selection_changed)
        self.list.Bind(wx.EVT_LIST_ITEM_DESELECTED, self._on_selection_changed)

        self.new_btn = wx.Button(panel, label=_("New item"))
        self.edit_btn = wx.Button(panel, label=_("Edit"))
        self.refresh_btn = wx.Button(panel, label=_("Refresh"))
        self.new_btn.Bind(wx.EVT_BUTTON, self._on_new)
        self.edit_btn.Bind(wx.EVT_BUTTON, self._on_edit)
        self.refresh_btn.Bind(wx.EVT_BUTTON, lambda _event: self.refresh())

        btn_sizer = wx.BoxSizer(wx.HORIZONTAL)
        btn_sizer.Add(self.new_btn, 0, wx.RIGHT, 5)
        btn_sizer.Add(self.edit_btn, 0, wx.RIGHT, 5)
        btn_sizer.AddStretchSpacer()
        btn_sizer.Add(self.refresh_btn, 0)

        sizer = wx.BoxSizer(wx.VERTICAL)
        sizer.Add(btn_sizer, 0, wx.ALL | wx.EXPAND, 5)
        sizer.Add(self.list, 1, wx.LEFT | wx.RIGHT | wx.BOTTOM | wx.EXPAND, 5)
        panel.SetSizer(sizer)

        self.CreateStatusBar()
        self.Bind(wx.EVT_CLOSE, self._on_close)
        self.refresh()

    # ------------------------------------------------------------------
    def refresh(self) -> None:
        """Reload items from the store into the list."""
        try:
            self.items = self.context.items_service.list_items()
        except Exception as exc:
            logger.exception("Failed to list items")
            self.items = []
            self.SetStatusText(format_error_message(exc))
        else:
            count = len(self.items)
            self.SetStatusText(ngettext("{count} item", "{count} items", count).format(count=count))
        self.list.DeleteAllItems()
        for index, item in enumerate(self.items):
            self.list.InsertItem(index, item.name)
            self.list.SetItem(index, 1, item.updated_at)
        self._update_buttons()

    def open_dialog(self, item_id: str | None = None) -> EditItemDialog | None:
        """Open the edit dialog; create mode when *item_id* is ``None``."""
        if self.dialog is not None:
            self.dialog.Raise()
            return None
        controller = self.context.create_item_controller(
            item_id=item_id,
            on_done=self._on_dialog_done,
            dispatch=wx.CallAfter,
        )
        self.dialog = show_edit_item_dialog(self, controller)
        self._update_buttons()
        return self.dialog

    def selected_item(self) -> Item | None:
        index = self.list.GetFirstSelected()
        if index < 0 or index >= len(self.items):
            return None
        return self.items[index]

    # event handlers ----------------------------------------------------
    def _on_dialog_done(self) -> None:
        dialog = self.dialog
        self.dialog = None
        if dialog is not None:
            dialog.Destroy()
        self.refresh()

    def _on_new(self, _event: wx.CommandEvent) -> None:
        self.open_dialog()

    def _on_edit(self, _event: wx.CommandEvent) -> None:
        item = self.selected_item()
        if item is not None:
            self.open_dialog(item.id)

    def _on_activate(self, event: wx.ListEvent) -> None:
        index = event.GetIndex()
        if 0 <= index < len(self.items):
            self.open_dialog(self.items[index].id)

    def _on_selection_changed(self, event: wx.ListEvent) -> None:
        self._update_buttons()
        event.Skip()

    def _on_close(self, event: wx.CloseEvent) -> None:
        if self.dialog is not None:
            self.dialog.controller.dismiss()
        self.context.shutdown()
        event.Skip()

    def _update_buttons(self) -> None:
        idle = self.dialog is None
        self.new_btn.Enable(idle)
        self.edit_btn.Enable(idle and self.selected_item() is not None)

"""Dialog creating a new item or editing an existing one."""

from __future__ import annotations

import wx

from ..i18n import _
from .controllers.item_edit import FetchStatus, ItemEditController

BUSY_LABEL = "..."


class EditItemDialog(wx.Dialog):
    """Modeless view rendering an :class:`ItemEditController`.

    The dialog stays hidden while the controller waits for the item to
    load. All user actions are forwarded to the controller and the widgets
    are refreshed from its state on every change notification.
    """

    def __init__(self, parent: wx.Window | None, controller: ItemEditController) -> None:
        title = _("Update Item") if controller.mode == "update" else _("Create Item")
        super().__init__(
            parent,
            title=title,
            style=wx.DEFAULT_DIALOG_STYLE | wx.RESIZE_BORDER,
        )
        self.controller = controller
        self._opened = False
        self._layout_key: tuple | None = None
        self.inputs: dict[str, wx.TextCtrl] = {}
        self.error_labels: dict[str, wx.StaticText] = {}

        main_sizer = wx.BoxSizer(wx.VERTICAL)

        self.alert = wx.StaticText(self, label="")
        self.alert.SetForegroundColour(wx.RED)
        self.alert.Hide()
        main_sizer.Add(self.alert, 0, wx.LEFT | wx.RIGHT | wx.TOP | wx.EXPAND, 10)

        self.fetch_error = wx.StaticText(self, label="")
        self.fetch_error.SetForegroundColour(wx.RED)
        self.fetch_error.Hide()
        main_sizer.Add(self.fetch_error, 0, wx.ALL | wx.EXPAND, 10)

        self.form_panel = wx.Panel(self)
        form_sizer = wx.BoxSizer(wx.VERTICAL)
        for spec in controller.specs:
            form_sizer.Add(wx.StaticText(self.form_panel, label=_(spec.label)), 0, wx.TOP, 5)
            style = wx.TE_MULTILINE if spec.multiline else 0
            ctrl = wx.TextCtrl(self.form_panel, style=style)
            if spec.placeholder and not spec.multiline:
                ctrl.SetHint(_(spec.placeholder))
            if spec.multiline:
                ctrl.SetMinSize((-1, 80))
            ctrl.Bind(wx.EVT_TEXT, lambda event, name=spec.name: self._on_text(name, event))
            form_sizer.Add(ctrl, 0, wx.EXPAND | wx.TOP, 2)
            error_label = wx.StaticText(self.form_panel, label="")
            error_label.SetForegroundColour(wx.RED)
            error_label.Hide()
            form_sizer.Add(error_label, 0, wx.TOP, 2)
            self.inputs[spec.name] = ctrl
            self.error_labels[spec.name] = error_label
        self.form_panel.SetSizer(form_sizer)
        main_sizer.Add(self.form_panel, 1, wx.LEFT | wx.RIGHT | wx.EXPAND, 10)

        btn_sizer = wx.BoxSizer(wx.HORIZONTAL)
        self.cancel_btn = wx.Button(self, wx.ID_CANCEL, _("Cancel"))
        self.save_btn = wx.Button(self, wx.ID_OK, _("Save"))
        btn_sizer.Add(self.cancel_btn, 0, wx.RIGHT, 5)
        btn_sizer.Add(self.save_btn, 0)
        main_sizer.Add(btn_sizer, 0, wx.ALIGN_RIGHT | wx.ALL, 10)

        self.SetSizer(main_sizer)
        self.SetMinSize((360, 200))
        self.save_btn.SetDefault()

        self.save_btn.Bind(wx.EVT_BUTTON, self._on_save)
        self.cancel_btn.Bind(wx.EVT_BUTTON, self._on_cancel)
        self.Bind(wx.EVT_CLOSE, self._on_close)
        self.Bind(wx.EVT_WINDOW_DESTROY, self._on_destroy)
        self._unsubscribe = controller.subscribe(self._on_state_changed)

    # ------------------------------------------------------------------
    def open(self) -> None:
        """Start the controller and show the dialog once its form is ready."""
        self._opened = True
        self.controller.start()
        self._render()

    def _on_state_changed(self, _controller: ItemEditController) -> None:
        self._render()

    def _render(self) -> None:
        controller = self.controller
        status = controller.fetch_state.status
        if status is FetchStatus.LOADING:
            if self.IsShown():
                self.Hide()
            return

        if status is FetchStatus.ERROR:
            self.form_panel.Hide()
            self.save_btn.Hide()
            self.fetch_error.SetLabel(controller.fetch_state.message or "")
            self.fetch_error.Show()
        else:
            self.fetch_error.Hide()
            self.form_panel.Show()
            self.save_btn.Show()
            for name, ctrl in self.inputs.items():
                value = controller.fields.get(name, "")
                if ctrl.GetValue() != value:
                    ctrl.ChangeValue(value)
            for name, label in self.error_labels.items():
                message = controller.field_errors.get(name, "")
                label.SetLabel(message)
                label.Show(bool(message))

        alert = controller.alert
        self.alert.SetLabel(alert or "")
        self.alert.Show(bool(alert))
        self.save_btn.Enable(controller.can_submit)
        self.save_btn.SetLabel(BUSY_LABEL if controller.is_pending else _("Save"))
        self.cancel_btn.Enable(controller.can_cancel)

        # refit only when visible rows change so typing keeps a user-chosen size
        layout_key = (status, alert, tuple(sorted(controller.field_errors.items())))
        if layout_key != self._layout_key:
            self._layout_key = layout_key
            self.form_panel.Layout()
            self.Layout()
            self.Fit()
        if self._opened and not self.IsShown():
            self.Show()
            first = self.inputs.get(controller.specs[0].name) if controller.specs else None
            if first is not None and controller.is_form_visible:
                first.SetFocus()

    # event handlers ----------------------------------------------------
    def _on_text(self, name: str, event: wx.CommandEvent) -> None:
        self.controller.set_field(name, self.inputs[name].GetValue())
        event.Skip()

    def _on_save(self, _event: wx.CommandEvent) -> None:
        self.controller.submit()

    def _on_cancel(self, _event: wx.CommandEvent) -> None:
        self.controller.cancel()

    def _on_close(self, _event: wx.CloseEvent) -> None:
        self.controller.dismiss()

    def _on_destroy(self, event: wx.WindowDestroyEvent) -> None:
        if event.GetEventObject() is self:
            self._unsubscribe()
        event.Skip()


def show_edit_item_dialog(
    parent: wx.Window | None, controller: ItemEditController
) -> EditItemDialog:
    """Create an :class:`EditItemDialog` for *controller* and open it."""
    dialog = EditItemDialog(parent, controller)
    dialog.open()
    return dialog

"""
MD Compose - File Preview Dialog

Read-only viewer for one attached file. Scroll offsets are reported to the
preview session and the saved offset is applied once the dialog has been
laid out.
"""

from collections.abc import Callable

import gi

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")
from gi.repository import Adw, Gdk, Gtk

from mdcompose.config import PREVIEW_DIALOG_HEIGHT, PREVIEW_DIALOG_WIDTH
from mdcompose.services.file_record import FileRecord
from mdcompose.services.preview_session import PreviewSessionController
from mdcompose.utils.format_utils import format_file_size
from mdcompose.utils.logger import logger
from mdcompose.utils.timer import TimerManager

_RESTORE_TIMER = "preview-restore"


class PreviewDialog:
    """Adw.Window showing the active file of a preview session."""

    def __init__(
        self,
        parent: Gtk.Window,
        session: PreviewSessionController,
        timers: TimerManager,
        on_closed: Callable[[], None] | None = None,
    ) -> None:
        self._parent = parent
        self._session = session
        self._timers = timers
        self._on_closed = on_closed
        self._window: Adw.Window | None = None
        self._adjustment: Gtk.Adjustment | None = None
        self._pending_offset: int | None = None

    @property
    def is_visible(self) -> bool:
        return self._window is not None

    def show(self, record: FileRecord) -> None:
        """Open ``record`` in the dialog, replacing any file already shown."""
        self.dismiss()
        self._session.open(record)
        self._pending_offset = self._session.restore_offset(record)

        win = Adw.Window()
        win.set_title(record.name)
        win.set_default_size(PREVIEW_DIALOG_WIDTH, PREVIEW_DIALOG_HEIGHT)
        win.set_transient_for(self._parent)
        win.set_modal(True)
        win.connect("close-request", self._on_close_request)

        toolbar_view = Adw.ToolbarView()
        header = Adw.HeaderBar()
        header.set_title_widget(Adw.WindowTitle(title=record.path, subtitle=self._subtitle(record)))
        toolbar_view.add_top_bar(header)

        scrolled = Gtk.ScrolledWindow()
        scrolled.set_policy(Gtk.PolicyType.AUTOMATIC, Gtk.PolicyType.AUTOMATIC)
        scrolled.set_vexpand(True)
        scrolled.set_hexpand(True)
        scrolled.set_child(self._create_text_view(record.content))
        toolbar_view.set_content(scrolled)

        self._adjustment = scrolled.get_vadjustment()
        self._adjustment.connect("value-changed", self._on_value_changed)
        self._adjustment.connect("changed", self._on_adjustment_changed)

        key_ctrl = Gtk.EventControllerKey()
        key_ctrl.connect("key-pressed", self._on_key_pressed)
        toolbar_view.add_controller(key_ctrl)

        win.set_content(toolbar_view)
        self._window = win
        win.present()

        # Layout happens after present(); retry once the loop is idle
        self._timers.add_idle(_RESTORE_TIMER, self._apply_pending_offset)

    def dismiss(self) -> None:
        """Close the dialog if it is open."""
        if self._window is None:
            return
        win = self._window
        self._window = None
        self._adjustment = None
        self._pending_offset = None
        self._timers.remove_timer(_RESTORE_TIMER)
        win.destroy()

    @staticmethod
    def _subtitle(record: FileRecord) -> str:
        size = format_file_size(record.size)
        return f"{size} - {record.extension}" if record.extension else size

    @staticmethod
    def _create_text_view(content: str) -> Gtk.TextView:
        text_view = Gtk.TextView()
        text_view.set_editable(False)
        text_view.set_cursor_visible(False)
        text_view.set_monospace(True)
        text_view.set_wrap_mode(Gtk.WrapMode.NONE)
        text_view.set_left_margin(12)
        text_view.set_right_margin(12)
        text_view.set_top_margin(12)
        text_view.set_bottom_margin(12)
        text_view.get_buffer().set_text(content)
        return text_view

    def _apply_pending_offset(self) -> None:
        if self._adjustment is None or self._pending_offset is None:
            return

        upper = self._adjustment.get_upper()
        page_size = self._adjustment.get_page_size()
        if upper <= 0:
            # Not measured yet, the "changed" signal will retry
            return

        offset = min(self._pending_offset, max(upper - page_size, 0))
        self._pending_offset = None
        self._adjustment.set_value(offset)
        logger.debug(f"Restored preview scroll offset {offset}")

    def _on_adjustment_changed(self, _adjustment: Gtk.Adjustment) -> None:
        if self._pending_offset is not None:
            self._apply_pending_offset()

    def _on_value_changed(self, adjustment: Gtk.Adjustment) -> None:
        # Ignore layout-driven changes until the saved offset is applied
        if self._pending_offset is not None:
            return
        self._session.on_scroll(adjustment.get_value())

    def _on_key_pressed(self, _ctrl, keyval, _keycode, _mod) -> bool:
        if keyval == Gdk.KEY_Escape and self._window is not None:
            self._window.close()
            return True
        return False

    def _on_close_request(self, _window: Adw.Window) -> bool:
        self._session.close()
        self._window = None
        self._adjustment = None
        self._pending_offset = None
        self._timers.remove_timer(_RESTORE_TIMER)
        if self._on_closed:
            self._on_closed()
        return False

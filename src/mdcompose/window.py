"""
MD Compose - Window Module

This module contains the main editor window.
"""

import gi

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")
from gi.repository import Adw, Gdk, Gio, Gtk

from mdcompose.config import (
    APP_ICON_NAME,
    APP_NAME,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    WINDOW_STATE_KEY,
)
from mdcompose.services.editor_state import EditorState
from mdcompose.services.export_service import build_prompt
from mdcompose.services.file_loader import load_file_records
from mdcompose.services.file_record import FileRecord
from mdcompose.ui.file_chooser import FileChooser
from mdcompose.ui.file_list import FileListView
from mdcompose.ui.preview_dialog import PreviewDialog
from mdcompose.utils.config_manager import get_config_manager
from mdcompose.utils.exceptions import StoreWriteError
from mdcompose.utils.format_utils import format_file_size, format_store_error
from mdcompose.utils.i18n import _
from mdcompose.utils.logger import logger
from mdcompose.utils.timer import TimerManager


class EditorWindow(Adw.ApplicationWindow):
    """Main editor window: Markdown text area, attached files and preview."""

    def __init__(self, app: Adw.Application, state: EditorState, timers: TimerManager) -> None:
        """Initialize the editor window.

        Args:
            app: The parent Adw.Application instance
            state: Hydrated editor state
            timers: Timer manager shared with the state's debounced writer
        """
        width, height = self._load_window_size()

        super().__init__(
            application=app,
            title=APP_NAME,
            default_width=width,
            default_height=height,
        )
        self.set_icon_name(APP_ICON_NAME)

        self.editor_state = state
        self._timer_manager = timers
        self._preview = PreviewDialog(self, state.preview, timers)
        self._file_chooser = FileChooser(self, self.add_paths)
        self.editor_state.writer.on_error = self._on_store_error

        self._setup_ui()
        self._setup_actions()

        self._file_list.refresh(self.editor_state.files.files)
        self._update_status()

        self.connect("close-request", self._on_close_request)

    def _setup_ui(self) -> None:
        toolbar_view = Adw.ToolbarView()

        header = Adw.HeaderBar()
        add_btn = Gtk.Button(icon_name="list-add-symbolic")
        add_btn.set_tooltip_text(_("Attach files"))
        add_btn.set_action_name("win.add-files")
        header.pack_start(add_btn)

        copy_btn = Gtk.Button(icon_name="edit-copy-symbolic")
        copy_btn.set_tooltip_text(_("Copy prompt to clipboard"))
        copy_btn.set_action_name("win.copy-prompt")
        header.pack_end(copy_btn)
        toolbar_view.add_top_bar(header)

        content = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=12)
        content.set_margin_start(16)
        content.set_margin_end(16)
        content.set_margin_top(12)
        content.set_margin_bottom(12)

        self._file_list = FileListView(
            on_open=self._on_open_file,
            on_delete=self._on_delete_file,
            on_clear=self._on_clear_files,
        )
        content.append(self._file_list)

        editor_label = Gtk.Label(label=_("Task (Markdown)"))
        editor_label.add_css_class("heading")
        editor_label.set_xalign(0)
        content.append(editor_label)

        self._text_view = Gtk.TextView()
        self._text_view.set_wrap_mode(Gtk.WrapMode.WORD_CHAR)
        self._text_view.set_monospace(True)
        self._text_view.set_top_margin(8)
        self._text_view.set_bottom_margin(8)
        self._text_view.set_left_margin(8)
        self._text_view.set_right_margin(8)
        buffer = self._text_view.get_buffer()
        buffer.set_text(self.editor_state.content.content)
        buffer.connect("changed", self._on_buffer_changed)

        scrolled = Gtk.ScrolledWindow()
        scrolled.set_policy(Gtk.PolicyType.NEVER, Gtk.PolicyType.AUTOMATIC)
        scrolled.set_vexpand(True)
        scrolled.add_css_class("card")
        scrolled.set_child(self._text_view)
        content.append(scrolled)

        self._status_label = Gtk.Label()
        self._status_label.add_css_class("dim-label")
        self._status_label.add_css_class("caption")
        self._status_label.set_xalign(0)
        content.append(self._status_label)

        toolbar_view.set_content(content)

        self._toast_overlay = Adw.ToastOverlay()
        self._toast_overlay.set_child(toolbar_view)
        self.set_content(self._toast_overlay)

    def _setup_actions(self) -> None:
        actions = {
            "add-files": self._on_add_files_action,
            "clear-files": lambda *_args: self._on_clear_files(),
            "copy-prompt": self._on_copy_prompt_action,
        }
        for name, handler in actions.items():
            action = Gio.SimpleAction.new(name, None)
            action.connect("activate", handler)
            self.add_action(action)

    def show_toast(self, message: str) -> None:
        """Show a short notification."""
        self._toast_overlay.add_toast(Adw.Toast(title=message))

    def _update_status(self) -> None:
        files = self.editor_state.files
        self._status_label.set_label(
            _("{0} files attached ({1})").format(files.count, format_file_size(files.total_size))
        )

    def _refresh_files(self) -> None:
        self._file_list.refresh(self.editor_state.files.files)
        if not self.editor_state.preview.is_open:
            self._preview.dismiss()
        self._update_status()

    # ── Editor ─────────────────────────────────────────────────────────

    def _on_buffer_changed(self, buffer: Gtk.TextBuffer) -> None:
        start, end = buffer.get_bounds()
        self.editor_state.content.set_content(buffer.get_text(start, end, True))

    def _on_store_error(self, _key: str, error: StoreWriteError) -> None:
        self.show_toast(format_store_error(error))

    # ── Files ──────────────────────────────────────────────────────────

    def add_paths(self, file_paths: list[str]) -> int:
        """Attach local files by path.

        Returns:
            Number of files added to the collection
        """
        records, failed = load_file_records(file_paths)
        added = self.editor_state.files.add_files(records)
        self._refresh_files()

        if failed:
            self.show_toast(_("{0} files could not be attached").format(len(failed)))
        elif records and not added:
            self.show_toast(_("Files are already attached"))
        return added

    def _on_add_files_action(self, _action: Gio.SimpleAction, _param) -> None:
        self._file_chooser.open()

    def _on_open_file(self, record: FileRecord) -> None:
        self._preview.show(record)

    def _on_delete_file(self, index: int) -> None:
        self.editor_state.files.delete_at(index)
        self._refresh_files()

    def _on_clear_files(self) -> None:
        self.editor_state.files.clear_all()
        self._refresh_files()
        self.show_toast(_("All files removed"))

    # ── Export ─────────────────────────────────────────────────────────

    def _on_copy_prompt_action(self, _action: Gio.SimpleAction, _param) -> None:
        text = build_prompt(self.editor_state.snapshot())
        clipboard = Gdk.Display.get_default().get_clipboard()
        clipboard.set(text)
        self.show_toast(_("Prompt copied"))

    # ── Window state ───────────────────────────────────────────────────

    def _load_window_size(self) -> tuple[int, int]:
        config = get_config_manager()
        width = config.get_int(f"{WINDOW_STATE_KEY}.width", DEFAULT_WINDOW_WIDTH, minimum=400)
        height = config.get_int(f"{WINDOW_STATE_KEY}.height", DEFAULT_WINDOW_HEIGHT, minimum=300)
        return width, height

    def _save_window_size(self) -> None:
        config = get_config_manager()
        width = self.get_width()
        height = self.get_height()

        if width > 0 and height > 0:
            config.set(f"{WINDOW_STATE_KEY}.width", width, save_immediately=False)
            config.set(f"{WINDOW_STATE_KEY}.height", height, save_immediately=True)

    def _on_close_request(self, _window: Gtk.Window) -> bool:
        """Save window size and pending edits before closing."""
        self._save_window_size()
        self._preview.dismiss()
        self.editor_state.teardown(flush=True)
        count = self._timer_manager.remove_all()
        if count:
            logger.debug(f"Removed {count} timers on close")
        return False

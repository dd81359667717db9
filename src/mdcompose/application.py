"""
MD Compose - Application Module

This module contains the main application class.
"""

import gi

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")
from gi.repository import Adw, Gio

from mdcompose.config import APP_ID, DEFAULT_DEBOUNCE_MS, DEFAULT_STORE_QUOTA_BYTES, SHORTCUTS
from mdcompose.services.editor_state import EditorState
from mdcompose.services.store import JsonFileStore, KeyValueStore, MemoryStore
from mdcompose.utils.config_manager import get_config_manager
from mdcompose.utils.logger import logger
from mdcompose.utils.timer import TimerManager
from mdcompose.window import EditorWindow


def create_store(persist: bool = True) -> KeyValueStore:
    """Create the store backing the editor state.

    Args:
        persist: Use the on-disk store; otherwise keep state in memory

    Returns:
        The store instance
    """
    if not persist:
        logger.info("Persistence disabled, using in-memory store")
        return MemoryStore()

    quota = get_config_manager().get_int("storage.quota_bytes", DEFAULT_STORE_QUOTA_BYTES, 1)
    return JsonFileStore(quota_bytes=quota)


class MdComposeApp(Adw.Application):
    """Application class for MD Compose."""

    def __init__(self, initial_files: list[str] | None = None, persist: bool = True) -> None:
        super().__init__(application_id=APP_ID, flags=Gio.ApplicationFlags.DEFAULT_FLAGS)

        self._initial_files = list(initial_files or [])
        self._persist = persist
        self._window: EditorWindow | None = None

        self.connect("activate", self.on_activate)
        self._setup_actions()

    def _setup_actions(self) -> None:
        quit_action = Gio.SimpleAction.new("quit", None)
        quit_action.connect("activate", lambda *_args: self._quit())
        self.add_action(quit_action)

        self.set_accels_for_action("app.quit", [SHORTCUTS["quit"]])
        self.set_accels_for_action("win.add-files", [SHORTCUTS["add-files"]])
        self.set_accels_for_action("win.clear-files", [SHORTCUTS["clear-files"]])
        self.set_accels_for_action("win.copy-prompt", [SHORTCUTS["copy-prompt"]])

    def _quit(self) -> None:
        if self._window is not None:
            self._window.close()
        self.quit()

    def on_activate(self, app: Adw.Application) -> None:
        """Create or raise the editor window."""
        if self._window is not None:
            self._window.present()
            return

        timers = TimerManager()
        delay = get_config_manager().get_int("editor.debounce_ms", DEFAULT_DEBOUNCE_MS)
        state = EditorState(store=create_store(self._persist), timers=timers, delay_ms=delay)

        self._window = EditorWindow(app, state, timers)
        if self._initial_files:
            self._window.add_paths(self._initial_files)
            self._initial_files = []
        self._window.present()
        logger.info("Editor window ready")

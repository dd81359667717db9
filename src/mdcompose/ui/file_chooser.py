"""
MD Compose - File Chooser

Opens the GTK file dialog for attaching files and hands the selected local
paths to a callback.
"""

from collections.abc import Callable

import gi

gi.require_version("Gtk", "4.0")
from gi.repository import Gio, GLib, Gtk

from mdcompose.utils.i18n import _
from mdcompose.utils.logger import logger


class FileChooser:
    """Multi-file open dialog for attaching files."""

    def __init__(self, parent: Gtk.Window, on_chosen: Callable[[list[str]], None]) -> None:
        """Create the chooser.

        Args:
            parent: Window the dialog is modal for
            on_chosen: Called with the selected paths, never with an empty list
        """
        self._parent = parent
        self._on_chosen = on_chosen

    def open(self) -> None:
        """Show the dialog."""
        dialog = Gtk.FileDialog.new()
        dialog.set_title(_("Attach Files"))
        dialog.set_modal(True)
        dialog.open_multiple(parent=self._parent, cancellable=None, callback=self._on_files_chosen)

    def _on_files_chosen(self, dialog: Gtk.FileDialog, result: Gio.AsyncResult) -> None:
        try:
            files = dialog.open_multiple_finish(result)
        except GLib.Error as e:
            # Dismissing the dialog is reported as an error too
            logger.debug(f"File dialog closed without selection: {e}")
            return

        if not files or files.get_n_items() == 0:
            return

        file_paths = self._extract_file_paths(files)
        if file_paths:
            self._on_chosen(file_paths)

    @staticmethod
    def _extract_file_paths(files: Gio.ListModel) -> list[str]:
        """Return the local paths in ``files``, skipping non-local entries."""
        file_paths = []
        for i in range(files.get_n_items()):
            path = files.get_item(i).get_path()
            if path:
                file_paths.append(path)
        return file_paths

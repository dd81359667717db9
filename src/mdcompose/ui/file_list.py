"""
MD Compose - Attached File List

List of attached files with per-row delete buttons and a clear-all button.
Rows are rebuilt from the collection on every change so row indexes always
match the collection.
"""

from collections.abc import Callable, Sequence

import gi

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")
from gi.repository import Adw, Gtk

from mdcompose.services.file_record import FileRecord
from mdcompose.utils.format_utils import format_file_size
from mdcompose.utils.i18n import _


class FileListView(Gtk.Box):
    """Attached file list widget."""

    def __init__(
        self,
        on_open: Callable[[FileRecord], None],
        on_delete: Callable[[int], None],
        on_clear: Callable[[], None],
    ) -> None:
        """Create the list.

        Args:
            on_open: Called with the record whose row was activated
            on_delete: Called with the index of the row to delete
            on_clear: Called when the clear-all button is pressed
        """
        super().__init__(orientation=Gtk.Orientation.VERTICAL, spacing=6)
        self._on_open = on_open
        self._on_delete = on_delete
        self._records: list[FileRecord] = []

        header = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=6)
        self._title = Gtk.Label(label=_("Attached files"))
        self._title.add_css_class("heading")
        self._title.set_hexpand(True)
        self._title.set_xalign(0)
        header.append(self._title)

        clear_btn = Gtk.Button(icon_name="user-trash-full-symbolic")
        clear_btn.set_tooltip_text(_("Remove all files"))
        clear_btn.add_css_class("flat")
        clear_btn.add_css_class("destructive-action")
        clear_btn.connect("clicked", lambda _btn: on_clear())
        header.append(clear_btn)
        self.append(header)

        self._list_box = Gtk.ListBox()
        self._list_box.set_selection_mode(Gtk.SelectionMode.NONE)
        self._list_box.add_css_class("boxed-list")
        self._list_box.connect("row-activated", self._on_row_activated)
        self.append(self._list_box)

        self.set_visible(False)

    def refresh(self, records: Sequence[FileRecord]) -> None:
        """Rebuild the rows from ``records``."""
        self._records = list(records)
        self._list_box.remove_all()

        for index, record in enumerate(self._records):
            self._list_box.append(self._create_row(index, record))

        self._title.set_label(_("Attached files") + f" ({len(self._records)})")
        self.set_visible(bool(self._records))

    def _create_row(self, index: int, record: FileRecord) -> Adw.ActionRow:
        row = Adw.ActionRow()
        row.set_title(record.path)
        row.set_title_lines(1)
        subtitle = format_file_size(record.size)
        if record.extension:
            subtitle += f" - {record.extension}"
        row.set_subtitle(subtitle)
        row.set_activatable(True)

        delete_btn = Gtk.Button(icon_name="edit-delete-symbolic")
        delete_btn.set_tooltip_text(_("Remove file"))
        delete_btn.set_valign(Gtk.Align.CENTER)
        delete_btn.add_css_class("flat")
        delete_btn.connect("clicked", lambda _btn: self._on_delete(index))
        row.add_suffix(delete_btn)
        return row

    def _on_row_activated(self, _list_box: Gtk.ListBox, row: Gtk.ListBoxRow) -> None:
        index = row.get_index()
        if 0 <= index < len(self._records):
            self._on_open(self._records[index])

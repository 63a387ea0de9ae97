from __future__ import annotations

import asyncio
import logging
import os

from rich.text import Text
from textual import work
from textual.app import App, ComposeResult
from textual.containers import Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Footer, Header, Input, Label, Static

from hexpatch.config import EditorConfig
from hexpatch.core.io import FileLoadFailure, FileSaveFailure, read_file, write_file
from hexpatch.core.rows import hex_cell
from hexpatch.core.search import SearchMode
from hexpatch.core.session import (
    Action,
    EditByte,
    EditorSession,
    ExecuteSearch,
    FileLoaded,
    FileLoadFailed,
    FindNext,
    FindPrevious,
    SetSearchMode,
    SetSearchQuery,
)
from hexpatch.ui.palette import get_palette
from hexpatch.widgets.error_banner import ErrorBanner
from hexpatch.widgets.hex_view import HexView
from hexpatch.widgets.search_bar import SearchBar

log = logging.getLogger(__name__)


class HexpatchApp(App):
    """Textual application shell for hexpatch."""

    CSS = """
    #error-banner {
        height: auto;
    }

    #search-bar {
        height: auto;
    }

    #search-mode-select {
        width: 14;
    }

    #search-query {
        width: 1fr;
    }

    #search-status {
        width: auto;
        padding: 1 1;
    }

    HexView {
        height: 1fr;
    }

    #status {
        height: 1;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("?", "open_help", "Help"),
        ("ctrl+o", "open_file", "Open"),
        ("ctrl+s", "save_file", "Save"),
        ("/", "focus_search", "Search"),
        ("n", "search_next", "Next Match"),
        ("p", "search_prev", "Prev Match"),
        ("escape", "focus_hex", "Hex View"),
    ]

    def __init__(self, path: str | None = None, *, config: EditorConfig | None = None) -> None:
        super().__init__()
        self._path = path
        self._config = config or EditorConfig()
        self._palette = get_palette(self._config.theme)
        self.session = EditorSession(overscan=self._config.overscan)
        self.hex_view: HexView | None = None
        self.search_bar: SearchBar | None = None
        self.error_banner: ErrorBanner | None = None
        self.status = Static(id="status")
        self._status_hint: str = ""
        self.title = "hexpatch"

    def compose(self) -> ComposeResult:  # noqa: D401 - Textual API
        self.hex_view = HexView(
            self.session, palette=self._palette, scroll_step=self._config.scroll_step
        )
        self.search_bar = SearchBar(palette=self._palette)
        self.error_banner = ErrorBanner(palette=self._palette)
        yield Header(show_clock=False, id="header")
        yield self.error_banner
        yield self.search_bar
        yield self.hex_view
        yield self.status
        yield Footer(id="footer")

    def on_mount(self) -> None:
        if self._path:
            self.load_path(self._path)
        self.refresh_views()
        if self.hex_view is not None:
            self.set_focus(self.hex_view)

    # ---- State ----
    def dispatch_action(self, action: Action) -> bool:
        """Apply one action to the session and redraw what it touched."""
        changed = self.session.dispatch(action)
        if self.hex_view is not None:
            if changed and isinstance(action, (FileLoaded, FileLoadFailed)):
                self.hex_view.reset_cursor()
            elif isinstance(action, (ExecuteSearch, FindNext, FindPrevious)):
                self.hex_view.follow_match()
        if changed:
            self.refresh_views()
        return changed

    def refresh_views(self) -> None:
        buffer = self.session.buffer
        self.sub_title = f"{len(buffer)} bytes | {buffer.name}"
        if self.hex_view is not None:
            self.hex_view.refresh()
        if self.error_banner is not None:
            self.error_banner.show_error(buffer.error)
        if self.search_bar is not None and self.search_bar.is_mounted:
            self.search_bar.update_from(self.session.search)
        self.update_status()

    # ---- File source ----
    def load_path(self, path: str) -> None:
        self._path = path
        ticket = self.session.begin_load()
        self._status_hint = f"[loading {os.path.basename(path)}]"
        self._load_file(path, ticket)

    @work(exclusive=True, group="file-load")
    async def _load_file(self, path: str, ticket: int) -> None:
        # exclusive: a newer load cancels this one; the ticket drops it if it still lands
        try:
            name, data = await asyncio.to_thread(read_file, path)
        except FileLoadFailure as exc:
            self._status_hint = ""
            self.dispatch_action(FileLoadFailed(str(exc), ticket))
            return
        self._status_hint = ""
        self.dispatch_action(FileLoaded(name, data, ticket))

    def action_open_file(self) -> None:
        self.push_screen(OpenFileScreen(), self._open_submit)

    def _open_submit(self, value: str | None) -> None:
        if not value:
            return
        self.load_path(value.strip())

    # ---- File sink ----
    def default_save_path(self) -> str:
        name = self.session.buffer.name
        base = os.path.dirname(self._path) if self._path else ""
        return os.path.join(base, name)

    def action_save_file(self) -> None:
        if self.session.buffer.is_empty():
            self.set_status_hint("[nothing to save]")
            return
        self.push_screen(SaveAsScreen(self.default_save_path()), self._save_submit)

    def _save_submit(self, value: str | None) -> None:
        if not value:
            return
        export = self.session.buffer.export()
        try:
            write_file(value, export.data)
        except FileSaveFailure as exc:
            log.error("%s", exc)
            self.set_status_hint(f"[{exc}]")
            return
        self.set_status_hint(f"[saved {len(export.data)} bytes to {value}]")

    # ---- Editing ----
    def action_edit_byte(self) -> None:
        if self.hex_view is None or self.session.buffer.is_empty():
            return
        offset = self.hex_view.cursor_offset
        current = hex_cell(self.session.buffer.get(offset))
        self.push_screen(
            EditByteScreen(offset, current),
            lambda value: self._edit_submit(offset, value),
        )

    def _edit_submit(self, offset: int, value: str | None) -> None:
        if value is None:
            return
        # Malformed input is dropped; the cell simply keeps its old value
        self.dispatch_action(EditByte(offset, value))

    # ---- Search ----
    def set_search_mode(self, mode: SearchMode) -> None:
        self.dispatch_action(SetSearchMode(mode))

    def set_search_query(self, text: str) -> None:
        self.dispatch_action(SetSearchQuery(text))

    def run_search(self) -> None:
        self.dispatch_action(ExecuteSearch())

    def action_search_next(self) -> None:
        self.dispatch_action(FindNext())

    def action_search_prev(self) -> None:
        self.dispatch_action(FindPrevious())

    def action_focus_search(self) -> None:
        if self.search_bar is not None:
            self.search_bar.focus_query()

    def action_focus_hex(self) -> None:
        if self.hex_view is not None:
            self.set_focus(self.hex_view)

    def action_open_help(self) -> None:
        self.push_screen(HelpScreen())

    # ---- Status ----
    def update_status(self) -> None:
        buffer = self.session.buffer
        if self.hex_view is None or buffer.is_empty():
            extra = f"  {self._status_hint}" if self._status_hint else ""
            self.status.update(Text(f"hexpatch | {buffer.name}{extra}"))
            return
        cur = self.hex_view.cursor_offset
        b = buffer.get(cur) if cur < len(buffer) else None
        b_hex = hex_cell(b) if b is not None else "--"
        search = self.session.search.message
        parts = [
            f"{buffer.name} | {len(buffer)} bytes | cursor: 0x{cur:08X} [{b_hex}]",
        ]
        if search:
            parts.append(search)
        if self._status_hint:
            parts.append(self._status_hint)
        self.status.update(Text("  ".join(parts)))

    def on_hex_cursor_moved(self, offset: int) -> None:
        self.update_status()

    # Allow child widgets to update status hints
    def set_status_hint(self, text: str | None) -> None:
        self._status_hint = text or ""
        self.update_status()


# ---- Simple modals ----


class OpenFileScreen(ModalScreen[str | None]):
    def compose(self) -> ComposeResult:  # type: ignore[override]
        yield Label("Open file:")
        self._input = Input(placeholder="path/to/file.bin")
        yield self._input

    def on_mount(self) -> None:  # type: ignore[override]
        self.set_focus(self._input)

    def on_input_submitted(self, event: Input.Submitted) -> None:  # type: ignore[override]
        self.dismiss(event.value)

    def on_key(self, event) -> None:  # type: ignore[override]
        if event.key == "escape":
            self.dismiss(None)


class SaveAsScreen(ModalScreen[str | None]):
    """Modal dialog asking where to write the buffer."""

    def __init__(self, default_path: str) -> None:
        super().__init__()
        self._default_path = default_path

    def compose(self) -> ComposeResult:  # type: ignore[override]
        yield Label("Save bytes as:")
        self._input = Input(value=self._default_path, placeholder="path/to/file.bin")
        yield self._input
        with Horizontal():
            yield Button("Save", id="save-btn", variant="primary")
            yield Button("Cancel", id="cancel-btn")

    def on_mount(self) -> None:  # type: ignore[override]
        self.set_focus(self._input)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save-btn":
            path = self._input.value.strip()
            self.dismiss(path or None)
        elif event.button.id == "cancel-btn":
            self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:  # type: ignore[override]
        path = event.value.strip()
        self.dismiss(path or None)

    def on_key(self, event) -> None:  # type: ignore[override]
        if event.key == "escape":
            self.dismiss(None)


class EditByteScreen(ModalScreen[str | None]):
    """Two-character hex field; the value is validated only when submitted."""

    def __init__(self, offset: int, current: str) -> None:
        super().__init__()
        self._offset = offset
        self._current = current

    def compose(self) -> ComposeResult:  # type: ignore[override]
        yield Label(f"Byte at 0x{self._offset:08X} (hex 00-FF):")
        self._input = Input(value=self._current, max_length=2, placeholder="FF")
        yield self._input

    def on_mount(self) -> None:  # type: ignore[override]
        self.set_focus(self._input)

    def on_input_submitted(self, event: Input.Submitted) -> None:  # type: ignore[override]
        self.dismiss(event.value)

    def on_key(self, event) -> None:  # type: ignore[override]
        if event.key == "escape":
            self.dismiss(None)


class HelpScreen(ModalScreen[None]):
    def compose(self) -> ComposeResult:  # type: ignore[override]
        text = (
            "Navigation: h/j/k/l, arrows, PgUp/PgDn, g start, G end, mouse wheel\n"
            "Edit: Enter or e on a byte, type two hex digits, Enter to commit\n"
            "Search: / to focus, pick ASCII or Hex, Enter to run; n next, p previous\n"
            "        Results are not refreshed after edits; run the search again\n"
            "Files: Ctrl+O open, Ctrl+S save\n"
            "Quit: q"
        )
        yield Static(text)

    def on_key(self, event) -> None:  # type: ignore[override]
        if event.key in {"escape", "enter", "q"}:
            self.dismiss(None)

from __future__ import annotations

from contextlib import suppress

from rich.style import Style
from rich.text import Text
from textual import events
from textual.widget import Widget

from hexpatch.core.rows import ascii_char, format_offset, hex_cell, iter_rows
from hexpatch.core.session import EditorSession, Scrolled, ViewportResized
from hexpatch.core.window import Window, compute_window
from hexpatch.ui.palette import PALETTE, Palette


class HexView(Widget):
    """Editable hex/ASCII table over the session buffer.

    - Renders only the rows of the current window, never the whole file.
    - Rendered rows (overscan included) are cached per row; scrolling only
      renders the rows entering the window.
    - One line is reserved for the column header.
    """

    FALLBACK_VISIBLE_ROWS = 16
    can_focus = True

    BINDINGS = [
        ("left", "cursor_left", "Left"),
        ("right", "cursor_right", "Right"),
        ("h", "cursor_left", "Left"),
        ("l", "cursor_right", "Right"),
        ("up", "cursor_up", "Up"),
        ("down", "cursor_down", "Down"),
        ("k", "cursor_up", "Up"),
        ("j", "cursor_down", "Down"),
        ("pageup", "page_up", "PgUp"),
        ("pagedown", "page_down", "PgDn"),
        ("g", "go_start", "Start"),
        ("G", "go_end", "End"),
        ("enter", "edit_byte", "Edit"),
        ("e", "edit_byte", "Edit"),
    ]

    def __init__(
        self,
        session: EditorSession,
        *,
        palette: Palette | None = None,
        scroll_step: int = 3,
    ) -> None:
        super().__init__()
        self.session = session
        self.palette = palette or PALETTE
        self.scroll_step = scroll_step
        self.cursor_offset = 0
        self._row_cache: dict[int, Text] = {}
        self._rows_key: tuple | None = None

    @property
    def bytes_per_row(self) -> int:
        return self.session.row_width

    # ---- Viewport ----
    def on_resize(self, event: events.Resize) -> None:
        self.session.dispatch(ViewportResized(max(0, event.size.height - 1)))
        self.refresh()

    def current_window(self) -> Window:
        s = self.session
        if s.viewport_height > 0:
            return s.window()
        # Height unknown before the first layout
        return compute_window(
            s.scroll_offset,
            self.FALLBACK_VISIBLE_ROWS * s.row_height,
            len(s.buffer),
            row_height=s.row_height,
            overscan=s.overscan,
            row_width=s.row_width,
        )

    def visible_rows(self) -> int:
        return max(1, self.current_window().visible_row_count)

    def scroll_lines(self, delta: int) -> None:
        s = self.session
        if s.dispatch(Scrolled(s.scroll_offset + delta * s.row_height)):
            self.refresh()
            self._notify_app()

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        self.scroll_lines(self.scroll_step)
        event.stop()

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        self.scroll_lines(-self.scroll_step)
        event.stop()

    # ---- Rendering ----
    def render(self) -> Text:
        return self.render_text()

    def render_text(self) -> Text:
        buffer = self.session.buffer
        if buffer.is_empty():
            return Text(f"<{buffer.name}>", style=self.palette.hex_zero_fg)

        window = self.current_window()
        rows = self._window_rows(window)
        # Rows before first_visible_row are overscan above the viewport
        skip = window.first_visible_row - window.start_row
        visible = rows[skip : skip + window.visible_row_count]

        text = self._header()
        for line in visible:
            text.append("\n")
            text.append(line)
        return text

    def _header(self) -> Text:
        bpr = self.bytes_per_row
        cols = " ".join(f"{i:02X}" for i in range(bpr))
        text = Text()
        text.append(f"{'Offset':<8}  {cols}  |ASCII", style=self.palette.hex_header_fg)
        return text

    def _window_rows(self, window: Window) -> list[Text]:
        buffer = self.session.buffer
        match = self.session.search.current_match_range()
        key = (buffer.revision, match, self.cursor_offset, self.palette)
        if key != self._rows_key:
            self._row_cache = {}
            self._rows_key = key
        bpr = self.bytes_per_row
        cache: dict[int, Text] = {}
        missing = [r for r in range(window.start_row, window.end_row) if r not in self._row_cache]
        if missing:
            # One slice covers every row that scrolled into the window
            lo = missing[0] * bpr
            hi = min(window.end_byte, (missing[-1] + 1) * bpr)
            for offset, chunk in iter_rows(buffer.slice(lo, hi), lo, bpr):
                self._row_cache[offset // bpr] = self._render_row(offset, chunk, match)
        for row in range(window.start_row, window.end_row):
            cache[row] = self._row_cache[row]
        # Rows that left the window are dropped
        self._row_cache = cache
        return list(cache.values())

    def _cell_style(self, off: int, b: int, match: tuple[int, int] | None) -> Style:
        p = self.palette
        if off == self.cursor_offset:
            return Style(bgcolor=p.hex_cursor_bg, color=p.hex_selected_fg)
        if match is not None and match[0] <= off < match[1]:
            return Style(bgcolor=p.match_bg, color=p.match_fg, bold=True)
        return Style(color=p.hex_zero_fg if b == 0 else p.hex_byte_fg)

    def _render_row(self, offset: int, chunk: bytes, match: tuple[int, int] | None) -> Text:
        p = self.palette
        bpr = self.bytes_per_row
        line = Text()
        line.append(format_offset(offset), style=p.hex_offset_fg)
        line.append("  ")
        for idx, b in enumerate(chunk):
            cur_off = offset + idx
            line.append(hex_cell(b), style=self._cell_style(cur_off, b, match))
            if idx < bpr - 1:
                # Keep a match highlighted as one continuous block
                sep_style = None
                if match is not None and match[0] <= cur_off and cur_off + 1 < match[1]:
                    sep_style = Style(bgcolor=p.match_bg)
                line.append(" ", style=sep_style)
        # Pad a short final row
        for pad in range(len(chunk), bpr):
            line.append("  ")
            if pad < bpr - 1:
                line.append(" ")

        line.append("  |")
        for idx, b in enumerate(chunk):
            cur_off = offset + idx
            ch = ascii_char(b)
            if cur_off == self.cursor_offset or (match is not None and match[0] <= cur_off < match[1]):
                style = self._cell_style(cur_off, b, match)
            else:
                style = Style(color=p.ascii_fg if ch != "." or b == 0x2E else p.ascii_dot_fg)
            line.append(ch, style=style)
        line.append("|")
        return line

    # ---- Cursor movement ----
    def move_cursor(self, delta: int) -> None:
        self.set_cursor(self.cursor_offset + delta)

    def set_cursor(self, offset: int) -> None:
        size = len(self.session.buffer)
        self.cursor_offset = 0 if size == 0 else max(0, min(offset, size - 1))
        self.ensure_cursor_visible()
        self.refresh()
        self._notify_app()

    def ensure_cursor_visible(self) -> None:
        s = self.session
        row = self.cursor_offset // self.bytes_per_row
        window = self.current_window()
        top = window.first_visible_row
        rows = max(1, window.visible_row_count)
        if row < top:
            s.dispatch(Scrolled(row * s.row_height))
        elif row >= top + rows:
            s.dispatch(Scrolled((row - rows + 1) * s.row_height))

    def follow_match(self) -> None:
        """Put the byte cursor on the current search match, if any."""
        offset = self.session.search.current_offset()
        if offset is not None:
            self.cursor_offset = offset
        self.refresh()

    def reset_cursor(self) -> None:
        self.cursor_offset = 0
        self._rows_key = None
        self.refresh()

    def _notify_app(self) -> None:
        if hasattr(self.app, "on_hex_cursor_moved"):
            with suppress(Exception):
                self.app.on_hex_cursor_moved(self.cursor_offset)  # type: ignore[attr-defined]

    # ---- Actions (bound in BINDINGS) ----
    def action_cursor_left(self) -> None:
        self.move_cursor(-1)

    def action_cursor_right(self) -> None:
        self.move_cursor(1)

    def action_cursor_up(self) -> None:
        self.move_cursor(-self.bytes_per_row)

    def action_cursor_down(self) -> None:
        self.move_cursor(self.bytes_per_row)

    def action_page_up(self) -> None:
        self.move_cursor(-self.visible_rows() * self.bytes_per_row)

    def action_page_down(self) -> None:
        self.move_cursor(self.visible_rows() * self.bytes_per_row)

    def action_go_start(self) -> None:
        self.set_cursor(0)

    def action_go_end(self) -> None:
        self.set_cursor(len(self.session.buffer) - 1)

    def action_edit_byte(self) -> None:
        if hasattr(self.app, "action_edit_byte"):
            self.app.action_edit_byte()  # type: ignore[attr-defined]

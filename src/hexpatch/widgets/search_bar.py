"""Search bar above the hex view: mode, query, run, previous/next, status."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Button, Input, Select, Static

from hexpatch.core.search import SearchEngine, SearchMode, SearchStatus
from hexpatch.ui.palette import PALETTE, Palette


class SearchBar(Horizontal):
    """Search controls. Typing only records the query; Enter or Search runs it."""

    def __init__(self, *, palette: Palette | None = None) -> None:
        super().__init__(id="search-bar")
        self._palette = palette or PALETTE
        # Container should not intercept focus - let children handle it
        self.can_focus = False

    def compose(self) -> ComposeResult:  # type: ignore[override]
        self._mode_select = Select[str](
            options=[("ASCII", SearchMode.ASCII.value), ("Hex", SearchMode.HEX.value)],
            value=SearchMode.ASCII.value,
            allow_blank=False,
            id="search-mode-select",
        )
        yield self._mode_select
        self._query = Input(placeholder="Enter search term...", id="search-query")
        yield self._query
        self._run_button = Button("Search", id="search-run")
        yield self._run_button
        self._prev_button = Button("<", id="search-prev", disabled=True)
        yield self._prev_button
        self._next_button = Button(">", id="search-next", disabled=True)
        yield self._next_button
        self._status = Static("", id="search-status")
        yield self._status

    def focus_query(self) -> None:
        self._query.focus()

    def on_select_changed(self, event: Select.Changed) -> None:  # type: ignore[override]
        if event.select is self._mode_select and hasattr(self.app, "set_search_mode"):
            self.app.set_search_mode(SearchMode(str(event.value)))  # type: ignore[attr-defined]

    def on_input_changed(self, event: Input.Changed) -> None:  # type: ignore[override]
        if event.input is self._query and hasattr(self.app, "set_search_query"):
            self.app.set_search_query(event.value)  # type: ignore[attr-defined]

    def on_input_submitted(self, event: Input.Submitted) -> None:  # type: ignore[override]
        if event.input is self._query and hasattr(self.app, "run_search"):
            event.stop()
            self.app.run_search()  # type: ignore[attr-defined]

    def on_button_pressed(self, event: Button.Pressed) -> None:  # type: ignore[override]
        if event.button is self._run_button and hasattr(self.app, "run_search"):
            self.app.run_search()  # type: ignore[attr-defined]
        elif event.button is self._prev_button and hasattr(self.app, "action_search_prev"):
            self.app.action_search_prev()  # type: ignore[attr-defined]
        elif event.button is self._next_button and hasattr(self.app, "action_search_next"):
            self.app.action_search_next()  # type: ignore[attr-defined]

    def update_from(self, engine: SearchEngine) -> None:
        """Reflect engine state: nav buttons and status line."""
        disabled = not engine.has_results()
        self._prev_button.disabled = disabled
        self._next_button.disabled = disabled
        color = (
            self._palette.status_warning
            if engine.state is SearchStatus.INVALID_PATTERN
            else self._palette.status_fg
        )
        self._status.update(Text(status_text(engine), style=color))


def status_text(engine: SearchEngine) -> str:
    if engine.state is SearchStatus.HAS_RESULTS and engine.cursor is not None:
        return f"{engine.message} [{engine.cursor + 1}/{len(engine.matches)}]"
    return engine.message


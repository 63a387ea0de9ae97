"""Editing session: user actions reduced onto buffer, window and search state.

Every user interaction becomes one of the frozen action dataclasses below and
is applied by `EditorSession.dispatch`, one at a time. The reducer returns
True when the view has to be redrawn.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Union

from hexpatch.core.buffer import ByteBuffer, IndexOutOfRange
from hexpatch.core.search import SearchEngine, SearchMode, SearchStatus
from hexpatch.core.window import (
    BYTES_PER_ROW,
    OVERSCAN_ROWS,
    ROW_HEIGHT,
    Window,
    compute_window,
    max_scroll_offset,
    scroll_offset_for_byte,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileLoaded:
    name: str
    data: bytes
    ticket: int | None = None


@dataclass(frozen=True)
class FileLoadFailed:
    message: str
    ticket: int | None = None


@dataclass(frozen=True)
class EditByte:
    index: int
    text: str


@dataclass(frozen=True)
class Scrolled:
    offset: float


@dataclass(frozen=True)
class ViewportResized:
    height: float


@dataclass(frozen=True)
class SetSearchQuery:
    text: str


@dataclass(frozen=True)
class SetSearchMode:
    mode: SearchMode


@dataclass(frozen=True)
class ExecuteSearch:
    pass


@dataclass(frozen=True)
class FindNext:
    pass


@dataclass(frozen=True)
class FindPrevious:
    pass


Action = Union[
    FileLoaded,
    FileLoadFailed,
    EditByte,
    Scrolled,
    ViewportResized,
    SetSearchQuery,
    SetSearchMode,
    ExecuteSearch,
    FindNext,
    FindPrevious,
]


class EditorSession:
    """Owns the buffer, the search engine and the scroll state of one editor."""

    def __init__(
        self,
        *,
        viewport_height: float = 0,
        overscan: int = OVERSCAN_ROWS,
        row_height: float = ROW_HEIGHT,
        row_width: int = BYTES_PER_ROW,
    ) -> None:
        self.buffer = ByteBuffer()
        self.search = SearchEngine()
        self.scroll_offset: float = 0
        self.viewport_height: float = max(0, viewport_height)
        self.overscan = overscan
        self.row_height = row_height
        self.row_width = row_width
        self._load_ticket = 0
        self._handlers: dict[type, Callable[[Action], bool]] = {
            FileLoaded: self._on_file_loaded,
            FileLoadFailed: self._on_file_load_failed,
            EditByte: self._on_edit_byte,
            Scrolled: self._on_scrolled,
            ViewportResized: self._on_viewport_resized,
            SetSearchQuery: self._on_set_search_query,
            SetSearchMode: self._on_set_search_mode,
            ExecuteSearch: self._on_execute_search,
            FindNext: self._on_find_next,
            FindPrevious: self._on_find_previous,
        }

    # ---- Load ordering ----
    def begin_load(self) -> int:
        """Issue a ticket for a new load; older tickets become stale."""
        self._load_ticket += 1
        return self._load_ticket

    def _is_stale(self, ticket: int | None) -> bool:
        return ticket is not None and ticket != self._load_ticket

    # ---- Reducer ----
    def dispatch(self, action: Action) -> bool:
        try:
            handler = self._handlers[type(action)]
        except KeyError:
            raise TypeError(f"Unknown action: {action!r}") from None
        return handler(action)

    def _on_file_loaded(self, action: FileLoaded) -> bool:
        if self._is_stale(action.ticket):
            log.debug("discarded stale load of %s (ticket %s)", action.name, action.ticket)
            return False
        self.buffer.load(action.data, action.name)
        self.scroll_offset = 0
        self.search.reset()
        log.info("loaded %s (%d bytes)", action.name, len(action.data))
        return True

    def _on_file_load_failed(self, action: FileLoadFailed) -> bool:
        if self._is_stale(action.ticket):
            return False
        self.buffer.fail(f"Error loading file: {action.message}")
        self.scroll_offset = 0
        self.search.reset()
        log.warning("load failed: %s", action.message)
        return True

    def _on_edit_byte(self, action: EditByte) -> bool:
        try:
            return self.buffer.set(action.index, action.text)
        except IndexOutOfRange:
            log.debug("ignored edit outside buffer at %d", action.index)
            return False

    def _on_scrolled(self, action: Scrolled) -> bool:
        offset = self._clamp_scroll(action.offset)
        if offset == self.scroll_offset:
            return False
        self.scroll_offset = offset
        return True

    def _on_viewport_resized(self, action: ViewportResized) -> bool:
        self.viewport_height = max(0, action.height)
        self.scroll_offset = self._clamp_scroll(self.scroll_offset)
        return True

    def _on_set_search_query(self, action: SetSearchQuery) -> bool:
        self.search.set_query(action.text)
        return True

    def _on_set_search_mode(self, action: SetSearchMode) -> bool:
        self.search.set_mode(action.mode)
        return True

    def _on_execute_search(self, action: ExecuteSearch) -> bool:
        if self.search.execute(self.buffer.data) is SearchStatus.HAS_RESULTS:
            self._reveal(self.search.current_offset())
        return True

    def _on_find_next(self, action: FindNext) -> bool:
        self._reveal(self.search.next())
        return True

    def _on_find_previous(self, action: FindPrevious) -> bool:
        self._reveal(self.search.previous())
        return True

    # ---- Scrolling ----
    def _clamp_scroll(self, offset: float) -> float:
        limit = max_scroll_offset(
            len(self.buffer),
            self.viewport_height,
            row_height=self.row_height,
            row_width=self.row_width,
        )
        return min(max(0, offset), limit)

    def _reveal(self, byte_offset: int | None) -> None:
        if byte_offset is None:
            return
        target = scroll_offset_for_byte(
            byte_offset,
            self.viewport_height,
            row_height=self.row_height,
            row_width=self.row_width,
        )
        self.scroll_offset = self._clamp_scroll(target)

    def window(self) -> Window:
        return compute_window(
            self.scroll_offset,
            self.viewport_height,
            len(self.buffer),
            row_height=self.row_height,
            overscan=self.overscan,
            row_width=self.row_width,
        )

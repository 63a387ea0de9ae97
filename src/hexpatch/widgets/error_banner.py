"""Red banner shown above the hex view after a failed load."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from hexpatch.ui.palette import PALETTE, Palette


class ErrorBanner(Static):
    """Banner holding the last load failure; hidden when there is none.

    It goes away on the next successful load.
    """

    def __init__(self, *, palette: Palette | None = None) -> None:
        super().__init__(id="error-banner")
        self._palette = palette or PALETTE
        self._message: str | None = None
        self.display = False

    @property
    def message(self) -> str | None:
        return self._message

    def show_error(self, message: str | None) -> None:
        self._message = message
        self.display = message is not None
        if message is None:
            self.update("")
            return
        style = f"bold {self._palette.error_banner_fg} on {self._palette.error_banner_bg}"
        self.update(Text(f" {message} ", style=style))

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Palette:
    accent: str
    accent_dim: str
    hex_header_fg: str
    hex_offset_fg: str
    hex_byte_fg: str
    hex_zero_fg: str
    ascii_fg: str
    ascii_dot_fg: str
    hex_cursor_bg: str
    hex_selected_fg: str
    # Current search match
    match_bg: str
    match_fg: str
    # Load failure banner
    error_banner_bg: str
    error_banner_fg: str
    status_fg: str
    status_warning: str


DEFAULT = Palette(
    accent="#5ea1ff",
    accent_dim="#4c75c6",
    hex_header_fg="#4c75c6",
    hex_offset_fg="#8892a0",
    hex_byte_fg="#d8dee9",
    hex_zero_fg="#6b7280",
    ascii_fg="#d7ba7d",
    ascii_dot_fg="#6b7280",
    hex_cursor_bg="#b36b00",
    hex_selected_fg="#ffffff",
    match_bg="#10b981",
    match_fg="#ffffff",
    error_banner_bg="#ff5555",
    error_banner_fg="#ffffff",
    status_fg="#d8dee9",
    status_warning="#ff5555",
)

DIM = Palette(
    accent="#a0a0a0",
    accent_dim="#888888",
    hex_header_fg="#888888",
    hex_offset_fg="#777777",
    hex_byte_fg="#e0e0e0",
    hex_zero_fg="#666666",
    ascii_fg="#bbbbbb",
    ascii_dot_fg="#666666",
    hex_cursor_bg="#7a7a7a",
    hex_selected_fg="#000000",
    match_bg="#009955",
    match_fg="#ffffff",
    error_banner_bg="#aa3333",
    error_banner_fg="#ffffff",
    status_fg="#cccccc",
    status_warning="#ff6666",
)

HIGH_CONTRAST = Palette(
    accent="#00ffff",
    accent_dim="#00aaaa",
    hex_header_fg="#00aaaa",
    hex_offset_fg="#aaaaaa",
    hex_byte_fg="#ffffff",
    hex_zero_fg="#888888",
    ascii_fg="#ffff00",
    ascii_dot_fg="#888888",
    hex_cursor_bg="#888800",
    hex_selected_fg="#000000",
    match_bg="#00ff00",
    match_fg="#000000",
    error_banner_bg="#ff0000",
    error_banner_fg="#ffffff",
    status_fg="#ffffff",
    status_warning="#ff6666",
)

PALETTES: dict[str, Palette] = {
    "default": DEFAULT,
    "dim": DIM,
    "high_contrast": HIGH_CONTRAST,
}

# Selected palette for now
PALETTE = DEFAULT


def get_palette(name: str) -> Palette:
    try:
        return PALETTES[name]
    except KeyError:
        raise ValueError(
            f"Unknown theme '{name}'. Expected one of: {', '.join(sorted(PALETTES))}."
        ) from None

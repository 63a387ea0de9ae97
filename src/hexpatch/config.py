"""Editor preferences: built-in defaults, optional YAML file, CLI overrides.

The file is only ever read. Nothing about a session is written back.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from hexpatch.core.window import OVERSCAN_ROWS
from hexpatch.ui.palette import PALETTES


class ConfigError(ValueError):
    """Raised for unreadable or invalid configuration."""


@dataclass(frozen=True)
class EditorConfig:
    theme: str = "default"
    overscan: int = OVERSCAN_ROWS
    scroll_step: int = 3  # lines per mouse wheel notch

    def validate(self) -> EditorConfig:
        if self.theme not in PALETTES:
            raise ConfigError(
                f"theme must be one of {', '.join(sorted(PALETTES))}, got '{self.theme}'"
            )
        if not isinstance(self.overscan, int) or self.overscan < 0:
            raise ConfigError(f"overscan must be a non-negative integer, got {self.overscan!r}")
        if not isinstance(self.scroll_step, int) or self.scroll_step <= 0:
            raise ConfigError(f"scroll_step must be a positive integer, got {self.scroll_step!r}")
        return self

    def with_overrides(self, **overrides: Any) -> EditorConfig:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes).validate()


def get_config_dir() -> Path:
    """Get platform-appropriate user config directory."""
    if os.name == "nt":  # Windows
        base = os.environ.get("APPDATA", os.path.expanduser("~"))
        return Path(base) / "hexpatch"
    else:  # macOS, Linux
        return Path.home() / ".config" / "hexpatch"


def default_config_path() -> Path:
    return get_config_dir() / "config.yaml"


def parse_config(text: str) -> EditorConfig:
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML parse error: {e}") from None
    if raw is None:
        return EditorConfig()
    if not isinstance(raw, dict):
        raise ConfigError("Top-level YAML must be a mapping.")
    known = {f.name for f in fields(EditorConfig)}
    unknown = sorted(str(k) for k in raw if k not in known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
    return EditorConfig(**raw).validate()


def load_config(path: str | Path | None = None) -> EditorConfig:
    """Load preferences from `path`, or the default location if present.

    An explicit path must exist; the default one is optional.
    """
    if path is None:
        candidate = default_config_path()
        if not candidate.is_file():
            return EditorConfig()
    else:
        candidate = Path(path)
    try:
        text = candidate.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config {candidate}: {e.strerror or e}") from None
    return parse_config(text)

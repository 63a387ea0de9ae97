from __future__ import annotations

from pathlib import Path

import pytest

from hexpatch.config import ConfigError, EditorConfig, load_config, parse_config
from hexpatch.core.window import OVERSCAN_ROWS
from hexpatch.ui.palette import DIM, get_palette


def test_defaults() -> None:
    cfg = EditorConfig()
    assert cfg.theme == "default"
    assert cfg.overscan == OVERSCAN_ROWS
    assert cfg.scroll_step > 0


def test_parse_yaml() -> None:
    cfg = parse_config("theme: dim\noverscan: 4\n")
    assert cfg.theme == "dim"
    assert cfg.overscan == 4
    assert get_palette(cfg.theme) is DIM


def test_empty_file_gives_defaults() -> None:
    assert parse_config("") == EditorConfig()


@pytest.mark.parametrize(
    "text",
    [
        "theme: neon\n",
        "overscan: -1\n",
        "scroll_step: 0\n",
        "colour: red\n",
        "- a\n- b\n",
        "theme: [unclosed\n",
    ],
)
def test_invalid_config(text: str) -> None:
    with pytest.raises(ConfigError):
        parse_config(text)


def test_overrides_skip_none() -> None:
    cfg = EditorConfig(theme="dim").with_overrides(theme=None, overscan=2)
    assert cfg.theme == "dim"
    assert cfg.overscan == 2
    with pytest.raises(ConfigError):
        EditorConfig().with_overrides(theme="nope")


def test_load_config_from_path(tmp_path: Path) -> None:
    p = tmp_path / "config.yaml"
    p.write_text("theme: high_contrast\n", encoding="utf-8")
    assert load_config(p).theme == "high_contrast"


def test_load_config_missing_explicit_path(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yaml")


def test_load_config_default_location_optional(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr("hexpatch.config.get_config_dir", lambda: tmp_path / "cfg")
    assert load_config() == EditorConfig()


def test_unknown_theme_in_palette_lookup() -> None:
    with pytest.raises(ValueError):
        get_palette("neon")

from __future__ import annotations

from pathlib import Path

import pytest

from hexpatch.core.buffer import ByteBuffer
from hexpatch.core.io import FileLoadFailure, FileSaveFailure, read_file, write_file


def make_fixture_file(tmp_path: Path, size: int = 5000) -> Path:
    # Deterministic content: 0..255 repeating
    data = bytes(i % 256 for i in range(size))
    p = tmp_path / "fixture.bin"
    p.write_bytes(data)
    return p


def test_read_whole_file(tmp_path: Path) -> None:
    path = make_fixture_file(tmp_path)
    name, data = read_file(str(path))
    assert name == "fixture.bin"
    assert data == path.read_bytes()


def test_read_empty_file(tmp_path: Path) -> None:
    p = tmp_path / "empty.bin"
    p.write_bytes(b"")
    assert read_file(str(p)) == ("empty.bin", b"")


def test_file_not_found(tmp_path: Path) -> None:
    missing = tmp_path / "missing.bin"
    with pytest.raises(FileLoadFailure, match="File not found"):
        read_file(str(missing))


def test_directory_is_a_load_failure(tmp_path: Path) -> None:
    with pytest.raises(FileLoadFailure):
        read_file(str(tmp_path))


def test_write_is_byte_exact(tmp_path: Path) -> None:
    # CR/LF and high bytes must survive untouched
    data = b"line1\r\nline2\n\x00\xff\x80\r"
    out = tmp_path / "out.bin"
    write_file(str(out), data)
    assert out.read_bytes() == data


def test_write_into_missing_directory_fails(tmp_path: Path) -> None:
    with pytest.raises(FileSaveFailure):
        write_file(str(tmp_path / "nope" / "out.bin"), b"x")


def test_load_edit_save_round_trip(tmp_path: Path) -> None:
    src = make_fixture_file(tmp_path, size=64)
    name, data = read_file(str(src))
    buf = ByteBuffer()
    buf.load(data, name)
    buf.set(0, "ee")
    snap = buf.export()
    out = tmp_path / snap.name.replace(".bin", ".out")
    write_file(str(out), snap.data)
    saved = out.read_bytes()
    assert saved[0] == 0xEE
    assert saved[1:] == data[1:]

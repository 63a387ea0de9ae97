from __future__ import annotations

import logging
import re
from dataclasses import dataclass

log = logging.getLogger(__name__)

NO_FILE_LOADED = "no file loaded"

_BYTE_LITERAL = re.compile(r"[0-9A-Fa-f]{1,2}")


class IndexOutOfRange(IndexError):
    """Raised when a byte index falls outside the buffer."""


class InvalidByteLiteral(ValueError):
    """Raised when edit text is not a base-16 value in [0, 255]."""


@dataclass(frozen=True)
class BufferExport:
    """Snapshot handed to the file sink."""

    data: bytes
    name: str


def parse_byte_literal(text: str) -> int:
    """Parse one or two hex digits (either case) into a byte value."""
    if not _BYTE_LITERAL.fullmatch(text):
        raise InvalidByteLiteral(f"not a byte literal: {text!r}")
    return int(text, 16)


class ByteBuffer:
    """In-memory bytes of the loaded file.

    Loads replace the contents wholesale. Edits touch a single element and
    are validated first; malformed input leaves the prior value in place.
    """

    def __init__(self) -> None:
        self._data = bytearray()
        self.name: str = NO_FILE_LOADED
        self.error: str | None = None
        self.revision: int = 0

    def __len__(self) -> int:
        return len(self._data)

    @property
    def data(self) -> bytearray:
        """Live contents; callers must treat this as read-only."""
        return self._data

    def is_empty(self) -> bool:
        return not self._data

    def load(self, data: bytes, name: str) -> None:
        self._data = bytearray(data)
        self.name = name
        self.error = None
        self.revision += 1

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._data):
            raise IndexOutOfRange(f"index {index} outside buffer of {len(self._data)} bytes")

    def get(self, index: int) -> int:
        self._check_index(index)
        return self._data[index]

    def set(self, index: int, hex_text: str) -> bool:
        """Write the byte parsed from `hex_text` at `index`.

        Returns False (and changes nothing) when the text is not a valid
        byte literal. An out-of-range index raises `IndexOutOfRange`.
        """
        self._check_index(index)
        try:
            value = parse_byte_literal(hex_text)
        except InvalidByteLiteral:
            log.debug("ignored edit at 0x%08X: %r", index, hex_text)
            return False
        self._data[index] = value
        self.revision += 1
        return True

    def slice(self, start: int, end: int) -> bytes:
        return bytes(self._data[start:end])

    def clear(self) -> None:
        self._data = bytearray()
        self.name = NO_FILE_LOADED
        self.revision += 1

    def fail(self, message: str) -> None:
        """Drop the contents and record a load failure."""
        self.clear()
        self.error = message

    def export(self) -> BufferExport:
        return BufferExport(data=bytes(self._data), name=self.name)

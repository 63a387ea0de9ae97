from __future__ import annotations

import logging
import os

log = logging.getLogger(__name__)


class FileLoadFailure(OSError):
    """Raised when a file cannot be read into memory."""


class FileSaveFailure(OSError):
    """Raised when a buffer cannot be written out."""


def read_file(path: str) -> tuple[str, bytes]:
    """Read the whole file at `path` and return `(name, data)`.

    Any content and any length is accepted; the bytes are opaque.
    """
    try:
        with open(path, "rb") as fh:
            data = fh.read()
    except FileNotFoundError:
        raise FileLoadFailure(f"File not found: {path}") from None
    except IsADirectoryError:
        raise FileLoadFailure(f"Is a directory: {path}") from None
    except OSError as exc:
        raise FileLoadFailure(exc.strerror or str(exc)) from exc
    log.debug("read %d bytes from %s", len(data), path)
    return os.path.basename(path), data


def write_file(path: str, data: bytes) -> None:
    """Write `data` to `path` byte for byte.

    Binary mode only: no newline translation, no encoding.
    """
    try:
        with open(path, "wb") as fh:
            fh.write(data)
    except OSError as exc:
        raise FileSaveFailure(f"Cannot save {path}: {exc.strerror or exc}") from exc
    log.info("saved %d bytes to %s", len(data), path)

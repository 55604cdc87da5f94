"""File writing helpers with durability guarantees."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Write ``content`` to ``path`` atomically.

    The write goes to a temporary file in the destination directory which is
    flushed, fsynced and then moved into place with ``os.replace``, so readers
    never observe a partially written file even if the process crashes.
    """
    destination = Path(path)
    destination.parent.mkdir(parents=True, exist_ok=True)

    fd: int | None = None
    tmp_path: str | None = None

    try:
        fd, tmp_path = tempfile.mkstemp(
            dir=str(destination.parent),
            prefix=destination.name,
            suffix=".tmp",
            text=True,
        )

        with os.fdopen(fd, "w", encoding=encoding) as handle:
            fd = None  # Ownership transferred to file object
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())

        os.replace(tmp_path, destination)
        tmp_path = None
    finally:
        if fd is not None:
            os.close(fd)
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except FileNotFoundError:
                pass

"""File-system access used by the settings stores.

The stores only ever need three things: make sure a directory exists, write
a whole file and read a whole file. Anything else (path resolution, user
folders) stays outside the store.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Protocol


class FileSystem(Protocol):
    def ensure_directory(self, path: Path) -> None: ...

    def write_file(self, path: Path, data: bytes) -> None: ...

    def read_file(self, path: Path) -> Optional[bytes]:
        """Return the file contents, or None if there is no such file."""
        ...


class LocalFileSystem:
    """FileSystem backed by the local disk.

    Writes go to a sibling temp file first and are moved into place with
    ``os.replace`` so a crash never leaves a half-written settings file.
    OSErrors propagate to the caller.
    """

    def ensure_directory(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def write_file(self, path: Path, data: bytes) -> None:
        path = Path(path)
        tmp = path.with_suffix(path.suffix + ".tmp")
        tmp.write_bytes(data)
        os.replace(tmp, path)

    def read_file(self, path: Path) -> Optional[bytes]:
        path = Path(path)
        if not path.is_file():
            return None
        return path.read_bytes()

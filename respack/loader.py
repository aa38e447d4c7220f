from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol

from .errors import LoadError
from .manifest import PathLike


class FileLoader(Protocol):
    def exists(self, path: PathLike) -> bool: ...

    def read(self, path: PathLike) -> bytes: ...


class DiskFileLoader:
    """Reads resource files from the local filesystem."""

    def exists(self, path: PathLike) -> bool:
        return os.path.isfile(path)

    def read(self, path: PathLike) -> bytes:
        if not self.exists(path):
            raise LoadError(f"Cannot open file {path}")
        try:
            return Path(path).read_bytes()
        except OSError as e:
            raise LoadError(f"Cannot read file {path}: {e}") from e

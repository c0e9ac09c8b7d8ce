"""Filesystem access used by the cache engine."""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class FileStorage:
    """Thin blocking wrapper over the local filesystem.

    Read and write faults surface as ``OSError``; only ``delete`` is
    best-effort.
    """

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def mtime(self, path: Path) -> float:
        return path.stat().st_mtime

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()

    def write_bytes(self, path: Path, data: bytes) -> int:
        """Replace the file at ``path`` with ``data``; returns bytes written."""
        tmp = path.with_name(f"{path.name}.{os.getpid()}.tmp")
        try:
            with open(tmp, "wb") as handle:
                written = handle.write(data)
            os.replace(tmp, path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
        return written

    def delete(self, path: Path) -> bool:
        try:
            path.unlink()
        except OSError as e:
            logger.debug(f"Could not delete {path}: {e}")
            return False
        return True

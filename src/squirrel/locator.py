#!/usr/bin/env python3
"""
Item Locator — Key to Cache-File Mapping

Implements:
- locate(key) → {cache_dir}/{md5(effective_key)}.bs
- In session mode the session id is appended to the key before hashing,
  so files are private to the instance that created them
- Every location handed out is remembered, which is what session
  cleanup walks when the instance is closed
"""

import hashlib
import logging
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

ITEM_FILE_EXTENSION = ".bs"


class ItemLocator:
    """
    Deterministic mapping from cache keys to item files.

    Design:
    - file name = md5(key [+ session_id]) + ".bs"
    - Pure: never touches the filesystem
    - Memoized per effective key for the lifetime of the instance
    """

    def __init__(self, cache_dir: Path, session_id: Optional[str] = None):
        self.cache_dir = Path(cache_dir)
        self.session_id = session_id
        self._locations: Dict[str, Path] = {}

    def effective_key(self, key: str) -> str:
        """Key actually hashed: the caller's key, plus the session id in session mode."""
        if self.session_id is not None:
            return key + self.session_id
        return key

    def locate(self, key: str) -> Path:
        """
        Get the item file for a key.

        Args:
            key: Caller-supplied cache key (any characters, no escaping needed)

        Returns:
            Path inside the cache directory (may not exist yet)
        """
        effective_key = self.effective_key(key)

        if effective_key not in self._locations:
            digest = hashlib.md5(effective_key.encode("utf-8")).hexdigest()
            self._locations[effective_key] = self.cache_dir / f"{digest}{ITEM_FILE_EXTENSION}"
            logger.debug(f"Located {key!r} at {self._locations[effective_key].name}")

        return self._locations[effective_key]

    def created(self) -> Dict[str, Path]:
        """Snapshot of every location handed out so far, by effective key."""
        return dict(self._locations)

    def forget(self, effective_key: str) -> None:
        self._locations.pop(effective_key, None)

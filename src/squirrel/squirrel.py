#!/usr/bin/env python3
"""
Squirrel Cache Engine
File-per-item memoization with TTL and session-scoped lifetimes

Implements:
- squirrel(key, factory) → cached value, or factory() saved then read back
- TTL 0: caching disabled, factory called every time, disk never touched
- TTL N > 0: item fresh while mtime + N >= now
- TTL_SESSION_LIFETIME: item fresh while the instance lives, deleted on close()
- get_stats() → {hits, misses, writes, bypasses, cleanup_failures, ...}
"""

from __future__ import annotations

import logging
import os
import time
import uuid
from pathlib import Path
from typing import Any, Callable, Dict, Optional, TypeVar, Union

from .codec import PickleCodec, get_codec
from .config import SquirrelConfig
from .errors import ConfigurationError, PersistenceError, SquirrelError
from .locator import ItemLocator
from .storage import FileStorage

logger = logging.getLogger(__name__)

T = TypeVar("T")


def new_session_id() -> str:
    """Unique per live instance on this host: pid + clock + random suffix."""
    return f"{os.getpid():x}.{time.time_ns():x}.{uuid.uuid4().hex}"


class Squirrel:
    """
    On-disk memoization cache.

    Design principles:
    - The item file's mtime is the only timestamp; nothing else is stored
    - Factory runs at most once per call, and only on a miss
    - After a save the item is always read back from disk
    - Storage faults after a miss are raised, never masked as a miss
    - Session-mode files belong to the instance and die with it
    """

    TTL_SESSION_LIFETIME = -1
    SPECIAL_TTLS = (TTL_SESSION_LIFETIME,)

    def __init__(self, cache_dir: Path, ttl: int, storage: Optional[FileStorage] = None, codec: Optional[Any] = None):
        """
        Args:
            cache_dir: Existing directory to keep item files in (never created)
            ttl: 0 to disable caching, seconds of freshness, or TTL_SESSION_LIFETIME
            storage: Filesystem capability (defaults to FileStorage)
            codec: encode/decode pair (defaults to PickleCodec)

        Raises:
            ConfigurationError: If the directory does not exist or the TTL is invalid
        """
        self.storage = storage or FileStorage()
        self.codec = codec or PickleCodec()
        self.cache_dir = Path(cache_dir)
        self.ttl = ttl

        if not self.storage.is_dir(self.cache_dir):
            raise ConfigurationError(f"The (cache) directory, `{self.cache_dir}`, does not exist")

        self._assert_ttl_is_valid(ttl)

        self.session_id: Optional[str] = new_session_id() if ttl == self.TTL_SESSION_LIFETIME else None
        self.locator = ItemLocator(self.cache_dir, self.session_id)
        self.closed = False

        self.stats = {
            "hits": 0,
            "misses": 0,
            "writes": 0,
            "bypasses": 0,
            "cleanup_failures": 0,
            "start_time": time.time(),
        }

        logger.info(f"Squirrel initialized at {self.cache_dir} (ttl={ttl}, session={self.has_session()})")

    @classmethod
    def create(cls, cache_dir: Union[str, Path], ttl: int = 0, **collaborators) -> "Squirrel":
        """Factory accepting either a path string or a Path."""
        if not isinstance(cache_dir, Path):
            cache_dir = Path(cache_dir)

        return cls(cache_dir, ttl, **collaborators)

    @classmethod
    def from_config(cls, config: SquirrelConfig, storage: Optional[FileStorage] = None) -> "Squirrel":
        return cls(config.cache_dir, config.ttl_sec, storage=storage, codec=get_codec(config.codec))

    def __enter__(self) -> "Squirrel":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def has_session(self) -> bool:
        return self.session_id is not None

    def _assert_ttl_is_valid(self, ttl: int) -> None:
        if isinstance(ttl, bool) or not isinstance(ttl, int):
            raise ConfigurationError(f"The TTL, `{ttl}`, is invalid")

        if ttl < 0 and ttl not in self.SPECIAL_TTLS:
            raise ConfigurationError(f"The TTL, `{ttl}`, is invalid")

    def _has_item(self, key: str) -> bool:
        item_path = self.locator.locate(key)
        item_file_exists = self.storage.is_file(item_path)

        if self.has_session():
            # mtime is irrelevant: the file lives exactly as long as the session
            return item_file_exists

        if not item_file_exists:
            return False

        try:
            mtime = self.storage.mtime(item_path)
        except OSError as e:
            raise PersistenceError(f"Failed to get item `{key}`", key) from e

        return mtime + self.ttl >= time.time()

    def _save(self, key: str, item: Any) -> bool:
        item_path = self.locator.locate(key)

        try:
            byte_stream = self.codec.encode(item)
            written = self.storage.write_bytes(item_path, byte_stream)
        except Exception as e:
            raise PersistenceError(f"Failed to save item `{key}`", key) from e

        return bool(written)

    def _get_item(self, key: str) -> Any:
        item_path = self.locator.locate(key)

        try:
            byte_stream = self.storage.read_bytes(item_path)
        except OSError as e:
            raise PersistenceError(f"Failed to get item `{key}`", key) from e

        try:
            item, ok = self.codec.decode(byte_stream)
        except Exception as e:
            raise PersistenceError(f"Failed to unserialize item `{key}`", key) from e

        if not ok:
            if byte_stream != self.codec.false_byte_stream:
                raise PersistenceError(f"Failed to unserialize item `{key}`", key)
            item = False

        return item

    def squirrel(self, key: str, factory: Callable[[], T]) -> T:
        """
        "Squirrel" (verb): to store up for future use.

        Args:
            key: Cache key (any string)
            factory: Zero-argument callable producing the value on a miss

        Returns:
            The cached value, or the freshly produced one as read back from disk

        Raises:
            PersistenceError: If the item could not be saved, read, or unserialized
            SquirrelError: If the instance has been closed
        """
        if self.closed:
            raise SquirrelError("Squirrel is closed")

        # Caching disabled: waste as little time as possible
        if self.ttl == 0:
            self.stats["bypasses"] += 1
            return factory()

        if self._has_item(key):
            self.stats["hits"] += 1
            logger.debug(f"Hit {key!r}")
        else:
            self.stats["misses"] += 1
            logger.debug(f"Miss {key!r}")

            if not self._save(key, factory()):
                raise PersistenceError(f"Failed to save item `{key}`", key)

            self.stats["writes"] += 1

        return self._get_item(key)

    def close(self) -> int:
        """
        End the instance's lifetime.

        In session mode every item file this instance located is deleted.
        Deletion failures are logged and counted, never raised.

        Returns:
            Number of files that could not be deleted
        """
        if self.closed:
            return 0

        self.closed = True
        failures = 0

        if self.has_session():
            for effective_key, item_path in self.locator.created().items():
                if self.storage.is_file(item_path) and not self.storage.delete(item_path):
                    failures += 1
                    logger.warning(f"Failed to delete session item file {item_path}")
                self.locator.forget(effective_key)

            if failures:
                logger.warning(f"Session cleanup left {failures} file(s) in {self.cache_dir}")

        self.stats["cleanup_failures"] += failures
        logger.info("Squirrel closed")
        return failures

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        total_requests = self.stats["hits"] + self.stats["misses"]
        hit_rate = (self.stats["hits"] / total_requests * 100) if total_requests > 0 else 0.0

        return {
            "hits": self.stats["hits"],
            "misses": self.stats["misses"],
            "hit_rate_percent": round(hit_rate, 1),
            "total_requests": total_requests,
            "writes": self.stats["writes"],
            "bypasses": self.stats["bypasses"],
            "cleanup_failures": self.stats["cleanup_failures"],
            "session": self.has_session(),
            "uptime_seconds": int(time.time() - self.stats["start_time"]),
        }

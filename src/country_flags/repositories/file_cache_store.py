"""File implementation of CacheStore.

Each key is stored in its own file named ``md5(key).fpc`` inside the cache
directory. The file holds a JSON document::

    {"expires": <unix timestamp>, "value": <cached value>}

Writes go through a temporary file that is atomically renamed into place,
so a reader sees either the previous entry or the new one, never a partial
write.
"""

import hashlib
import json
import os
import tempfile
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

import structlog

from country_flags.config import settings

logger = structlog.get_logger(logger_name=__name__)

CACHE_EXTENSION = ".fpc"


class FileCacheStore:
    """Directory-backed cache.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        cache_dir: str | Path | None = None,
        timer: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the file store.

        Args:
            cache_dir: Directory for cache files. Defaults to settings.
            timer: Wall clock returning a unix timestamp.
        """
        self._dir = Path(cache_dir or settings.cache_dir)
        self._timer = timer

    @classmethod
    def create(cls, cache_dir: str | Path | None = None) -> "FileCacheStore":
        """Factory method to create FileCacheStore with defaults.

        Args:
            cache_dir: Cache directory. If None, uses settings.

        Returns:
            Configured FileCacheStore
        """
        return cls(cache_dir=cache_dir)

    def _path(self, key: str) -> Path:
        digest = hashlib.md5(key.encode("utf-8")).hexdigest()
        return self._dir / f"{digest}{CACHE_EXTENSION}"

    def _read(self, path: Path) -> dict | None:
        """Load an entry file, returning None if it is missing or unreadable."""
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning("cache_file_unreadable", path=str(path), error=str(e))
            return None

        if not isinstance(data, dict):
            return None
        expires = data.get("expires")
        if isinstance(expires, bool) or not isinstance(expires, (int, float)):
            logger.warning("cache_file_invalid_expiry", path=str(path))
            return None
        return data

    def get(self, key: str) -> Any | None:
        """Retrieve a value by key.

        Expired entries are deleted on read.

        Args:
            key: The cache key

        Returns:
            The stored value, or None if absent or expired
        """
        path = self._path(key)
        data = self._read(path)
        if data is None:
            return None

        if self._timer() > data["expires"]:
            path.unlink(missing_ok=True)
            logger.debug("cache_expired", key=key, driver="file")
            return None

        return data.get("value")

    def put(self, key: str, value: Any, minutes: int = 60) -> None:
        """Store a value in the cache directory.

        Args:
            key: The cache key
            value: A JSON-serialisable value
            minutes: Minutes until the entry expires
        """
        self._dir.mkdir(parents=True, exist_ok=True)
        payload = json.dumps({"expires": self._timer() + minutes * 60, "value": value})

        fd, tmp_name = tempfile.mkstemp(dir=self._dir, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self._path(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug("cache_put", key=key, minutes=minutes, driver="file")

    def forget(self, key: str) -> None:
        """Remove an entry file if present."""
        self._path(key).unlink(missing_ok=True)

    def clear(self) -> int:
        """Delete every cache file in the directory.

        Returns:
            Number of files deleted
        """
        if not self._dir.is_dir():
            return 0

        count = 0
        for path in self._dir.glob(f"*{CACHE_EXTENSION}"):
            if path.is_file():
                path.unlink(missing_ok=True)
                count += 1
        return count

    def exists(self, key: str) -> bool:
        """Check whether a valid, unexpired entry file exists."""
        data = self._read(self._path(key))
        if data is None:
            return False
        return self._timer() <= data["expires"]

    def health_check(self) -> bool:
        """Check the cache directory can be created and written to.

        Returns:
            True if healthy, False otherwise
        """
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            return False
        return os.access(self._dir, os.W_OK)

    def get_stats(self) -> dict:
        """Get store statistics.

        Returns:
            Dictionary with stats
        """
        total = len(list(self._dir.glob(f"*{CACHE_EXTENSION}"))) if self._dir.is_dir() else 0
        return {
            "driver": "file",
            "cache_dir": str(self._dir),
            "total_entries": total,
        }

    @property
    def cache_dir(self) -> Path:
        """Get the cache directory."""
        return self._dir

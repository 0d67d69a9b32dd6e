"""Short-lived cache of progress snapshots.

The cache only saves a re-read of the project folder. Entries expire after
``ttl_seconds`` and are evicted on the first lookup past that point, so
stale pacing is never served beyond the TTL.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from pathlib import Path

from pydantic import BaseModel, ValidationError

from wordpace.models import ProgressSnapshot

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 5 * 60


class CacheEntry(BaseModel):
    """Cached snapshot for a single project."""

    data: ProgressSnapshot
    timestamp: float  # seconds since the epoch


class ProgressCache:
    """Tracks recently computed progress snapshots.

    The cache file maps project ids to CacheEntry values.
    """

    def __init__(
        self,
        cache_path: Path,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._cache_path = cache_path
        self._ttl = ttl_seconds
        self._clock = clock
        self._data: dict[str, CacheEntry] = self._load()

    def _load(self) -> dict[str, CacheEntry]:
        if not self._cache_path.exists():
            return {}
        try:
            raw = json.loads(self._cache_path.read_text(encoding="utf-8"))
            return {k: CacheEntry.model_validate(v) for k, v in raw.items()}
        except (json.JSONDecodeError, AttributeError, ValidationError, OSError) as e:
            logger.warning("Failed to load progress cache: %s", e)
            return {}

    def _save(self) -> None:
        self._cache_path.parent.mkdir(parents=True, exist_ok=True)
        raw = {k: v.model_dump(mode="json") for k, v in self._data.items()}
        self._cache_path.write_text(json.dumps(raw, indent=2), encoding="utf-8")

    def get(self, project_id: str) -> ProgressSnapshot | None:
        """Return the cached snapshot, or None if absent or expired."""
        if not project_id:
            return None
        entry = self._data.get(project_id)
        if entry is None:
            logger.debug("Progress cache miss for %s", project_id)
            return None
        if self._clock() - entry.timestamp > self._ttl:
            logger.debug("Progress cache entry for %s expired", project_id)
            del self._data[project_id]
            self._save()
            return None
        return entry.data

    def put(self, project_id: str, progress: ProgressSnapshot | None) -> None:
        """Store ``progress`` for ``project_id``. None is ignored."""
        if not project_id or progress is None:
            return
        self._data[project_id] = CacheEntry(data=progress, timestamp=self._clock())
        self._save()

    def clear(self, project_id: str) -> None:
        """Drop one project's entry."""
        if project_id not in self._data:
            return
        del self._data[project_id]
        self._save()

    def clear_all(self) -> None:
        """Drop every entry and remove the cache file."""
        self._data = {}
        self._cache_path.unlink(missing_ok=True)

"""In-memory TTL cache for progress insights."""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from ..config import Settings, get_settings
from ..models.insights import ProgressInsight

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300.0

CacheKey = Tuple[str, str]


@dataclass
class CacheEntry:
    insight: ProgressInsight
    stored_at: float


class InsightCache:
    """
    Insight cache keyed by (exercise id, metric).

    Entries are valid for `ttl_seconds` after they were stored and are evicted
    lazily on read or explicitly with `sweep()`. There is no locking; the last
    write for a key wins.

    Args:
        ttl_seconds: Entry lifetime in seconds
        clock: Monotonic time source, injectable for tests
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[CacheKey, CacheEntry] = {}

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "InsightCache":
        settings = settings or get_settings()
        return cls(ttl_seconds=settings.insights_cache_ttl_seconds)

    def __len__(self) -> int:
        return len(self._entries)

    def _is_valid(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.stored_at < self.ttl_seconds

    def get(self, exercise_id: str, metric: str) -> Optional[ProgressInsight]:
        """Cached insight, or None when missing or expired."""
        key = (exercise_id, metric)
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not self._is_valid(entry):
            del self._entries[key]
            logger.debug(f"Evicted expired insight for {exercise_id}/{metric}")
            return None
        return entry.insight

    def set(self, exercise_id: str, metric: str, insight: ProgressInsight) -> None:
        self._entries[(exercise_id, metric)] = CacheEntry(insight=insight, stored_at=self._clock())

    def clear(self, exercise_id: Optional[str] = None, metric: Optional[str] = None) -> None:
        """Remove one entry, or every entry when no key is given."""
        if exercise_id is None and metric is None:
            self._entries.clear()
            return
        if exercise_id is None or metric is None:
            raise ValueError("clear() needs both exercise_id and metric, or neither")
        self._entries.pop((exercise_id, metric), None)

    def sweep(self) -> int:
        """Evict every expired entry.

        Returns:
            Number of entries evicted
        """
        expired = [key for key, entry in self._entries.items() if not self._is_valid(entry)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug(f"Swept {len(expired)} expired insight(s)")
        return len(expired)

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from .schemas import RankingSnapshot, ScoredItem


class RankingCache:
    """Holds the most recent ranking snapshot for a fixed time-to-live.

    The snapshot is only ever swapped as a whole, so concurrent readers see
    either the previous or the new ranking. A snapshot computed for ``limit``
    L can serve any request for L or fewer items; larger requests miss.
    """

    def __init__(self, ttl_seconds: float) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self._snapshot: Optional[RankingSnapshot] = None

    @property
    def snapshot(self) -> Optional[RankingSnapshot]:
        return self._snapshot

    def _fresh(self, snapshot: Optional[RankingSnapshot], now: datetime) -> bool:
        if snapshot is None:
            return False
        elapsed = (now - snapshot.computed_at).total_seconds()
        return elapsed < self.ttl_seconds

    def is_fresh(self, now: datetime) -> bool:
        return self._fresh(self._snapshot, now)

    def get(self, limit: int, now: datetime) -> Optional[List[ScoredItem]]:
        snapshot = self._snapshot
        if not self._fresh(snapshot, now):
            return None
        if limit > snapshot.limit:
            return None
        return list(snapshot.items[:limit])

    def store(self, items: List[ScoredItem], limit: int, now: datetime) -> RankingSnapshot:
        snapshot = RankingSnapshot(items=tuple(items), computed_at=now, limit=limit)
        self._snapshot = snapshot
        return snapshot

    def clear(self) -> None:
        self._snapshot = None

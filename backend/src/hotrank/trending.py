from __future__ import annotations

from datetime import datetime
from typing import Callable, Iterable, List, Optional

from .cache import RankingCache
from .config import HOTRANK_VERBOSE, TRENDING_CACHE_TTL_SECONDS, TRENDING_DEFAULT_LIMIT
from .schemas import HotScoreWeights, ScorableItem, ScoredItem
from .scoring import compute_hot_score, utc_now

Clock = Callable[[], datetime]


def _log(message: str) -> None:
    if HOTRANK_VERBOSE:
        print(message, flush=True)


def score_items(
    items: Iterable[ScorableItem],
    now: datetime,
    weights: Optional[HotScoreWeights] = None,
) -> List[ScoredItem]:
    return [ScoredItem.from_item(item, compute_hot_score(item, now, weights)) for item in items]


def rank_items(
    items: Iterable[ScorableItem],
    limit: int,
    now: datetime,
    weights: Optional[HotScoreWeights] = None,
) -> List[ScoredItem]:
    """Top ``limit`` items by hot score, highest first.

    Equal scores keep their input order (``sorted`` is stable, also with
    ``reverse=True``).
    """
    if limit < 1:
        raise ValueError("limit must be a positive integer")
    scored = score_items(items, now, weights)
    ordered = sorted(scored, key=lambda x: x.hot_score, reverse=True)
    return ordered[:limit]


class TrendingRanker:
    """Hot-score ranking with a single cached snapshot.

    Callers hand in the full candidate set on every call; the ranker never
    fetches data itself. Call :meth:`invalidate` after writes that should show
    up before the TTL runs out (new thread, new reply).
    """

    def __init__(
        self,
        weights: Optional[HotScoreWeights] = None,
        ttl_seconds: float = TRENDING_CACHE_TTL_SECONDS,
        clock: Optional[Clock] = None,
        cache: Optional[RankingCache] = None,
    ) -> None:
        self.weights = weights or HotScoreWeights()
        self.clock = clock or utc_now
        self.cache = cache or RankingCache(ttl_seconds)

    def hot_score(self, item: ScorableItem) -> float:
        return compute_hot_score(item, self.clock(), self.weights)

    def get_trending(
        self,
        items: Iterable[ScorableItem],
        limit: int = TRENDING_DEFAULT_LIMIT,
        use_cache: bool = True,
    ) -> List[ScoredItem]:
        if limit < 1:
            raise ValueError("limit must be a positive integer")
        now = self.clock()
        if use_cache:
            cached = self.cache.get(limit, now)
            if cached is not None:
                _log(f"[cache] hit ({len(cached)} items, limit={limit})")
                return cached
        trending = rank_items(items, limit, now, self.weights)
        if use_cache:
            self.cache.store(trending, limit, now)
            _log(f"[cache] stored {len(trending)} items (limit={limit})")
        return trending

    def invalidate(self) -> None:
        self.cache.clear()
        _log("[cache] trending snapshot cleared")

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional

from .schemas import HotScoreWeights, ScorableItem

DEFAULT_WEIGHTS = HotScoreWeights()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def age_in_hours(created_at: Optional[datetime], now: datetime) -> float:
    """Hours elapsed since ``created_at``; infinite when unknown, never negative."""
    if created_at is None:
        return math.inf
    elapsed = _as_utc(now) - _as_utc(created_at)
    return max(elapsed.total_seconds() / 3600, 0.0)


def compute_hot_score(
    item: ScorableItem,
    now: datetime,
    weights: Optional[HotScoreWeights] = None,
) -> float:
    """Reddit-style hot score: weighted engagement divided by (age + offset) ** gravity.

    Items without a usable creation time score 0.0 so they sink to the bottom of
    a ranking instead of breaking it.
    """
    weights = weights or DEFAULT_WEIGHTS
    age_hours = age_in_hours(item.created_at, now)
    if math.isinf(age_hours):
        return 0.0
    raw = item.views * weights.view_weight + item.reply_count * weights.reply_weight
    if item.is_pinned:
        raw += weights.pinned_bonus
    return raw / math.pow(age_hours + weights.age_offset_hours, weights.gravity)

from __future__ import annotations

import math
from datetime import datetime
from typing import Dict

from .config import ENGAGEMENT_DECAY_HOURS, TRENDING_VELOCITY_DECAY_HOURS, TRENDING_WINDOW_HOURS
from .schemas import EngagementFactors, ScorableItem
from .scoring import age_in_hours

ENGAGEMENT_WEIGHTS: Dict[str, float] = {
    "views": 0.1,
    "replies": 1.0,
    "helpful_votes": 2.0,
    "bookmarks": 3.0,
    "shares": 4.0,
    "downloads": 10.0,
    "purchases": 50.0,
}

VELOCITY_VIEW_WEIGHT = 0.1
VELOCITY_REPLY_WEIGHT = 5.0
MAX_REPUTATION_MULTIPLIER = 2.0


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_engagement_score(factors: EngagementFactors, now: datetime) -> int:
    """Stored per-thread engagement score used by the "What's Hot" listings.

    Weighted interactions, boosted by up to 2x while the thread is fresh and by
    up to 2x for high-reputation authors.
    """
    score = sum(getattr(factors, name) * weight for name, weight in ENGAGEMENT_WEIGHTS.items())
    age_hours = age_in_hours(factors.recency, now)
    recency_boost = math.exp(-age_hours / ENGAGEMENT_DECAY_HOURS)
    score *= 1 + recency_boost
    reputation_multiplier = min(MAX_REPUTATION_MULTIPLIER, 1.0 + factors.author_reputation / 10000)
    score *= reputation_multiplier
    return round_half_up(score)


def compute_trending_weight(item: ScorableItem, now: datetime) -> float:
    """Engagement per hour with an exponential recency boost; 0 outside the trending window."""
    age_hours = age_in_hours(item.created_at, now)
    if age_hours > TRENDING_WINDOW_HOURS:
        return 0.0
    velocity = (item.views * VELOCITY_VIEW_WEIGHT + item.reply_count * VELOCITY_REPLY_WEIGHT) / max(
        1.0, age_hours
    )
    recency_factor = math.exp(-age_hours / TRENDING_VELOCITY_DECAY_HOURS)
    return velocity * (1 + recency_factor)


def engagement_factors_for(row: dict) -> EngagementFactors:
    """Map a forum thread row (camelCase or snake_case) onto engagement inputs."""

    def pick(*keys: str, default=0):
        for key in keys:
            if key in row and row[key] is not None:
                return row[key]
        return default

    return EngagementFactors(
        views=pick("views"),
        replies=pick("reply_count", "replyCount"),
        helpful_votes=pick("helpful_votes", "helpfulVotes"),
        bookmarks=pick("bookmark_count", "bookmarkCount"),
        shares=pick("share_count", "shareCount"),
        recency=pick("created_at", "createdAt", default=None),
        author_reputation=pick("author_reputation", "authorReputation", default=0),
    )

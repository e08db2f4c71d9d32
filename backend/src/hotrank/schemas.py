from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import (
    HOT_AGE_OFFSET_HOURS,
    HOT_GRAVITY,
    HOT_PINNED_BONUS,
    HOT_REPLY_WEIGHT,
    HOT_VIEW_WEIGHT,
    TRENDING_DEFAULT_LIMIT,
)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Best-effort conversion to an aware UTC datetime.

    Accepts datetimes, ISO-8601 strings (with or without a trailing ``Z``) and
    epoch milliseconds. Anything else yields ``None``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# Postgres bigint ceiling; keeps counters convertible to float
MAX_COUNTER = 2**63 - 1


def _non_negative_int(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return min(max(number, 0), MAX_COUNTER)


class ScorableItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    views: int = 0
    reply_count: int = Field(default=0, alias="replyCount")
    is_pinned: bool = Field(default=False, alias="isPinned")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("created_at", mode="before")
    @classmethod
    def _coerce_created_at(cls, value: Any) -> Optional[datetime]:
        return parse_timestamp(value)

    @field_validator("views", "reply_count", mode="before")
    @classmethod
    def _coerce_counter(cls, value: Any) -> int:
        return _non_negative_int(value)

    @field_validator("is_pinned", mode="before")
    @classmethod
    def _coerce_pinned(cls, value: Any) -> Any:
        return False if value is None else value


class ScoredItem(ScorableItem):
    hot_score: float = Field(alias="hotScore")

    @classmethod
    def from_item(cls, item: ScorableItem, hot_score: float) -> "ScoredItem":
        payload = item.model_dump()
        # rows re-ranked from an earlier snapshot still carry the old score
        payload.pop("hotScore", None)
        payload["hot_score"] = hot_score
        return cls.model_validate(payload)


class HotScoreWeights(BaseModel):
    model_config = ConfigDict(frozen=True)

    view_weight: float = Field(default=HOT_VIEW_WEIGHT, ge=0)
    reply_weight: float = Field(default=HOT_REPLY_WEIGHT, ge=0)
    pinned_bonus: float = Field(default=HOT_PINNED_BONUS, ge=0)
    age_offset_hours: float = Field(default=HOT_AGE_OFFSET_HOURS, gt=0)
    gravity: float = Field(default=HOT_GRAVITY, ge=0)


class RankingSnapshot(BaseModel):
    """One complete ranking result; replaced as a whole, never edited."""

    model_config = ConfigDict(frozen=True)

    items: Tuple[ScoredItem, ...] = ()
    computed_at: datetime
    limit: int = Field(ge=1)


class EngagementFactors(BaseModel):
    views: int = 0
    replies: int = 0
    helpful_votes: int = 0
    bookmarks: int = 0
    shares: int = 0
    downloads: int = 0
    purchases: int = 0
    recency: Optional[datetime] = None
    author_reputation: float = 1.0

    @field_validator(
        "views", "replies", "helpful_votes", "bookmarks", "shares", "downloads", "purchases",
        mode="before",
    )
    @classmethod
    def _coerce_counter(cls, value: Any) -> int:
        return _non_negative_int(value)

    @field_validator("recency", mode="before")
    @classmethod
    def _coerce_recency(cls, value: Any) -> Optional[datetime]:
        return parse_timestamp(value)


class UserStats(BaseModel):
    threads_created: int = Field(default=0, ge=0)
    replies_posted: int = Field(default=0, ge=0)
    likes_received: int = Field(default=0, ge=0)
    best_answers: int = Field(default=0, ge=0)
    content_sales: int = Field(default=0, ge=0)
    followers_count: int = Field(default=0, ge=0)
    uploads_count: int = Field(default=0, ge=0)
    verified_trader: bool = False


class ContentSalesStats(BaseModel):
    total_sales: int = Field(default=0, ge=0)
    price_coins: float = Field(default=0, ge=0)
    review_count: int = Field(default=0, ge=0)
    avg_rating: float = Field(default=0, ge=0, le=5)
    downloads: int = Field(default=0, ge=0)


class TrendingState(BaseModel):
    run_at: Optional[str] = None
    limit: int = TRENDING_DEFAULT_LIMIT
    raw_rows: List[Dict[str, Any]] = Field(default_factory=list)
    threads: List[ScorableItem] = Field(default_factory=list)
    engagement_scores: Dict[str, int] = Field(default_factory=dict)
    trending: List[ScoredItem] = Field(default_factory=list)
    stored: bool = False
    errors: List[str] = Field(default_factory=list)

from __future__ import annotations

from .engagement import round_half_up
from .schemas import ContentSalesStats, UserStats

VERIFIED_TRADER_BONUS = 1.2


def compute_user_reputation(stats: UserStats) -> int:
    reputation = (
        stats.threads_created * 1
        + stats.replies_posted * 0.5
        + stats.likes_received * 2
        + stats.uploads_count * 15
        + stats.best_answers * 50
        + stats.content_sales * 100
        + stats.followers_count * 3
    )
    if stats.verified_trader:
        reputation *= VERIFIED_TRADER_BONUS
    return round_half_up(reputation)


def compute_sales_score(stats: ContentSalesStats) -> int:
    """Marketplace ranking: revenue, review volume, rating and downloads."""
    revenue_score = stats.total_sales * stats.price_coins * 0.1
    review_score = stats.review_count * 10
    rating_bonus = stats.avg_rating * 50 if stats.avg_rating > 0 else 0
    download_score = stats.downloads * 2
    return round_half_up(revenue_score + review_score + rating_bonus + download_score)

import math
from datetime import timedelta

import pytest

from hotrank.engagement import (
    compute_engagement_score,
    compute_trending_weight,
    engagement_factors_for,
    round_half_up,
)
from hotrank.leaderboards import compute_sales_score, compute_user_reputation
from hotrank.schemas import ContentSalesStats, EngagementFactors, ScorableItem, UserStats


def test_engagement_score_fresh_thread_doubles(now):
    factors = EngagementFactors(views=100, replies=10, recency=now)
    # (10 + 10) * (1 + 1) * 1.0001
    assert compute_engagement_score(factors, now) == 40


def test_engagement_score_reputation_multiplier_is_capped(now):
    factors = EngagementFactors(views=100, replies=10, recency=now, author_reputation=50_000)
    assert compute_engagement_score(factors, now) == 80


def test_engagement_score_weights_all_interactions(now):
    factors = EngagementFactors(
        helpful_votes=1, bookmarks=1, shares=1, downloads=1, purchases=1, author_reputation=0
    )
    # no recency: boost is exp(-inf) == 0
    assert compute_engagement_score(factors, now) == 2 + 3 + 4 + 10 + 50


def test_engagement_score_decays_with_age(now):
    factors = EngagementFactors(replies=100, recency=now - timedelta(hours=168), author_reputation=0)
    assert compute_engagement_score(factors, now) == round_half_up(100 * (1 + math.exp(-1)))


def test_engagement_factors_from_row(now):
    row = {
        "id": "t1",
        "views": 10,
        "replyCount": 2,
        "helpfulVotes": None,
        "bookmark_count": 3,
        "shareCount": 1,
        "createdAt": now.isoformat(),
        "authorReputation": 500,
    }
    factors = engagement_factors_for(row)
    assert factors.views == 10
    assert factors.replies == 2
    assert factors.helpful_votes == 0
    assert factors.bookmarks == 3
    assert factors.shares == 1
    assert factors.recency == now
    assert factors.author_reputation == 500


def test_trending_weight_recent_thread(now):
    item = ScorableItem(id="t1", created_at=now - timedelta(hours=2), views=100, reply_count=2)
    expected = (10 + 10) / 2 * (1 + math.exp(-2 / 48))
    assert compute_trending_weight(item, now) == pytest.approx(expected)


def test_trending_weight_brand_new_thread_uses_one_hour_floor(now):
    item = ScorableItem(id="t1", created_at=now, views=100, reply_count=2)
    assert compute_trending_weight(item, now) == pytest.approx(40)


def test_trending_weight_outside_window(now):
    old = ScorableItem(id="t1", created_at=now - timedelta(hours=169), views=10_000)
    undated = ScorableItem(id="t2", views=10_000)
    assert compute_trending_weight(old, now) == 0.0
    assert compute_trending_weight(undated, now) == 0.0


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2


def test_user_reputation():
    stats = UserStats(
        threads_created=10,
        replies_posted=20,
        likes_received=5,
        uploads_count=1,
        best_answers=1,
        content_sales=1,
        followers_count=10,
    )
    assert compute_user_reputation(stats) == 225
    verified = stats.model_copy(update={"verified_trader": True})
    assert compute_user_reputation(verified) == 270


def test_user_reputation_empty_profile():
    assert compute_user_reputation(UserStats()) == 0


def test_sales_score():
    stats = ContentSalesStats(total_sales=10, price_coins=50, review_count=3, avg_rating=4.5, downloads=20)
    assert compute_sales_score(stats) == 50 + 30 + 225 + 40


def test_sales_score_unrated():
    stats = ContentSalesStats(total_sales=1, price_coins=5, downloads=1)
    # 0.5 + 2
    assert compute_sales_score(stats) == 3

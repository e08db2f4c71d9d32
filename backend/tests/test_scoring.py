import math
from datetime import timedelta

import pytest

from hotrank.schemas import HotScoreWeights, ScorableItem
from hotrank.scoring import age_in_hours, compute_hot_score


def _item(**kwargs):
    return ScorableItem.model_validate({"id": "t1", **kwargs})


def test_pinned_without_engagement_scores_bonus_over_offset(now):
    item = _item(createdAt=now, isPinned=True)
    assert compute_hot_score(item, now) == pytest.approx(100 / 2 ** 1.8)
    assert compute_hot_score(item, now) == pytest.approx(28.72, abs=0.01)


def test_thousand_views_match_pinned_bonus(now):
    viewed = _item(createdAt=now, views=1000)
    pinned = _item(createdAt=now, isPinned=True)
    assert compute_hot_score(viewed, now) == pytest.approx(compute_hot_score(pinned, now))


def test_newer_item_scores_higher(now):
    newer = _item(createdAt=now - timedelta(hours=1), views=200, replyCount=5)
    older = _item(createdAt=now - timedelta(hours=5), views=200, replyCount=5)
    assert compute_hot_score(newer, now) > compute_hot_score(older, now)


def test_same_age_same_score(now):
    a = _item(createdAt=now - timedelta(hours=3), views=10)
    b = _item(createdAt=now - timedelta(hours=3), views=10)
    assert compute_hot_score(a, now) == compute_hot_score(b, now)


def test_zero_engagement_is_zero_not_error(now):
    item = _item(createdAt=now - timedelta(hours=4))
    assert compute_hot_score(item, now) == 0.0


def test_negative_counters_are_clamped(now):
    item = _item(createdAt=now, views=-50, replyCount=-3)
    assert item.views == 0
    assert item.reply_count == 0
    assert compute_hot_score(item, now) == 0.0


def test_missing_timestamp_sinks_to_zero(now):
    assert compute_hot_score(_item(views=10_000, isPinned=True), now) == 0.0
    assert compute_hot_score(_item(createdAt="not a date", views=10_000), now) == 0.0


def test_future_timestamp_is_clamped_to_age_zero(now):
    future = _item(createdAt=now + timedelta(hours=6), replyCount=10)
    fresh = _item(createdAt=now, replyCount=10)
    assert compute_hot_score(future, now) == pytest.approx(compute_hot_score(fresh, now))


def test_custom_weights(now):
    weights = HotScoreWeights(view_weight=1, reply_weight=5, pinned_bonus=0, age_offset_hours=1, gravity=1)
    item = _item(createdAt=now - timedelta(hours=1), views=10, replyCount=2, isPinned=True)
    assert compute_hot_score(item, now, weights) == pytest.approx((10 + 10) / 2)


def test_old_heavily_engaged_thread_decays_below_fresh_pinned(now):
    pinned = _item(createdAt=now, isPinned=True)
    old = _item(createdAt=now - timedelta(days=30), views=50_000, replyCount=2_000)
    recent = _item(createdAt=now - timedelta(hours=1), views=50_000, replyCount=2_000)
    assert compute_hot_score(pinned, now) > compute_hot_score(old, now)
    assert compute_hot_score(recent, now) > compute_hot_score(pinned, now)


def test_age_in_hours(now):
    assert age_in_hours(now - timedelta(minutes=90), now) == pytest.approx(1.5)
    assert age_in_hours(None, now) == math.inf
    assert age_in_hours(now + timedelta(hours=1), now) == 0.0
    assert age_in_hours((now - timedelta(hours=2)).replace(tzinfo=None), now) == pytest.approx(2)


def test_oversized_counter_scores_without_error(now):
    item = _item(createdAt=now, views="9" * 400)
    assert math.isfinite(compute_hot_score(item, now))
    assert compute_hot_score(item, now) > 0

from datetime import datetime, timedelta, timezone

import pytest

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return FakeClock(NOW)


@pytest.fixture
def make_thread():
    """Build a thread row the way the forum API returns it (camelCase)."""

    def _make(thread_id, hours_ago=0.0, views=0, replies=0, pinned=False, **extra):
        row = {
            "id": thread_id,
            "createdAt": (NOW - timedelta(hours=hours_ago)).isoformat(),
            "views": views,
            "replyCount": replies,
            "isPinned": pinned,
        }
        row.update(extra)
        return row

    return _make

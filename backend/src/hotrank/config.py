from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    return int(value)


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    return float(value)


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


SUPABASE_URL = _env("SUPABASE_URL")
SUPABASE_SECRET_KEY = _env("SUPABASE_SECRET_KEY")
SUPABASE_THREADS_TABLE = _env("SUPABASE_THREADS_TABLE", "forum_threads")
SUPABASE_TRENDING_TABLE = _env("SUPABASE_TRENDING_TABLE", "trending_snapshots")

HOT_VIEW_WEIGHT = _env_float("HOT_VIEW_WEIGHT", 0.1)
HOT_REPLY_WEIGHT = _env_float("HOT_REPLY_WEIGHT", 1.0)
HOT_PINNED_BONUS = _env_float("HOT_PINNED_BONUS", 100.0)
HOT_AGE_OFFSET_HOURS = _env_float("HOT_AGE_OFFSET_HOURS", 2.0)
HOT_GRAVITY = _env_float("HOT_GRAVITY", 1.8)

TRENDING_CACHE_TTL_SECONDS = _env_float("TRENDING_CACHE_TTL_SECONDS", 300.0)
TRENDING_DEFAULT_LIMIT = _env_int("TRENDING_DEFAULT_LIMIT", 10)
TRENDING_WINDOW_HOURS = _env_float("TRENDING_WINDOW_HOURS", 168.0)
TRENDING_VELOCITY_DECAY_HOURS = _env_float("TRENDING_VELOCITY_DECAY_HOURS", 48.0)
ENGAGEMENT_DECAY_HOURS = _env_float("ENGAGEMENT_DECAY_HOURS", 168.0)

HOTRANK_VERBOSE = _env_bool("HOTRANK_VERBOSE", True)

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List

from supabase import Client, create_client

from .config import SUPABASE_SECRET_KEY, SUPABASE_THREADS_TABLE, SUPABASE_TRENDING_TABLE, SUPABASE_URL
from .schemas import ScoredItem

THREAD_COLUMNS = "*"


def _client() -> Client:
    if not SUPABASE_URL or not SUPABASE_SECRET_KEY:
        raise RuntimeError("Supabase credentials are missing.")
    return create_client(SUPABASE_URL, SUPABASE_SECRET_KEY)


def serialize_trending(items: List[ScoredItem], last_updated: datetime) -> Dict[str, Any]:
    return {
        "threads": [item.model_dump(mode="json", by_alias=True) for item in items],
        "lastUpdated": last_updated.isoformat(),
    }


def fetch_threads() -> List[Dict[str, Any]]:
    client = _client()
    response = client.table(SUPABASE_THREADS_TABLE).select(THREAD_COLUMNS).execute()
    return list(response.data or [])


def upsert_trending_snapshot(items: List[ScoredItem], last_updated: datetime) -> None:
    client = _client()
    payload = serialize_trending(items, last_updated)
    row = {"id": "hot", **payload}
    client.table(SUPABASE_TRENDING_TABLE).upsert(row).execute()


def update_engagement_scores(scores: Dict[str, int]) -> None:
    if not scores:
        return
    client = _client()
    payload = [{"id": thread_id, "engagement_score": score} for thread_id, score in scores.items()]
    client.table(SUPABASE_THREADS_TABLE).upsert(payload).execute()

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Optional

from langgraph.graph import StateGraph
from pydantic import ValidationError

from .config import HOTRANK_VERBOSE, TRENDING_DEFAULT_LIMIT
from .engagement import compute_engagement_score, engagement_factors_for
from .schemas import ScorableItem, TrendingState
from .supabase_store import fetch_threads, update_engagement_scores, upsert_trending_snapshot
from .trending import rank_items


def _log(message: str) -> None:
    if HOTRANK_VERBOSE:
        print(message, flush=True)


def _run_at(state: TrendingState) -> datetime:
    if state.run_at:
        return datetime.fromisoformat(state.run_at)
    return datetime.now(timezone.utc)


def collect_threads(state: TrendingState) -> TrendingState:
    errors = list(state.errors)
    rows = list(state.raw_rows)
    if not rows:
        _log("[collect] Fetching forum threads...")
        try:
            rows = fetch_threads()
        except Exception as exc:
            errors.append(f"fetch_threads: {exc}")
            _log(f"[collect] !! fetch_threads failed: {exc}")
            return state.model_copy(update={"errors": errors})

    threads: List[ScorableItem] = []
    for index, row in enumerate(rows):
        try:
            threads.append(ScorableItem.model_validate(row))
        except ValidationError as exc:
            label = row.get("id", index) if isinstance(row, dict) else index
            errors.append(f"thread/{label}: invalid row ({exc.error_count()} errors)")
    _log(f"[collect] Done. {len(threads)} of {len(rows)} rows usable.")
    return state.model_copy(update={"raw_rows": rows, "threads": threads, "errors": errors})


def score_threads(state: TrendingState) -> TrendingState:
    errors = list(state.errors)
    now = _run_at(state)
    by_id = {str(row.get("id")): row for row in state.raw_rows if isinstance(row, dict)}
    scores: Dict[str, int] = {}
    for thread in state.threads:
        try:
            factors = engagement_factors_for(by_id.get(thread.id, thread.model_dump()))
            scores[thread.id] = compute_engagement_score(factors, now)
        except (ValidationError, ValueError, TypeError) as exc:
            errors.append(f"engagement/{thread.id}: {exc}")
            _log(f"[score] !! engagement score failed for {thread.id}: {exc}")
    _log(f"[score] Scored {len(scores)} threads.")
    return state.model_copy(update={"engagement_scores": scores, "errors": errors})


def rank_threads(state: TrendingState) -> TrendingState:
    now = _run_at(state)
    trending = rank_items(state.threads, state.limit, now)
    _log(f"[rank] Top {len(trending)} of {len(state.threads)} threads ranked.")
    return state.model_copy(update={"trending": trending})


def store_results(state: TrendingState) -> TrendingState:
    if not state.trending:
        _log("[store] Nothing ranked; skipping Supabase upsert.")
        return state
    errors = list(state.errors)
    now = _run_at(state)
    try:
        upsert_trending_snapshot(state.trending, now)
        update_engagement_scores(state.engagement_scores)
    except Exception as exc:
        errors.append(f"store: {exc}")
        _log(f"[store] !! upsert failed: {exc}")
        return state.model_copy(update={"errors": errors})
    _log("[store] Trending snapshot upsert complete.")
    return state.model_copy(update={"stored": True})


def build_graph() -> StateGraph:
    graph = StateGraph(TrendingState)

    graph.add_node("collect", collect_threads)
    graph.add_node("score", score_threads)
    graph.add_node("rank", rank_threads)
    graph.add_node("store", store_results)

    graph.set_entry_point("collect")
    graph.add_edge("collect", "score")
    graph.add_edge("score", "rank")
    graph.add_edge("rank", "store")
    graph.set_finish_point("store")

    return graph


def run(limit: Optional[int] = None, rows: Optional[List[dict]] = None) -> TrendingState:
    if limit is not None and limit < 1:
        raise ValueError("limit must be a positive integer")
    graph = build_graph().compile()
    state = TrendingState(
        run_at=datetime.now(timezone.utc).isoformat(),
        limit=limit or TRENDING_DEFAULT_LIMIT,
        raw_rows=rows or [],
    )
    result = graph.invoke(state)
    # LangGraph returns a dict, convert it back to TrendingState
    if isinstance(result, dict):
        return TrendingState(**result)
    return result

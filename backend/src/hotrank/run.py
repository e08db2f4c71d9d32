from __future__ import annotations

import argparse
import json
import sys
import time
from typing import List, Optional

from pydantic import ValidationError

from .config import TRENDING_DEFAULT_LIMIT
from .graph import run
from .schemas import ScorableItem
from .scoring import utc_now
from .supabase_store import serialize_trending
from .trending import TrendingRanker


def _load_items(path: str) -> List[ScorableItem]:
    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)
    if isinstance(payload, dict):
        payload = payload.get("threads", [])
    items: List[ScorableItem] = []
    for row in payload:
        try:
            items.append(ScorableItem.model_validate(row))
        except ValidationError as exc:
            print(f"[run] Skipping invalid thread: {exc.error_count()} errors", file=sys.stderr)
    return items


def rank_file(path: str, limit: int) -> int:
    now = utc_now()
    ranker = TrendingRanker(clock=lambda: now)
    items = _load_items(path)
    trending = ranker.get_trending(items, limit=limit, use_cache=False)
    print(json.dumps(serialize_trending(trending, now), indent=2))
    return 0


def run_cli(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Rank forum threads by hot score")
    parser.add_argument("--limit", type=int, default=None, help="Number of trending threads to keep")
    parser.add_argument("--input", help="Rank threads from a local JSON file instead of Supabase")
    args = parser.parse_args(argv)

    if args.limit is not None and args.limit < 1:
        parser.error("--limit must be a positive integer")

    if args.input:
        return rank_file(args.input, args.limit or TRENDING_DEFAULT_LIMIT)

    started = time.perf_counter()
    print("[run] Starting trending refresh...", flush=True)
    state = run(limit=args.limit)
    elapsed = time.perf_counter() - started
    print(f"[run] Loaded {len(state.threads)} threads")
    print(f"[run] Ranked {len(state.trending)} trending threads")
    print(f"[run] Done in {elapsed:.1f}s")
    if state.errors:
        print("[run] Errors:")
        for err in state.errors:
            print(f"- {err}")
    return 0 if state.stored else 1


if __name__ == "__main__":
    raise SystemExit(run_cli())

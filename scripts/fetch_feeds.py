"""Run one aggregation cycle and print the merged feed.

Usage:
  uv run -- python scripts/fetch_feeds.py -n 10
  uv run -- python scripts/fetch_feeds.py --source motor1 --source electrek --json

Reads FEED_TIMEOUT_SECONDS / CAR_SOURCES etc. from .env via pydantic settings.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import List

from ingestion.aggregator import collect_articles
from ingestion.settings import get_settings
from ingestion.sources import load_registry
from ingestion.utils.logging import configure_logging


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Fetch and merge car news feeds")
    parser.add_argument("-n", "--top", type=int, default=10, help="Print top N items (default: 10)")
    parser.add_argument("--source", action="append", default=[], help="Restrict to source id (repeatable)")
    parser.add_argument("--json", action="store_true", help="Print articles as JSON")
    args = parser.parse_args(argv)

    cfg = get_settings()
    configure_logging(cfg.structlog_level, cfg.log_json)

    registry = load_registry(cfg)
    if args.source:
        unknown = set(args.source) - {s.id for s in registry}
        if unknown:
            print(f"Unknown source id(s): {', '.join(sorted(unknown))}", file=sys.stderr)
            return 2
        registry = tuple(s for s in registry if s.id in args.source)

    articles = collect_articles(registry, settings=cfg)
    if args.json:
        print(json.dumps([a.model_dump(mode="json") for a in articles[: args.top]], ensure_ascii=False, indent=2))
        return 0

    print(f"Fetched {len(articles)} articles from {len(registry)} sources.")
    for idx, it in enumerate(articles[: args.top], start=1):
        stamp = it.published_at.isoformat() if it.published_at else "undated"
        print(f"{idx}. [{it.source_name}] {it.title[:120]}\n   {stamp}  {it.link}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

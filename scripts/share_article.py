"""Relay a single article to the configured Telegram channel.

Usage:
  uv run -- python scripts/share_article.py --title "New EV unveiled" \
      --url https://example.com/ev --source Motor1 [--summary "..."]

Requires TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID (env or .env).
Exit codes: 0 delivered, 2 validation, 3 configuration, 4 delivery failure.
"""

from __future__ import annotations

import argparse
import sys
from typing import List

from ingestion.utils.logging import configure_logging
from publish.telegram import relay

_EXIT_CODES = {"validation": 2, "configuration": 3, "delivery": 4}


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Share one article to Telegram")
    parser.add_argument("--title", required=True)
    parser.add_argument("--url", required=True)
    parser.add_argument("--source", required=True)
    parser.add_argument("--summary", default=None)
    args = parser.parse_args(argv)

    configure_logging("INFO")
    outcome = relay({"title": args.title, "url": args.url, "source": args.source, "summary": args.summary})
    if outcome.status == "success":
        print(outcome.message)
        return 0
    print(f"{outcome.kind} error: {outcome.message}", file=sys.stderr)
    return _EXIT_CODES[outcome.kind]


if __name__ == "__main__":
    sys.exit(main())

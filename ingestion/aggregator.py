"""Concurrent multi-source feed aggregation."""

from __future__ import annotations

import asyncio
import time
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Sequence

import httpx

from ingestion.connectors.base import ConnectorError
from ingestion.connectors.rss import FeedConnector
from ingestion.models.domain import CarArticle, SourceDescriptor
from ingestion.services.deduplicator import dedupe_articles
from ingestion.settings import Settings, get_settings
from ingestion.utils.logging import get_logger


logger = get_logger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def sort_articles(articles: Sequence[CarArticle]) -> List[CarArticle]:
    """Newest first; undated articles after all dated ones, in their incoming order."""

    def _key(article: CarArticle) -> tuple[bool, float]:
        if article.published_at is None:
            return (True, 0.0)
        return (False, -(article.published_at - _EPOCH).total_seconds())

    return sorted(articles, key=_key)


async def _fetch_source(connector: FeedConnector, timeout: float, trace_id: str) -> List[CarArticle]:
    source = connector.source
    started = time.monotonic()
    try:
        articles = await asyncio.wait_for(connector.fetch(), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(
            "aggregate.source_failed",
            extra={"trace_id": trace_id, "source_id": source.id, "reason": f"timed out after {timeout}s"},
        )
        return []
    except ConnectorError as exc:
        logger.warning(
            "aggregate.source_failed",
            extra={"trace_id": trace_id, "source_id": source.id, "reason": str(exc)},
        )
        return []
    except Exception as exc:
        logger.warning(
            "aggregate.source_failed",
            extra={"trace_id": trace_id, "source_id": source.id, "reason": f"unexpected {exc.__class__.__name__}: {exc}"},
            exc_info=True,
        )
        return []
    logger.info(
        "aggregate.source_done",
        extra={
            "trace_id": trace_id,
            "source_id": source.id,
            "articles": len(articles),
            "elapsed_ms": int((time.monotonic() - started) * 1000),
        },
    )
    return articles


async def fetch_articles(
    sources: Sequence[SourceDescriptor],
    *,
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> List[CarArticle]:
    """Fetch every source concurrently and return the merged, deduplicated, sorted feed.

    Source failures are logged and contribute nothing; this never raises for them.
    """
    if not sources:
        return []

    cfg = settings or get_settings()
    timeout = float(cfg.feed_timeout_seconds)
    trace_id = str(uuid.uuid4())
    logger.info("aggregate.start", extra={"trace_id": trace_id, "sources": len(sources)})

    owns_client = client is None
    http = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
    try:
        connectors = [
            FeedConnector(
                source,
                http,
                summary_max_chars=int(cfg.summary_max_chars),
                max_entries=int(cfg.max_entries_per_source),
                user_agent=cfg.feed_user_agent,
            )
            for source in sources
        ]
        # gather keeps registry order regardless of completion order
        batches = await asyncio.gather(*(_fetch_source(c, timeout, trace_id) for c in connectors))
    finally:
        if owns_client:
            await http.aclose()

    merged = sort_articles(dedupe_articles(batches))
    logger.info(
        "aggregate.done",
        extra={
            "trace_id": trace_id,
            "fetched": sum(len(b) for b in batches),
            "unique": len(merged),
        },
    )
    return merged


def collect_articles(
    sources: Sequence[SourceDescriptor],
    *,
    settings: Optional[Settings] = None,
) -> List[CarArticle]:
    """Blocking wrapper around :func:`fetch_articles` for scripts."""
    return asyncio.run(fetch_articles(sources, settings=settings))

"""Cross-source deduplication keyed on canonical article links."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from ingestion.models.domain import CarArticle
from ingestion.utils.url import canonicalize_url


def dedup_key(article: CarArticle) -> str:
    return canonicalize_url(str(article.link))


def dedupe_articles(batches: Sequence[Iterable[CarArticle]]) -> List[CarArticle]:
    """Flatten per-source batches, keeping the first article seen for each dedup key.

    ``batches`` must be in registry order; an earlier source wins over a later one.
    Nothing is remembered between calls.
    """
    seen: set[str] = set()
    unique: List[CarArticle] = []
    for batch in batches:
        for article in batch:
            key = dedup_key(article)
            if key in seen:
                continue
            seen.add(key)
            unique.append(article)
    return unique

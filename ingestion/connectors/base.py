"""Connector abstraction, errors, and helpers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional

from ingestion.models.domain import CarArticle, SourceDescriptor
from ingestion.utils.url import canonicalize_url


class ConnectorError(Exception):
    """Base connector error."""


class FeedFetchError(ConnectorError):
    """Feed document could not be retrieved (network error, timeout, non-2xx)."""


class FeedParseError(ConnectorError):
    """Feed document was retrieved but is not a recognisable RSS/Atom feed."""


class BaseConnector(ABC):
    """Abstract per-source connector: fetch raw entries, normalize, drop in-source duplicates."""

    def __init__(self, source: SourceDescriptor, *, max_entries: int = 30) -> None:
        self.source = source
        self._max_entries = max_entries

    async def fetch(self) -> List[CarArticle]:
        raw = await self._fetch_raw()
        return self._normalize_and_dedupe(raw)

    @abstractmethod
    async def _fetch_raw(self) -> List[Any]:
        """Return the raw entries of the source document."""

    @abstractmethod
    def _normalize_entry(self, entry: Any) -> Optional[CarArticle]:
        """Map one raw entry to a CarArticle, or None if it lacks a title or link."""

    def _normalize_and_dedupe(self, entries: Iterable[Any]) -> List[CarArticle]:
        seen: set[str] = set()
        normalized: List[CarArticle] = []
        for entry in entries:
            try:
                article = self._normalize_entry(entry)
                if article is None:
                    continue
                key = canonicalize_url(str(article.link))
            except (ValueError, TypeError, AttributeError):
                # malformed record: drop it, keep the rest of the feed
                continue
            if key in seen:
                continue
            seen.add(key)
            normalized.append(article)
            if len(normalized) >= self._max_entries:
                break
        return normalized

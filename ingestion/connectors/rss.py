"""RSS/Atom feed connector over httpx + feedparser."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

import feedparser
import httpx
from pydantic import HttpUrl, TypeAdapter, ValidationError

from ingestion.models.domain import CarArticle, SourceDescriptor
from ingestion.utils.text import first_image_src, strip_markup, truncate
from ingestion.utils.url import absolute_http_url, article_id

from .base import BaseConnector, FeedFetchError, FeedParseError


_HTTP_URL = TypeAdapter(HttpUrl)
_FEED_ACCEPT = "application/rss+xml, application/atom+xml, application/xml;q=0.9, text/xml;q=0.8, */*;q=0.5"


def _valid_url(value: Optional[str]) -> Optional[HttpUrl]:
    if not value:
        return None
    try:
        return _HTTP_URL.validate_python(value)
    except ValidationError:
        return None


def _entry_datetime(entry: Mapping[str, Any]) -> Optional[datetime]:
    # feedparser exposes parsed dates as UTC struct_time, or None when unparseable
    for key in ("published_parsed", "updated_parsed", "created_parsed"):
        parsed = entry.get(key)
        if not parsed:
            continue
        try:
            return datetime(*parsed[:6], tzinfo=timezone.utc)
        except (TypeError, ValueError):
            continue
    return None


def _is_image(item: Mapping[str, Any]) -> bool:
    mime = str(item.get("type") or "")
    return mime.startswith("image/") or item.get("medium") == "image"


class FeedConnector(BaseConnector):
    """Fetches one source's feed document and normalizes its entries.

    The httpx client is injected so that all sources of one aggregation cycle
    share a connection pool and tests can mock the transport.
    """

    def __init__(
        self,
        source: SourceDescriptor,
        client: httpx.AsyncClient,
        *,
        summary_max_chars: int = 280,
        max_entries: int = 30,
        user_agent: Optional[str] = None,
    ) -> None:
        super().__init__(source, max_entries=max_entries)
        self._client = client
        self._summary_max_chars = summary_max_chars
        self._user_agent = user_agent

    async def _fetch_raw(self) -> List[Any]:
        url = str(self.source.feed_url)
        headers = {"Accept": _FEED_ACCEPT}
        if self._user_agent:
            headers["User-Agent"] = self._user_agent
        try:
            resp = await self._client.get(url, headers=headers)
        except httpx.TimeoutException as exc:
            raise FeedFetchError(f"{self.source.id}: feed request timed out") from exc
        except httpx.HTTPError as exc:
            raise FeedFetchError(f"{self.source.id}: feed request failed ({exc.__class__.__name__})") from exc

        if not resp.is_success:
            raise FeedFetchError(f"{self.source.id}: feed responded with HTTP {resp.status_code}")

        parsed = await asyncio.to_thread(feedparser.parse, resp.content)
        if not parsed.get("version"):
            reason = parsed.get("bozo_exception") or "unrecognised document"
            raise FeedParseError(f"{self.source.id}: not an RSS/Atom feed ({reason})")
        return list(parsed.get("entries") or [])

    def _normalize_entry(self, entry: Any) -> Optional[CarArticle]:
        title = strip_markup(entry.get("title"))
        link = _valid_url(absolute_http_url(entry.get("link") or _alternate_link(entry), str(self.source.feed_url)))
        if not title or link is None:
            return None

        summary_html = entry.get("summary") or _first_content(entry)
        summary = truncate(strip_markup(summary_html), self._summary_max_chars)
        image = _valid_url(absolute_http_url(_image_url(entry, summary_html), str(link)))

        try:
            return CarArticle(
                id=article_id(self.source.id, str(link)),
                title=title,
                summary=summary,
                link=link,
                image=image,
                published_at=_entry_datetime(entry),
                source_id=self.source.id,
                source_name=self.source.name,
            )
        except ValidationError:
            return None


def _alternate_link(entry: Mapping[str, Any]) -> Optional[str]:
    for item in entry.get("links") or []:
        if item.get("rel", "alternate") == "alternate" and item.get("href"):
            return item["href"]
    return None


def _first_content(entry: Mapping[str, Any]) -> Optional[str]:
    for item in entry.get("content") or []:
        value = item.get("value")
        if value:
            return value
    return None


def _image_url(entry: Mapping[str, Any], summary_html: Optional[str]) -> Optional[str]:
    for item in entry.get("media_thumbnail") or []:
        if item.get("url"):
            return item["url"]
    for item in entry.get("media_content") or []:
        if item.get("url") and _is_image(item):
            return item["url"]
    for item in entry.get("enclosures") or []:
        if item.get("href") and _is_image(item):
            return item["href"]
    return first_image_src(summary_html) or first_image_src(_first_content(entry))

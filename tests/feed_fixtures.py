"""RSS/Atom document builders shared by the ingestion and API tests."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional


def rss_item(
    title: Optional[str] = None,
    link: Optional[str] = None,
    *,
    description: Optional[str] = None,
    pub_date: Optional[str] = None,
    extra: str = "",
) -> str:
    parts = ["<item>"]
    if title is not None:
        parts.append(f"<title>{title}</title>")
    if link is not None:
        parts.append(f"<link>{link}</link>")
    if description is not None:
        parts.append(f"<description><![CDATA[{description}]]></description>")
    if pub_date is not None:
        parts.append(f"<pubDate>{pub_date}</pubDate>")
    parts.append(extra)
    parts.append("</item>")
    return "".join(parts)


def rss_feed(items: Iterable[str], *, title: str = "Test Feed") -> bytes:
    body = "".join(items)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/">'
        f"<channel><title>{title}</title><link>https://feeds.example.com/</link>"
        "<description>test</description>"
        f"{body}</channel></rss>"
    ).encode("utf-8")


def atom_feed(entries: Iterable[Mapping[str, str]], *, title: str = "Atom Feed") -> bytes:
    rendered = []
    for entry in entries:
        rendered.append(
            "<entry>"
            f"<title>{entry['title']}</title>"
            f'<link rel="alternate" href="{entry["link"]}"/>'
            f"<id>{entry['link']}</id>"
            f"<updated>{entry['updated']}</updated>"
            f"<summary>{entry.get('summary', '')}</summary>"
            "</entry>"
        )
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        '<feed xmlns="http://www.w3.org/2005/Atom">'
        f"<title>{title}</title><id>urn:test:feed</id><updated>2025-01-05T08:00:00Z</updated>"
        f"{''.join(rendered)}</feed>"
    ).encode("utf-8")

from __future__ import annotations

from ingestion.models.domain import CarArticle
from ingestion.services.deduplicator import dedup_key, dedupe_articles


def _article(source_id: str, link: str, title: str = "Story") -> CarArticle:
    return CarArticle(id=f"{source_id}:{link}", title=title, link=link, source_id=source_id, source_name=source_id)


def test_dedup_key_ignores_tracking_and_trailing_slash():
    assert dedup_key(_article("a", "https://news.example.com/x/?utm_source=a")) == dedup_key(
        _article("b", "https://news.example.com/x")
    )


def test_first_batch_wins_on_duplicate_link():
    first = [_article("a", "https://news.example.com/x?utm_source=a")]
    second = [_article("b", "https://news.example.com/x/"), _article("b", "https://news.example.com/y")]

    merged = dedupe_articles([first, second])

    assert [(a.source_id, str(a.link)) for a in merged] == [
        ("a", "https://news.example.com/x?utm_source=a"),
        ("b", "https://news.example.com/y"),
    ]


def test_calls_do_not_share_state():
    dedupe_articles([[_article("a", "https://news.example.com/x")]])

    again = dedupe_articles([[_article("b", "https://news.example.com/x")]])

    assert [a.source_id for a in again] == ["b"]


def test_empty_batches():
    assert dedupe_articles([]) == []
    assert dedupe_articles([[], []]) == []

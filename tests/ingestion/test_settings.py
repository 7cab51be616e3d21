import json

import pytest

from ingestion.settings import get_settings, reset_settings_cache
from ingestion.sources import CAR_SOURCES, build_registry, load_registry


def test_get_settings_defaults():
    settings = get_settings()

    assert settings.feed_timeout_seconds == 8.0
    assert settings.summary_max_chars == 280
    assert settings.max_entries_per_source == 30
    assert settings.car_sources is None


def test_get_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("FEED_TIMEOUT_SECONDS", "3.5")
    monkeypatch.setenv("SUMMARY_MAX_CHARS", "120")
    monkeypatch.setenv(
        "CAR_SOURCES",
        json.dumps([{"id": "custom", "name": "Custom", "feedUrl": "https://custom.example.com/rss"}]),
    )

    settings = get_settings()

    assert settings.feed_timeout_seconds == 3.5
    assert settings.summary_max_chars == 120
    assert [s.id for s in load_registry(settings)] == ["custom"]


def test_reset_settings_cache_reloads(monkeypatch):
    monkeypatch.setenv("FEED_TIMEOUT_SECONDS", "2")
    first = get_settings()
    monkeypatch.setenv("FEED_TIMEOUT_SECONDS", "4")
    assert get_settings() is first

    reset_settings_cache()
    assert get_settings().feed_timeout_seconds == 4.0


def test_duplicate_car_sources_raise(monkeypatch):
    duplicate = json.dumps(
        [
            {"id": "dup", "name": "One", "feed_url": "https://one.example.com/rss"},
            {"id": "dup", "name": "Two", "feed_url": "https://two.example.com/rss"},
        ]
    )
    monkeypatch.setenv("CAR_SOURCES", duplicate)

    with pytest.raises(RuntimeError) as exc:
        get_settings()

    assert "Duplicate source id" in str(exc.value)


def test_summary_bound_is_validated(monkeypatch):
    monkeypatch.setenv("SUMMARY_MAX_CHARS", "5000")

    with pytest.raises(RuntimeError):
        get_settings()


def test_builtin_registry_is_unique_and_ordered():
    ids = [s.id for s in CAR_SOURCES]
    assert len(ids) == len(set(ids))
    assert ids[0] == "motor1"
    assert load_registry() is CAR_SOURCES


def test_build_registry_rejects_duplicates():
    with pytest.raises(ValueError):
        build_registry(
            [
                {"id": "x", "name": "X", "feed_url": "https://x.example.com/rss"},
                {"id": "x", "name": "X2", "feed_url": "https://x2.example.com/rss"},
            ]
        )

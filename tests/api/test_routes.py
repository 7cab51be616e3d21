from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from ingestion.models.domain import CarArticle, SourceDescriptor
from publish.models import ErrorOutcome, SuccessOutcome


REGISTRY = (
    SourceDescriptor(id="motor1", name="Motor1", feed_url="https://feeds.example.com/motor1.xml"),
    SourceDescriptor(id="electrek", name="Electrek", feed_url="https://feeds.example.com/electrek.xml"),
)


@pytest.fixture()
def client():
    from api import routes
    from api.main import app

    app.dependency_overrides[routes.registry_dependency] = lambda: REGISTRY
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_healthz(client):
    assert client.get("/healthz").json() == {"status": "ok"}


def test_sources_lists_registry(client):
    resp = client.get("/api/sources")

    assert resp.status_code == 200
    assert resp.json() == [{"id": "motor1", "name": "Motor1"}, {"id": "electrek", "name": "Electrek"}]


def test_articles_runs_one_aggregation_cycle(client, monkeypatch):
    from api import routes

    calls = []

    async def fake_fetch(sources):
        calls.append(tuple(s.id for s in sources))
        return [
            CarArticle(
                id="abc",
                title="Solid-state battery pilot line",
                summary="",
                link="https://electrek.example.com/solid-state",
                published_at=datetime(2025, 1, 6, tzinfo=timezone.utc),
                source_id="electrek",
                source_name="Electrek",
            )
        ]

    monkeypatch.setattr(routes, "fetch_articles", fake_fetch)

    resp = client.get("/api/articles")

    assert resp.status_code == 200
    body = resp.json()
    assert calls == [("motor1", "electrek")]
    assert body[0]["title"] == "Solid-state battery pilot line"
    assert body[0]["source_id"] == "electrek"
    assert body[0]["image"] is None


@pytest.mark.parametrize(
    "outcome",
    [
        SuccessOutcome(message="Delivered to Telegram"),
        ErrorOutcome(kind="configuration", message="Missing environment variable TELEGRAM_CHAT_ID."),
    ],
)
def test_share_returns_outcome_with_200(client, monkeypatch, outcome):
    from api import routes

    received = []

    def fake_relay(payload):
        received.append(payload)
        return outcome

    monkeypatch.setattr(routes, "relay", fake_relay)

    resp = client.post("/api/share", json={"title": "T", "url": "https://x.example.com/a", "source": "Motor1"})

    assert resp.status_code == 200
    assert resp.json() == outcome.model_dump()
    assert received == [{"title": "T", "url": "https://x.example.com/a", "source": "Motor1"}]


def test_share_validation_error_end_to_end(client, httpx_mock):
    resp = client.post("/api/share", json={"title": "", "url": "https://x.example.com/a", "source": "Motor1"})

    assert resp.status_code == 200
    assert resp.json() == {"status": "error", "kind": "validation", "message": "Article title is required."}
    assert httpx_mock.get_requests() == []

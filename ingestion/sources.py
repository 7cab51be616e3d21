"""Built-in registry of automotive feed sources."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Tuple

from ingestion.models.domain import SourceDescriptor
from ingestion.settings import Settings, get_settings


Registry = Tuple[SourceDescriptor, ...]


def build_registry(entries: Iterable[Mapping[str, Any] | SourceDescriptor]) -> Registry:
    """Validate descriptors and freeze them in registry order.

    Raises ValueError when two descriptors share an id.
    """
    registry: list[SourceDescriptor] = []
    seen: set[str] = set()
    for entry in entries:
        source = entry if isinstance(entry, SourceDescriptor) else SourceDescriptor.model_validate(entry)
        if source.id in seen:
            raise ValueError(f"Duplicate source id: {source.id}")
        seen.add(source.id)
        registry.append(source)
    return tuple(registry)


CAR_SOURCES: Registry = build_registry(
    [
        {"id": "motor1", "name": "Motor1", "feed_url": "https://www.motor1.com/rss/news/all/"},
        {"id": "autoblog", "name": "Autoblog", "feed_url": "https://www.autoblog.com/rss.xml"},
        {"id": "caranddriver", "name": "Car and Driver", "feed_url": "https://www.caranddriver.com/rss/all.xml/"},
        {"id": "autocar", "name": "Autocar", "feed_url": "https://www.autocar.co.uk/rss"},
        {"id": "electrek", "name": "Electrek", "feed_url": "https://electrek.co/feed/"},
        {"id": "insideevs", "name": "InsideEVs", "feed_url": "https://insideevs.com/rss/news/all/"},
        {"id": "jalopnik", "name": "Jalopnik", "feed_url": "https://jalopnik.com/rss"},
        {"id": "thedrive", "name": "The Drive", "feed_url": "https://www.thedrive.com/feed"},
    ]
)


def load_registry(settings: Settings | None = None) -> Registry:
    """Registry for this process: the CAR_SOURCES override if set, else the built-in list."""
    cfg = settings or get_settings()
    if cfg.car_sources:
        return build_registry(cfg.car_sources)
    return CAR_SOURCES

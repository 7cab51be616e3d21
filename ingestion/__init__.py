"""Feed aggregation package bootstrap."""

from .aggregator import collect_articles, fetch_articles  # noqa: F401
from .models.domain import CarArticle, SourceDescriptor  # noqa: F401
from .settings import Settings, get_settings, reset_settings_cache  # noqa: F401
from .sources import CAR_SOURCES, build_registry, load_registry  # noqa: F401

__all__ = [
    "CAR_SOURCES",
    "CarArticle",
    "Settings",
    "SourceDescriptor",
    "build_registry",
    "collect_articles",
    "fetch_articles",
    "get_settings",
    "load_registry",
    "reset_settings_cache",
]

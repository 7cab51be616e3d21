from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel

from ingestion.aggregator import fetch_articles
from ingestion.models.domain import CarArticle
from ingestion.sources import Registry, load_registry
from publish.models import ShareOutcome
from publish.telegram import relay

router = APIRouter(prefix="/api")


class SourceSummary(BaseModel):
    id: str
    name: str


async def registry_dependency() -> Registry:
    return load_registry()


RegistryDep = Annotated[Registry, Depends(registry_dependency)]


@router.get("/sources", response_model=list[SourceSummary])
async def list_sources_route(registry: RegistryDep) -> list[SourceSummary]:
    return [SourceSummary(id=source.id, name=source.name) for source in registry]


@router.get("/articles", response_model=list[CarArticle])
async def list_articles_route(registry: RegistryDep) -> list[CarArticle]:
    return await fetch_articles(registry)


@router.post("/share", response_model=ShareOutcome)
def share_article_route(payload: Annotated[dict[str, Any], Body()]) -> ShareOutcome:
    # sync route: relay performs a blocking HTTP call and runs in the threadpool
    return relay(payload)

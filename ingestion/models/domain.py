"""Domain DTOs for the feed aggregation pipeline."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator


class SourceDescriptor(BaseModel):
    """Static description of one feed source in the registry."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Unique source identifier (e.g. motor1)")
    name: str = Field(..., description="Display name of the publication")
    feed_url: HttpUrl = Field(..., alias="feedUrl", description="RSS/Atom document URL")

    @field_validator("id", "name")
    @classmethod
    def _non_blank(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("must not be blank")
        return text


class CarArticle(BaseModel):
    """Canonical article record shared by the aggregator and its consumers."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="sha256 of source id + canonical link")
    title: str = Field(..., min_length=1)
    summary: str = ""
    link: HttpUrl
    image: Optional[HttpUrl] = None
    published_at: Optional[datetime] = None
    source_id: str
    source_name: str

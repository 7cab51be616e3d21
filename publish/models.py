"""Share payload schema and relay outcomes."""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, ValidationError, field_validator

TITLE_MAX_CHARS = 500
SOURCE_MAX_CHARS = 200
SUMMARY_MAX_CHARS = 2000

_HTTP_URL = TypeAdapter(HttpUrl)

ErrorKind = Literal["validation", "configuration", "delivery"]


class SharePayload(BaseModel):
    """Strict form of one article share request; lives for a single relay call."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_CHARS)
    url: str
    source: str = Field(..., min_length=1, max_length=SOURCE_MAX_CHARS)
    summary: Optional[str] = Field(None, max_length=SUMMARY_MAX_CHARS)

    @field_validator("url")
    @classmethod
    def _absolute_http_url(cls, v: str) -> str:
        # validated as a web URL but kept as submitted
        try:
            _HTTP_URL.validate_python(v)
        except ValidationError as exc:
            raise ValueError("url must be an absolute http(s) URL") from exc
        return v

    @field_validator("summary")
    @classmethod
    def _blank_summary_is_absent(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class IdleOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["idle"] = "idle"


class SuccessOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["success"] = "success"
    message: str


class ErrorOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["error"] = "error"
    message: str
    kind: ErrorKind


ShareOutcome = Annotated[Union[IdleOutcome, SuccessOutcome, ErrorOutcome], Field(discriminator="status")]

INITIAL_OUTCOME = IdleOutcome()

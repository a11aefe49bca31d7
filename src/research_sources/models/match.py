"""Cached match row model."""
from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class CacheSource(str, Enum):
    """Source names as stored in the match cache."""

    CHRONICLING_AMERICA = "chronicling_america"
    WIKITREE = "wikitree"
    OPENARCH = "openarch"


# Fixed confidence per source: a tree hit is a structured person match,
# a newspaper hit is only a text mention.
MATCH_SCORES: dict[CacheSource, float] = {
    CacheSource.WIKITREE: 0.7,
    CacheSource.OPENARCH: 0.6,
    CacheSource.CHRONICLING_AMERICA: 0.5,
}


class MatchRecord(BaseModel):
    """One persisted (person, source, external id) mention."""

    id: int | None = Field(default=None, description="Row id assigned by the store")
    person_id: str | None = None
    source_name: str
    external_id: str
    url: str = ""
    title: str = ""
    snippet: str = ""
    match_score: float
    raw_json: str = Field(default="{}", description="Serialized normalized result")
    searched_at: datetime

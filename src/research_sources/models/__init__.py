"""Data models for person queries, provider results and cached matches."""
from __future__ import annotations

from research_sources.models.match import MATCH_SCORES, CacheSource, MatchRecord
from research_sources.models.person import SEARCHABLE_SOURCES, PersonQuery, SourceName
from research_sources.models.records import (
    NewspaperItem,
    NewspaperPage,
    NewspaperSearchResult,
    OpenArchivesRecord,
    WikiTreePerson,
)

__all__ = [
    "MATCH_SCORES",
    "SEARCHABLE_SOURCES",
    "CacheSource",
    "MatchRecord",
    "NewspaperItem",
    "NewspaperPage",
    "NewspaperSearchResult",
    "OpenArchivesRecord",
    "PersonQuery",
    "SourceName",
    "WikiTreePerson",
]

"""Record provider connectors."""
from __future__ import annotations

from research_sources.sources.base import BaseSource, CacheableResult
from research_sources.sources.chronicling_america import (
    ChroniclingAmericaSource,
    NewspaperPageParams,
    NewspaperSearchParams,
)
from research_sources.sources.open_archives import OpenArchivesSearchParams, OpenArchivesSource
from research_sources.sources.wikitree import WikiTreeSearchParams, WikiTreeSource

__all__ = [
    "BaseSource",
    "CacheableResult",
    "ChroniclingAmericaSource",
    "NewspaperPageParams",
    "NewspaperSearchParams",
    "OpenArchivesSearchParams",
    "OpenArchivesSource",
    "WikiTreeSearchParams",
    "WikiTreeSource",
]

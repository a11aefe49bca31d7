"""Cross-reference a person across every record provider at once.

Fans one PersonQuery out to the applicable sources concurrently, captures
each source's outcome on its own, caches every returned mention and
assembles a single report. One source failing never affects the others.
"""
from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field

from .cache import MatchCache, get_match_cache
from .exceptions import ValidationError
from .logging import get_logger
from .models.match import MATCH_SCORES, CacheSource
from .models.person import SEARCHABLE_SOURCES, PersonQuery, SourceName
from .sources.base import CacheableResult
from .sources.chronicling_america import ChroniclingAmericaSource, NewspaperSearchParams
from .sources.open_archives import OpenArchivesSearchParams, OpenArchivesSource
from .sources.wikitree import WikiTreeSearchParams, WikiTreeSource
from .utils.places import extract_state, is_european_location, year_end, year_start

logger = get_logger(__name__)

# Selector name -> name stored in the match cache
CACHE_SOURCES: dict[SourceName, CacheSource] = {
    SourceName.NEWSPAPERS: CacheSource.CHRONICLING_AMERICA,
    SourceName.WIKITREE: CacheSource.WIKITREE,
    SourceName.OPENARCH: CacheSource.OPENARCH,
}


@dataclass
class SourceOutcome:
    """Result of one source's call: records on success, a message on failure."""

    source: SourceName
    records: list[CacheableResult] = field(default_factory=list)
    error: str | None = None
    search_time_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_entries(self) -> list[dict[str, Any]]:
        if self.error is not None:
            return [{"error": self.error}]
        return [record.model_dump(mode="json") for record in self.records]


class CrossReferenceReport(BaseModel):
    """Aggregate result of a cross-reference search. Not persisted."""

    person: dict[str, str | None]
    sources_searched: list[str] = Field(description="Sources that were applicable and invoked")
    results: dict[str, list[dict[str, Any]]] = Field(default_factory=dict)
    total_results: int = 0


def resolve_sources(sources: Iterable[str | SourceName]) -> list[SourceName]:
    """Turn a selector into candidate sources in fixed fan-out order.

    Raises:
        ValidationError: If the selector is empty or names an unknown source
    """
    selected: set[SourceName] = set()
    for raw in sources:
        try:
            selected.add(SourceName(raw))
        except ValueError as e:
            raise ValidationError(f"Unknown source: {raw!r}") from e

    if not selected:
        raise ValidationError("At least one source must be selected")
    if SourceName.ALL in selected:
        return list(SEARCHABLE_SOURCES)
    return [s for s in SEARCHABLE_SOURCES if s in selected]


def is_applicable(source: SourceName, query: PersonQuery) -> bool:
    """Applicability gate: Open Archives only covers NL, BE and FR."""
    if source is SourceName.OPENARCH:
        return is_european_location(query.birth_place, query.death_place)
    return True


def newspaper_params(query: PersonQuery) -> NewspaperSearchParams:
    return NewspaperSearchParams(
        query=query.full_name,
        state=extract_state(query.birth_place),
        start_date=year_start(query.birth_year),
        end_date=year_end(query.death_year),
    )


def wikitree_params(query: PersonQuery) -> WikiTreeSearchParams:
    return WikiTreeSearchParams(
        first_name=query.given_name,
        last_name=query.surname,
        birth_date=query.birth_year,
        death_date=query.death_year,
        birth_location=query.birth_place,
        death_location=query.death_place,
    )


def openarch_params(query: PersonQuery) -> OpenArchivesSearchParams:
    return OpenArchivesSearchParams(
        name=query.full_name,
        birth_year=query.birth_year,
        death_year=query.death_year,
        place=query.birth_place or query.death_place,
    )


class CrossReferenceOrchestrator:
    """Search newspapers, WikiTree and Open Archives for one person.

    Args:
        newspapers: Chronicling America adapter
        wikitree: WikiTree adapter
        openarch: Open Archives adapter
        cache: Match cache; the process-wide cache is used when omitted
        source_timeout: Optional per-source timeout in seconds. A source that
            exceeds it is reported as failed; the others are unaffected.
    """

    def __init__(
        self,
        newspapers: ChroniclingAmericaSource | None = None,
        wikitree: WikiTreeSource | None = None,
        openarch: OpenArchivesSource | None = None,
        cache: MatchCache | None = None,
        source_timeout: float | None = None,
    ) -> None:
        self.newspapers = newspapers or ChroniclingAmericaSource()
        self.wikitree = wikitree or WikiTreeSource()
        self.openarch = openarch or OpenArchivesSource()
        self._cache = cache
        self.source_timeout = source_timeout

    @property
    def cache(self) -> MatchCache:
        if self._cache is None:
            return get_match_cache()
        return self._cache

    def applicable_sources(
        self,
        query: PersonQuery,
        sources: Iterable[str | SourceName] = (SourceName.ALL,),
    ) -> list[SourceName]:
        """Sources that will actually be called for this query."""
        return [s for s in resolve_sources(sources) if is_applicable(s, query)]

    def _call_for(self, source: SourceName, query: PersonQuery) -> Callable[[], Awaitable[list[Any]]]:
        # Requests are built eagerly so a projection failure surfaces before any call
        if source is SourceName.NEWSPAPERS:
            news_params = newspaper_params(query)
            return lambda: self._newspaper_items(news_params)
        if source is SourceName.WIKITREE:
            tree_params = wikitree_params(query)
            return lambda: self.wikitree.search(tree_params)
        archive_params = openarch_params(query)
        return lambda: self.openarch.search(archive_params)

    async def _newspaper_items(self, params: NewspaperSearchParams) -> list[Any]:
        result = await self.newspapers.search(params)
        return list(result.items)

    async def _run_source(
        self,
        source: SourceName,
        call: Callable[[], Awaitable[list[Any]]],
    ) -> SourceOutcome:
        start = time.time()
        try:
            if self.source_timeout is not None:
                records = await asyncio.wait_for(call(), timeout=self.source_timeout)
            else:
                records = await call()
        except (asyncio.TimeoutError, TimeoutError):
            logger.warning("source_timeout", source=source.value, timeout_seconds=self.source_timeout)
            return SourceOutcome(
                source=source,
                error=f"timeout after {self.source_timeout}s",
                search_time_ms=(time.time() - start) * 1000,
            )
        except Exception as e:
            logger.warning("source_failed", source=source.value, error=str(e) or type(e).__name__)
            return SourceOutcome(
                source=source,
                error=str(e) or "Unknown error",
                search_time_ms=(time.time() - start) * 1000,
            )

        return SourceOutcome(source=source, records=list(records), search_time_ms=(time.time() - start) * 1000)

    async def cross_reference(
        self,
        query: PersonQuery,
        sources: Sequence[str | SourceName] = (SourceName.ALL,),
    ) -> CrossReferenceReport:
        """Search every applicable source concurrently and cache the results.

        Returns:
            The aggregate report; failed sources carry an error entry

        Raises:
            ValidationError: If the source selector is malformed
            CacheWriteError: If a result cannot be cached
        """
        applicable = self.applicable_sources(query, sources)
        calls = [(source, self._call_for(source, query)) for source in applicable]

        outcomes: list[SourceOutcome] = await asyncio.gather(
            *(self._run_source(source, call) for source, call in calls)
        )

        for outcome in outcomes:
            if outcome.ok:
                self._cache_outcome(outcome, query.person_id)

        report = CrossReferenceReport(
            person={
                "given_name": query.given_name,
                "surname": query.surname,
                "birth_year": query.birth_year,
                "birth_place": query.birth_place,
                "death_year": query.death_year,
                "death_place": query.death_place,
            },
            sources_searched=[o.source.value for o in outcomes],
            results={o.source.value: o.to_entries() for o in outcomes},
            total_results=sum(len(o.records) for o in outcomes if o.ok),
        )
        logger.info(
            "cross_reference_complete",
            sources=report.sources_searched,
            failed=[o.source.value for o in outcomes if not o.ok],
            total_results=report.total_results,
        )
        return report

    def _cache_outcome(self, outcome: SourceOutcome, person_id: str | None) -> None:
        cache_source = CACHE_SOURCES[outcome.source]
        score = MATCH_SCORES[cache_source]
        for record in outcome.records:
            self.cache.upsert(
                person_id,
                cache_source.value,
                record.external_id,
                record.link,
                record.label,
                record.snippet_text,
                score,
                record.model_dump_json(),
            )

    async def close(self) -> None:
        await asyncio.gather(self.newspapers.close(), self.wikitree.close(), self.openarch.close())

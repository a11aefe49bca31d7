"""Open Archives (openarchieven.nl) connector.

Dutch, Belgian and French civil, church and notary records.
API: https://www.openarchieven.nl/api/
Free access, no API key required.
"""
from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from ..models.records import OpenArchivesRecord
from .base import BaseSource, UpstreamModel

logger = logging.getLogger(__name__)

RecordKind = Literal["civil", "church", "notary", "all"]
CountryCode = Literal["NL", "BE", "FR"]


class OpenArchivesSearchParams(BaseModel):
    """Search request for archive records."""

    name: str | None = None
    birth_year: str | None = Field(default=None, description="YYYY, sent as yearFrom")
    death_year: str | None = Field(default=None, description="YYYY, sent as yearTo")
    place: str | None = None
    source_type: RecordKind = "all"
    country_code: CountryCode | None = None
    limit: int = Field(default=20, ge=1, le=100)


class _Doc(UpstreamModel):
    id: str = ""
    title: list[str] | str = Field(default_factory=list)
    date: str = ""
    place: list[str] | str = Field(default_factory=list)
    type: str = "unknown"
    personNames: list[str] = Field(default_factory=list)
    url: str = ""
    imageUrl: str | None = None


def _first(value: list[str] | str, default: str) -> str:
    if isinstance(value, str):
        return value or default
    return value[0] if value else default


class _Body(UpstreamModel):
    docs: list[_Doc] = Field(default_factory=list)


class _SearchResponse(UpstreamModel):
    response: _Body = Field(default_factory=_Body)


class OpenArchivesSource(BaseSource):
    """Open Archives record search (Netherlands, Belgium, France)."""

    name = "openarch"
    display_name = "Open Archives"
    base_url = "https://api.openarch.nl/2.0"

    async def search(self, params: OpenArchivesSearchParams) -> list[OpenArchivesRecord]:
        """Search archive records.

        Raises:
            ProviderError: If the API call fails or returns an unusable body
        """
        query: dict[str, Any] = {}
        if params.name:
            query["search"] = params.name
        if params.place:
            query["place"] = params.place
        if params.birth_year:
            query["yearFrom"] = params.birth_year
        if params.death_year:
            query["yearTo"] = params.death_year
        if params.source_type != "all":
            query["type"] = params.source_type
        if params.country_code:
            query["country"] = params.country_code
        query["rows"] = str(params.limit)
        query["format"] = "json"

        data = await self._request_json("GET", f"{self.base_url}/search", params=query)
        try:
            decoded = _SearchResponse.model_validate(data)
        except ValidationError as e:
            raise self._malformed(e) from e

        return [self._to_record(doc) for doc in decoded.response.docs]

    @staticmethod
    def _to_record(doc: _Doc) -> OpenArchivesRecord:
        return OpenArchivesRecord(
            id=doc.id,
            title=_first(doc.title, "Unknown"),
            date=doc.date,
            place=_first(doc.place, ""),
            source_type=doc.type,
            person_names=doc.personNames,
            archive_url=doc.url,
            image_url=doc.imageUrl,
        )

"""Chronicling America source connector (Library of Congress newspapers).

Searches digitized American newspapers from 1789-1963 for obituaries,
announcements, legal notices and general news mentions.

API documentation: https://chroniclingamerica.loc.gov/about/api/
No API key required.
"""
from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from ..models.records import NewspaperItem, NewspaperPage, NewspaperSearchResult
from .base import BaseSource, UpstreamModel

logger = logging.getLogger(__name__)

SNIPPET_MAX_CHARS = 300


class NewspaperSearchParams(BaseModel):
    """Search request for newspaper pages."""

    query: str
    state: str | None = None
    start_date: str | None = Field(default=None, description="YYYY-MM-DD")
    end_date: str | None = Field(default=None, description="YYYY-MM-DD")
    page: int = Field(default=1, ge=1)


class NewspaperPageParams(BaseModel):
    """Address of a single newspaper page."""

    lccn: str
    date: str = Field(description="YYYY-MM-DD")
    page: int = Field(ge=1)
    edition: int = Field(default=1, ge=1)


class _Item(UpstreamModel):
    id: str = ""
    title: str = "Unknown"
    date: str = ""
    sequence: int = 1
    edition: int = 1
    lccn: str = ""
    ocr_eng: str = ""


class _SearchResponse(UpstreamModel):
    totalItems: int = 0
    items: list[_Item] = Field(default_factory=list)


class _PageResponse(UpstreamModel):
    jp2: str = ""
    ocr_eng: str = ""


def _digits(date: str) -> str:
    return date.replace("-", "")


class ChroniclingAmericaSource(BaseSource):
    """Library of Congress Chronicling America newspaper search.

    Paging is explicit: callers re-invoke with the next ``page`` to walk
    further results.
    """

    name = "chronicling_america"
    display_name = "Chronicling America"
    base_url = "https://chroniclingamerica.loc.gov"

    async def search(self, params: NewspaperSearchParams) -> NewspaperSearchResult:
        """Search newspaper pages by proximity text.

        Raises:
            ProviderError: If the API call fails or returns an unusable body
        """
        query: dict[str, Any] = {
            "proxtext": params.query,
            "format": "json",
            "page": str(params.page),
        }
        if params.state:
            query["state"] = params.state
        if params.start_date:
            query["dateFilterType"] = "range"
            query["date1"] = _digits(params.start_date)
        if params.end_date:
            query["date2"] = _digits(params.end_date)

        data = await self._request_json("GET", f"{self.base_url}/search/pages/results/", params=query)
        try:
            decoded = _SearchResponse.model_validate(data)
        except ValidationError as e:
            raise self._malformed(e) from e

        return NewspaperSearchResult(
            total_items=decoded.totalItems,
            items=[self._to_item(item) for item in decoded.items],
        )

    def _to_item(self, item: _Item) -> NewspaperItem:
        return NewspaperItem(
            id=item.id,
            title=item.title,
            date=item.date,
            page=item.sequence,
            edition=item.edition,
            lccn=item.lccn,
            url=f"{self.base_url}/lccn/{item.lccn}/{item.date}/ed-1/seq-{item.sequence}/",
            snippet=item.ocr_eng[:SNIPPET_MAX_CHARS],
        )

    async def get_page(self, params: NewspaperPageParams) -> NewspaperPage:
        """Fetch one page's image link and full, untruncated OCR text."""
        path = f"/lccn/{params.lccn}/{_digits(params.date)}/ed-{params.edition}/seq-{params.page}"

        data = await self._request_json("GET", f"{self.base_url}{path}.json", error_label="page")
        try:
            decoded = _PageResponse.model_validate(data)
        except ValidationError as e:
            raise self._malformed(e) from e

        return NewspaperPage(
            url=f"{self.base_url}{path}/",
            image_url=decoded.jp2,
            ocr_text=decoded.ocr_eng,
        )

"""Tests for the Chronicling America newspaper connector."""
from __future__ import annotations

import httpx
import pytest

from research_sources.exceptions import ProviderError
from research_sources.sources.chronicling_america import (
    ChroniclingAmericaSource,
    NewspaperPageParams,
    NewspaperSearchParams,
)


SEARCH_BODY = {
    "totalItems": 42,
    "items": [
        {
            "id": "/lccn/sn85042462/1900-01-01/ed-1/seq-3/",
            "title": "The San Francisco Call",
            "date": "19000101",
            "sequence": 3,
            "edition": 1,
            "lccn": "sn85042462",
            "ocr_eng": "x" * 500,
        }
    ],
}


class TestSearch:
    @pytest.mark.asyncio
    async def test_query_parameters(self, json_transport):
        """Proximity text, page and digits-only date range are sent."""
        transport = json_transport(SEARCH_BODY)
        source = ChroniclingAmericaSource(client=transport.client())

        await source.search(
            NewspaperSearchParams(
                query="John Smith",
                state="California",
                start_date="1850-01-01",
                end_date="1920-12-31",
                page=2,
            )
        )

        request = transport.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/search/pages/results/"
        params = request.url.params
        assert params["proxtext"] == "John Smith"
        assert params["format"] == "json"
        assert params["page"] == "2"
        assert params["state"] == "California"
        assert params["dateFilterType"] == "range"
        assert params["date1"] == "18500101"
        assert params["date2"] == "19201231"
        assert request.headers["User-Agent"] == "FamilyTreeResearch/1.0"

    @pytest.mark.asyncio
    async def test_optional_parameters_omitted(self, json_transport):
        transport = json_transport({"items": []})
        source = ChroniclingAmericaSource(client=transport.client())

        await source.search(NewspaperSearchParams(query="Maria Garcia"))

        params = transport.requests[0].url.params
        assert params["page"] == "1"
        assert "state" not in params
        assert "dateFilterType" not in params
        assert "date1" not in params
        assert "date2" not in params

    @pytest.mark.asyncio
    async def test_item_mapping_and_snippet_truncation(self, json_transport):
        """A 500-character OCR snippet is cut to exactly 300 characters."""
        source = ChroniclingAmericaSource(client=json_transport(SEARCH_BODY).client())

        result = await source.search(NewspaperSearchParams(query="John Smith"))

        assert result.total_items == 42
        item = result.items[0]
        assert item.id == "/lccn/sn85042462/1900-01-01/ed-1/seq-3/"
        assert item.title == "The San Francisco Call"
        assert item.page == 3
        assert item.lccn == "sn85042462"
        assert item.url == "https://chroniclingamerica.loc.gov/lccn/sn85042462/19000101/ed-1/seq-3/"
        assert len(item.snippet) == 300

    @pytest.mark.asyncio
    async def test_missing_fields_use_defaults(self, json_transport):
        """A sparse payload degrades the record instead of failing."""
        source = ChroniclingAmericaSource(client=json_transport({"items": [{}, {"title": None}]}).client())

        result = await source.search(NewspaperSearchParams(query="John Smith"))

        assert result.total_items == 0
        assert len(result.items) == 2
        for item in result.items:
            assert item.id == ""
            assert item.title == "Unknown"
            assert item.page == 1
            assert item.edition == 1
            assert item.snippet == ""

    @pytest.mark.asyncio
    async def test_numeric_date_kept_as_text(self, json_transport):
        body = {"items": [{"id": "p1", "date": 19000101, "lccn": "sn1", "sequence": 2}]}
        source = ChroniclingAmericaSource(client=json_transport(body).client())

        item = (await source.search(NewspaperSearchParams(query="John Smith"))).items[0]

        assert item.date == "19000101"
        assert item.url == "https://chroniclingamerica.loc.gov/lccn/sn1/19000101/ed-1/seq-2/"

    @pytest.mark.asyncio
    async def test_http_error_raises_provider_error(self, json_transport):
        source = ChroniclingAmericaSource(client=json_transport({}, status_code=503).client())

        with pytest.raises(ProviderError) as exc_info:
            await source.search(NewspaperSearchParams(query="John Smith"))

        assert exc_info.value.status_code == 503
        assert exc_info.value.source == "chronicling_america"
        assert "503" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_malformed_body_raises_provider_error(self, json_transport):
        source = ChroniclingAmericaSource(client=json_transport(["not", "an", "object"]).client())

        with pytest.raises(ProviderError, match="malformed"):
            await source.search(NewspaperSearchParams(query="John Smith"))

    @pytest.mark.asyncio
    async def test_transport_failure_raises_provider_error(self):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(refuse))
        source = ChroniclingAmericaSource(client=client)

        with pytest.raises(ProviderError) as exc_info:
            await source.search(NewspaperSearchParams(query="John Smith"))

        assert exc_info.value.status_code is None


class TestGetPage:
    @pytest.mark.asyncio
    async def test_page_url_and_full_ocr(self, json_transport):
        """The adapter returns the full OCR text; truncation happens at the tool."""
        transport = json_transport({"jp2": "https://example.test/seq-1.jp2", "ocr_eng": "y" * 10_000})
        source = ChroniclingAmericaSource(client=transport.client())

        page = await source.get_page(NewspaperPageParams(lccn="sn85042462", date="1900-01-01", page=4))

        assert transport.requests[0].url.path == "/lccn/sn85042462/19000101/ed-1/seq-4.json"
        assert page.url == "https://chroniclingamerica.loc.gov/lccn/sn85042462/19000101/ed-1/seq-4/"
        assert page.image_url == "https://example.test/seq-1.jp2"
        assert len(page.ocr_text) == 10_000

    @pytest.mark.asyncio
    async def test_page_error(self, json_transport):
        source = ChroniclingAmericaSource(client=json_transport({}, status_code=404).client())

        with pytest.raises(ProviderError, match="page error: 404"):
            await source.get_page(NewspaperPageParams(lccn="x", date="1900-01-01", page=1, edition=2))

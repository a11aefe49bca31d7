"""Tests for the WikiTree connector."""
from __future__ import annotations

import json

import pytest

from research_sources.exceptions import ProviderError
from research_sources.sources.wikitree import PERSON_FIELDS, WikiTreeSearchParams, WikiTreeSource


MATCH = {
    "user_id": 12345,
    "Name": "Smith-12345",
    "FirstName": "John",
    "LastNameAtBirth": "Smith",
    "BirthDate": "1850-03-02",
    "DeathDate": "1920-11-30",
    "BirthLocation": "Amsterdam, Netherlands",
    "DeathLocation": "Boston, Massachusetts",
    "Privacy": 60,
}


class TestSearch:
    @pytest.mark.asyncio
    async def test_request_body(self, json_transport):
        """Only supplied fields are sent, and listed in ``fields``."""
        transport = json_transport({"status": 0, "matches": []})
        source = WikiTreeSource(client=transport.client())

        await source.search(WikiTreeSearchParams(first_name="John", last_name="Smith", birth_date="1850"))

        request = transport.requests[0]
        assert request.method == "POST"
        body = json.loads(request.content)
        assert body["action"] == "searchPerson"
        assert body["fields"] == "FirstName,LastName,BirthDate"
        assert body["FirstName"] == "John"
        assert body["LastName"] == "Smith"
        assert body["BirthDate"] == "1850"
        assert "DeathDate" not in body
        assert body["Limit"] == 20

    @pytest.mark.asyncio
    async def test_match_mapping(self, json_transport):
        source = WikiTreeSource(client=json_transport({"status": 0, "matches": [MATCH]}).client())

        people = await source.search(WikiTreeSearchParams(last_name="Smith"))

        assert len(people) == 1
        person = people[0]
        assert person.id == "12345"
        assert person.name == "Smith-12345"
        assert person.first_name == "John"
        assert person.last_name == "Smith"
        assert person.privacy == 60
        assert person.url == "https://www.wikitree.com/wiki/Smith-12345"
        assert person.snippet_text == "John Smith, b. 1850-03-02, d. 1920-11-30"

    @pytest.mark.asyncio
    async def test_list_wrapped_response(self, json_transport):
        """The live API wraps the response object in a list."""
        source = WikiTreeSource(client=json_transport([{"status": 0, "matches": [MATCH]}]).client())

        people = await source.search(WikiTreeSearchParams(last_name="Smith"))

        assert [p.name for p in people] == ["Smith-12345"]

    @pytest.mark.asyncio
    async def test_nonzero_status_means_no_result(self, json_transport):
        source = WikiTreeSource(client=json_transport({"status": 1, "matches": [MATCH]}).client())

        assert await source.search(WikiTreeSearchParams(last_name="Smith")) == []

    @pytest.mark.asyncio
    async def test_missing_matches(self, json_transport):
        source = WikiTreeSource(client=json_transport({"status": 0}).client())

        assert await source.search(WikiTreeSearchParams(last_name="Smith")) == []

    @pytest.mark.asyncio
    async def test_sparse_match_defaults(self, json_transport):
        source = WikiTreeSource(client=json_transport({"status": 0, "matches": [{"FirstName": None}]}).client())

        person = (await source.search(WikiTreeSearchParams(last_name="Smith")))[0]

        assert person.id == ""
        assert person.name == "Unknown"
        assert person.first_name == ""
        assert person.privacy == 0

    @pytest.mark.asyncio
    async def test_http_error(self, json_transport):
        source = WikiTreeSource(client=json_transport({}, status_code=500).client())

        with pytest.raises(ProviderError, match="WikiTree API error: 500"):
            await source.search(WikiTreeSearchParams(last_name="Smith"))


class TestGetPerson:
    @pytest.mark.asyncio
    async def test_request_and_mapping(self, json_transport):
        profile = dict(MATCH, Id=12345)
        del profile["user_id"]
        transport = json_transport({"status": 0, "person": profile})
        source = WikiTreeSource(client=transport.client())

        person = await source.get_person("Smith-12345")

        body = json.loads(transport.requests[0].content)
        assert body == {"action": "getPerson", "key": "Smith-12345", "fields": PERSON_FIELDS}
        assert person is not None
        assert person.id == "12345"
        assert person.birth_location == "Amsterdam, Netherlands"

    @pytest.mark.asyncio
    async def test_not_found(self, json_transport):
        source = WikiTreeSource(client=json_transport({"status": "Illegal WikiTree ID"}).client())

        assert await source.get_person("Nobody-1") is None

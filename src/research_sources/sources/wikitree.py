"""WikiTree API connector.

Free, community-driven genealogy wiki. No API key required but rate-limited.
API: https://github.com/wikitree/wikitree-api
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from ..models.records import WikiTreePerson
from .base import BaseSource, UpstreamModel

logger = logging.getLogger(__name__)

PROFILE_URL = "https://www.wikitree.com/wiki/{name}"

PERSON_FIELDS = "Id,Name,FirstName,LastNameAtBirth,BirthDate,DeathDate,BirthLocation,DeathLocation,Privacy"


class WikiTreeAction(str, Enum):
    """WikiTree API action types."""

    SEARCH_PERSON = "searchPerson"
    GET_PERSON = "getPerson"


class WikiTreeSearchParams(BaseModel):
    """Structured person search request."""

    first_name: str | None = None
    last_name: str | None = None
    birth_date: str | None = Field(default=None, description="YYYY")
    death_date: str | None = Field(default=None, description="YYYY")
    birth_location: str | None = None
    death_location: str | None = None
    limit: int = Field(default=20, ge=1, le=100)


class _Profile(UpstreamModel):
    user_id: int | str = ""
    Id: int | str = ""
    Name: str = "Unknown"
    FirstName: str = ""
    LastNameAtBirth: str = ""
    BirthDate: str = ""
    DeathDate: str = ""
    BirthLocation: str = ""
    DeathLocation: str = ""
    Privacy: int = 0


class _SearchResponse(UpstreamModel):
    status: int | str = -1
    matches: list[_Profile] | None = None


class _PersonResponse(UpstreamModel):
    status: int | str = -1
    person: _Profile | None = None


def _unwrap(data: Any) -> Any:
    """The live API wraps the response object in a one-element list."""
    if isinstance(data, list):
        return data[0] if data else {}
    return data


class WikiTreeSource(BaseSource):
    """WikiTree.com data source.

    A non-zero ``status`` in the JSON body means "no result", not an error;
    only HTTP failures raise.
    """

    name = "wikitree"
    display_name = "WikiTree"
    base_url = "https://api.wikitree.com/api.php"

    async def search(self, params: WikiTreeSearchParams) -> list[WikiTreePerson]:
        """Search WikiTree profiles.

        Returns:
            Matching profiles, empty when WikiTree reports no match

        Raises:
            ProviderError: On HTTP failure or an undecodable body
        """
        fields: dict[str, str] = {}
        if params.first_name:
            fields["FirstName"] = params.first_name
        if params.last_name:
            fields["LastName"] = params.last_name
        if params.birth_date:
            fields["BirthDate"] = params.birth_date
        if params.death_date:
            fields["DeathDate"] = params.death_date
        if params.birth_location:
            fields["BirthLocation"] = params.birth_location
        if params.death_location:
            fields["DeathLocation"] = params.death_location

        body: dict[str, Any] = {
            "action": WikiTreeAction.SEARCH_PERSON.value,
            "fields": ",".join(fields),
            **fields,
            "Limit": params.limit,
        }

        data = await self._request_json("POST", self.base_url, json=body)
        try:
            decoded = _SearchResponse.model_validate(_unwrap(data))
        except ValidationError as e:
            raise self._malformed(e) from e

        if str(decoded.status) != "0" or not decoded.matches:
            logger.debug("WikiTree search returned no matches (status=%s)", decoded.status)
            return []

        return [self._to_person(profile, profile.user_id) for profile in decoded.matches]

    async def get_person(self, wikitree_id: str) -> WikiTreePerson | None:
        """Get a WikiTree profile by ID (format: Surname-####).

        Returns:
            The profile, or None when WikiTree has no such person
        """
        body = {
            "action": WikiTreeAction.GET_PERSON.value,
            "key": wikitree_id,
            "fields": PERSON_FIELDS,
        }

        data = await self._request_json("POST", self.base_url, json=body)
        try:
            decoded = _PersonResponse.model_validate(_unwrap(data))
        except ValidationError as e:
            raise self._malformed(e) from e

        if str(decoded.status) != "0" or decoded.person is None:
            return None

        return self._to_person(decoded.person, decoded.person.Id)

    @staticmethod
    def _to_person(profile: _Profile, numeric_id: int | str) -> WikiTreePerson:
        return WikiTreePerson(
            id=str(numeric_id),
            name=profile.Name,
            first_name=profile.FirstName,
            last_name=profile.LastNameAtBirth,
            birth_date=profile.BirthDate,
            death_date=profile.DeathDate,
            birth_location=profile.BirthLocation,
            death_location=profile.DeathLocation,
            privacy=profile.Privacy,
            url=PROFILE_URL.format(name=profile.Name),
        )

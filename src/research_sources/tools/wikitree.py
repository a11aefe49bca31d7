"""WikiTree tools: profile search and single profile lookup."""
from __future__ import annotations

from pydantic import BaseModel, Field

from ..models.match import MATCH_SCORES, CacheSource
from ..models.records import WikiTreePerson
from ..sources.wikitree import WikiTreeSearchParams
from .base import Tool, ToolContext, to_json


class SearchWikiTreeArgs(BaseModel):
    first_name: str | None = Field(default=None, description="First/given name")
    last_name: str | None = Field(default=None, description="Last/surname")
    birth_date: str | None = Field(default=None, description="Birth year (YYYY)")
    death_date: str | None = Field(default=None, description="Death year (YYYY)")
    birth_location: str | None = Field(default=None, description="Birth location")
    death_location: str | None = Field(default=None, description="Death location")
    limit: int = Field(default=20, ge=1, le=100, description="Max results")


class GetWikiTreePersonArgs(BaseModel):
    wikitree_id: str = Field(description='WikiTree person ID (e.g., "Smith-12345")')


def _person_payload(person: WikiTreePerson) -> dict:
    return {
        "id": person.id,
        "name": person.name,
        "first_name": person.first_name,
        "last_name": person.last_name,
        "birth_date": person.birth_date,
        "death_date": person.death_date,
        "birth_location": person.birth_location,
        "death_location": person.death_location,
        "url": person.url,
        "privacy": person.privacy,
    }


async def search_wikitree(args: SearchWikiTreeArgs, ctx: ToolContext) -> str:
    people = await ctx.wikitree.search(WikiTreeSearchParams(**args.model_dump()))

    score = MATCH_SCORES[CacheSource.WIKITREE]
    for person in people:
        ctx.cache.upsert(
            None,
            CacheSource.WIKITREE.value,
            person.external_id,
            person.url,
            person.name,
            person.snippet_text,
            score,
            person.model_dump_json(),
        )

    return to_json({"count": len(people), "results": [_person_payload(p) for p in people]})


async def get_wikitree_person(args: GetWikiTreePersonArgs, ctx: ToolContext) -> str:
    person = await ctx.wikitree.get_person(args.wikitree_id)
    if person is None:
        return to_json({"error": "Person not found"})
    return to_json(_person_payload(person))


TOOLS = [
    Tool(
        name="search_wikitree",
        description="Search WikiTree collaborative genealogy tree",
        args_model=SearchWikiTreeArgs,
        handler=search_wikitree,
    ),
    Tool(
        name="get_wikitree_person",
        description="Get detailed profile for a WikiTree person",
        args_model=GetWikiTreePersonArgs,
        handler=get_wikitree_person,
    ),
]

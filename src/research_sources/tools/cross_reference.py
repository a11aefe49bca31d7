"""Cross-reference and cached-match tools."""
from __future__ import annotations

import pydantic
from pydantic import BaseModel, Field

from ..exceptions import ValidationError
from ..models.match import CacheSource
from ..models.person import YEAR_PATTERN, PersonQuery, SourceName
from .base import Tool, ToolContext, describe_validation_error, to_json


class CrossReferencePersonArgs(BaseModel):
    given_name: str = Field(description="Given/first name")
    surname: str = Field(description="Surname/last name")
    birth_year: str | None = Field(default=None, pattern=YEAR_PATTERN, description="Birth year (YYYY)")
    birth_place: str | None = Field(default=None, description="Birth place")
    death_year: str | None = Field(default=None, pattern=YEAR_PATTERN, description="Death year (YYYY)")
    death_place: str | None = Field(default=None, description="Death place")
    sources_to_search: list[SourceName] = Field(
        default_factory=lambda: [SourceName.ALL], min_length=1, description="Which sources to search"
    )
    person_id: str | None = Field(default=None, description="Local person ID to associate results with")


class GetCachedMatchesArgs(BaseModel):
    person_id: str = Field(description="Local person ID the matches were cached for")
    source_name: CacheSource | None = Field(default=None, description="Restrict to one source")


async def cross_reference_person(args: CrossReferencePersonArgs, ctx: ToolContext) -> str:
    try:
        query = PersonQuery(**args.model_dump(exclude={"sources_to_search"}))
    except pydantic.ValidationError as e:
        raise ValidationError(describe_validation_error(e)) from e

    report = await ctx.orchestrator().cross_reference(query, args.sources_to_search)
    return to_json(report.model_dump(mode="json"))


async def get_cached_matches(args: GetCachedMatchesArgs, ctx: ToolContext) -> str:
    source = args.source_name.value if args.source_name else None
    matches = ctx.cache.query(args.person_id, source)
    return to_json({
        "person_id": args.person_id,
        "count": len(matches),
        "matches": [m.model_dump(mode="json", exclude={"raw_json"}) for m in matches],
    })


TOOLS = [
    Tool(
        name="cross_reference_person",
        description=(
            "Search ALL external sources in parallel for a person (newspapers, WikiTree, Open Archives)"
        ),
        args_model=CrossReferencePersonArgs,
        handler=cross_reference_person,
    ),
    Tool(
        name="get_cached_matches",
        description="List cached external matches for a person, best match first",
        args_model=GetCachedMatchesArgs,
        handler=get_cached_matches,
    ),
]

"""Open Archives search tool."""
from __future__ import annotations

from pydantic import BaseModel, Field

from ..models.match import MATCH_SCORES, CacheSource
from ..sources.open_archives import CountryCode, OpenArchivesSearchParams, RecordKind
from .base import Tool, ToolContext, to_json


class SearchOpenArchivesArgs(BaseModel):
    name: str | None = Field(default=None, description="Person name to search")
    birth_year: str | None = Field(default=None, description="Birth year (YYYY)")
    death_year: str | None = Field(default=None, description="Death year (YYYY)")
    place: str | None = Field(default=None, description="Place name")
    source_type: RecordKind = Field(default="all", description="Type of records to search")
    country_code: CountryCode | None = Field(
        default=None, description="Country code (NL=Netherlands, BE=Belgium, FR=France)"
    )
    limit: int = Field(default=20, ge=1, le=100, description="Max results")


async def search_open_archives(args: SearchOpenArchivesArgs, ctx: ToolContext) -> str:
    records = await ctx.openarch.search(OpenArchivesSearchParams(**args.model_dump()))

    score = MATCH_SCORES[CacheSource.OPENARCH]
    for record in records:
        ctx.cache.upsert(
            None,
            CacheSource.OPENARCH.value,
            record.id,
            record.archive_url,
            record.title,
            record.detailed_snippet,
            score,
            record.model_dump_json(),
        )

    return to_json({
        "count": len(records),
        "results": [
            {
                "id": r.id,
                "title": r.title,
                "date": r.date,
                "place": r.place,
                "source_type": r.source_type,
                "person_names": r.person_names,
                "url": r.archive_url,
                "image_url": r.image_url,
            }
            for r in records
        ],
    })


TOOLS = [
    Tool(
        name="search_open_archives",
        description="Search Open Archives (Dutch, Belgian, French historical records)",
        args_model=SearchOpenArchivesArgs,
        handler=search_open_archives,
    ),
]

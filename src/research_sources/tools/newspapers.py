"""Newspaper tools: Chronicling America search and full page fetch."""
from __future__ import annotations

from pydantic import BaseModel, Field

from ..models.match import MATCH_SCORES, CacheSource
from ..sources.chronicling_america import NewspaperPageParams, NewspaperSearchParams
from .base import Tool, ToolContext, to_json

PAGE_OCR_MAX_CHARS = 5000


class SearchNewspapersArgs(BaseModel):
    query: str = Field(description="Search query (person name, event, etc.)")
    state: str | None = Field(default=None, description='US state name (e.g., "California", "Texas")')
    start_date: str | None = Field(default=None, description="Start date (YYYY-MM-DD)")
    end_date: str | None = Field(default=None, description="End date (YYYY-MM-DD)")
    page: int = Field(default=1, ge=1, description="Result page number")


class GetNewspaperPageArgs(BaseModel):
    lccn: str = Field(description="Library of Congress Control Number (LCCN)")
    date: str = Field(description="Date of publication (YYYY-MM-DD)")
    page: int = Field(ge=1, description="Page number")
    edition: int | None = Field(default=None, ge=1, description="Edition number (default 1)")


async def search_newspapers(args: SearchNewspapersArgs, ctx: ToolContext) -> str:
    result = await ctx.newspapers.search(
        NewspaperSearchParams(
            query=args.query,
            state=args.state,
            start_date=args.start_date,
            end_date=args.end_date,
            page=args.page,
        )
    )

    score = MATCH_SCORES[CacheSource.CHRONICLING_AMERICA]
    for item in result.items:
        # Open-ended search: not tied to a local person
        ctx.cache.upsert(
            None,
            CacheSource.CHRONICLING_AMERICA.value,
            item.id,
            item.url,
            item.title,
            item.snippet,
            score,
            item.model_dump_json(),
        )

    return to_json({
        "total": result.total_items,
        "count": len(result.items),
        "page": args.page,
        "items": [
            {
                "id": item.id,
                "title": item.title,
                "date": item.date,
                "page": item.page,
                "url": item.url,
                "snippet": item.snippet,
            }
            for item in result.items
        ],
    })


async def get_newspaper_page(args: GetNewspaperPageArgs, ctx: ToolContext) -> str:
    page = await ctx.newspapers.get_page(
        NewspaperPageParams(lccn=args.lccn, date=args.date, page=args.page, edition=args.edition or 1)
    )
    return to_json({
        "url": page.url,
        "image_url": page.image_url,
        "ocr_text": page.ocr_text[:PAGE_OCR_MAX_CHARS],
        "ocr_length": len(page.ocr_text),
    })


TOOLS = [
    Tool(
        name="search_newspapers",
        description="Search Chronicling America (Library of Congress) historic newspapers (1789-1963)",
        args_model=SearchNewspapersArgs,
        handler=search_newspapers,
    ),
    Tool(
        name="get_newspaper_page",
        description="Get full OCR text and image for a specific newspaper page",
        args_model=GetNewspaperPageArgs,
        handler=get_newspaper_page,
    ),
]

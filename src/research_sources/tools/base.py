"""Tool registry: named operations with pydantic argument schemas.

Every tool takes validated arguments and returns pretty-printed JSON text.
Errors never escape ``ToolRegistry.call``; they come back as an
``{"error": ...}`` payload flagged with ``is_error``.
"""
from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

import pydantic

from ..cache import MatchCache, get_match_cache
from ..config import Settings
from ..crossref import CrossReferenceOrchestrator
from ..exceptions import ProviderError, ResearchSourcesError, ValidationError
from ..logging import get_logger
from ..sources.chronicling_america import ChroniclingAmericaSource
from ..sources.open_archives import OpenArchivesSource
from ..sources.wikitree import WikiTreeSource

logger = get_logger(__name__)


def to_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


@dataclass
class ToolContext:
    """Shared adapters and cache handed to every tool handler."""

    newspapers: ChroniclingAmericaSource
    wikitree: WikiTreeSource
    openarch: OpenArchivesSource
    cache_override: MatchCache | None = None
    source_timeout: float | None = None

    @classmethod
    def from_settings(cls, settings: Settings, cache: MatchCache | None = None) -> ToolContext:
        opts = {"timeout": settings.http_timeout, "user_agent": settings.user_agent}
        return cls(
            newspapers=ChroniclingAmericaSource(**opts),
            wikitree=WikiTreeSource(**opts),
            openarch=OpenArchivesSource(**opts),
            cache_override=cache,
            source_timeout=settings.source_timeout,
        )

    @property
    def cache(self) -> MatchCache:
        if self.cache_override is None:
            return get_match_cache()
        return self.cache_override

    def orchestrator(self) -> CrossReferenceOrchestrator:
        return CrossReferenceOrchestrator(
            newspapers=self.newspapers,
            wikitree=self.wikitree,
            openarch=self.openarch,
            cache=self.cache_override,
            source_timeout=self.source_timeout,
        )

    async def close(self) -> None:
        await self.newspapers.close()
        await self.wikitree.close()
        await self.openarch.close()


Handler = Callable[[Any, ToolContext], Awaitable[str]]


@dataclass(frozen=True)
class Tool:
    name: str
    description: str
    args_model: type[pydantic.BaseModel]
    handler: Handler

    def input_schema(self) -> dict[str, Any]:
        return self.args_model.model_json_schema()


@dataclass(frozen=True)
class ToolResult:
    text: str
    is_error: bool = False


def describe_validation_error(error: pydantic.ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "arguments"
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "Invalid arguments: " + "; ".join(parts)


@dataclass
class ToolRegistry:
    tools: dict[str, Tool] = field(default_factory=dict)

    def register(self, tool: Tool) -> None:
        self.tools[tool.name] = tool

    def get(self, name: str) -> Tool | None:
        return self.tools.get(name)

    async def call(self, name: str, arguments: dict[str, Any] | None, ctx: ToolContext) -> ToolResult:
        tool = self.tools.get(name)
        try:
            if tool is None:
                raise ValidationError(f"Unknown tool: {name}")
            try:
                args = tool.args_model.model_validate(arguments or {})
            except pydantic.ValidationError as e:
                raise ValidationError(describe_validation_error(e)) from e
            return ToolResult(text=await tool.handler(args, ctx))
        except ProviderError as e:
            logger.warning("tool_provider_error", tool=name, source=e.source, status=e.status_code, error=str(e))
            return ToolResult(text=to_json({"error": str(e)}), is_error=True)
        except ResearchSourcesError as e:
            logger.warning("tool_rejected", tool=name, error=str(e))
            return ToolResult(text=to_json({"error": str(e)}), is_error=True)
        except Exception as e:
            logger.exception("tool_failed", tool=name)
            return ToolResult(text=to_json({"error": str(e) or type(e).__name__}), is_error=True)

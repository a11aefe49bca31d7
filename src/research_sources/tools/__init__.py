"""Named tools exposed over MCP and the CLI."""
from __future__ import annotations

from research_sources.tools import cross_reference, newspapers, openarch, wikitree
from research_sources.tools.base import Tool, ToolContext, ToolRegistry, ToolResult


def create_registry() -> ToolRegistry:
    registry = ToolRegistry()
    for module in (newspapers, wikitree, openarch, cross_reference):
        for tool in module.TOOLS:
            registry.register(tool)
    return registry


__all__ = ["Tool", "ToolContext", "ToolRegistry", "ToolResult", "create_registry"]

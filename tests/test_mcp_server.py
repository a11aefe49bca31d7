"""Tests for the MCP server wiring."""
from mcp.types import CallToolRequest, ListToolsRequest

from research_sources.config import Settings
from research_sources.mcp_server import SERVER_NAME, create_server
from research_sources.sources import ChroniclingAmericaSource, OpenArchivesSource, WikiTreeSource
from research_sources.tools import ToolContext


def test_create_server_registers_handlers(match_cache, tmp_path):
    ctx = ToolContext(
        newspapers=ChroniclingAmericaSource(),
        wikitree=WikiTreeSource(),
        openarch=OpenArchivesSource(),
        cache_override=match_cache,
    )

    server, returned_ctx = create_server(ctx=ctx, settings=Settings(db_path=tmp_path / "c.sqlite"))

    assert server.name == SERVER_NAME
    assert returned_ctx is ctx
    assert ListToolsRequest in server.request_handlers
    assert CallToolRequest in server.request_handlers


def test_context_from_settings_uses_configured_client_options(tmp_path):
    settings = Settings(
        db_path=tmp_path / "c.sqlite", http_timeout=7.0, source_timeout=3.0, user_agent="Tester/2.0"
    )

    ctx = ToolContext.from_settings(settings)

    assert ctx.newspapers.timeout == 7.0
    assert ctx.wikitree.user_agent == "Tester/2.0"
    assert ctx.source_timeout == 3.0
    assert ctx.cache_override is None

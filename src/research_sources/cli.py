"""CLI interface for Research Sources."""

import asyncio
import json
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .config import load_settings
from .exceptions import ResearchSourcesError
from .logging import configure_logging

app = typer.Typer(
    name="research-sources",
    help="Cross-reference genealogy records across newspapers, WikiTree and Open Archives",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


@app.command()
def serve():
    """Run the MCP server over stdio."""
    from .mcp_server import run_stdio

    asyncio.run(run_stdio(load_settings()))


@app.command("cross-reference")
def cross_reference(
    given_name: str = typer.Argument(..., help="Given/first name"),
    surname: str = typer.Argument(..., help="Surname/last name"),
    birth_year: Optional[str] = typer.Option(None, "--birth-year", help="Birth year (YYYY)"),
    birth_place: Optional[str] = typer.Option(None, "--birth-place", help="Birth place"),
    death_year: Optional[str] = typer.Option(None, "--death-year", help="Death year (YYYY)"),
    death_place: Optional[str] = typer.Option(None, "--death-place", help="Death place"),
    source: list[str] = typer.Option(
        ["all"], "--source", "-s", help="newspapers, wikitree, openarch or all (repeatable)"
    ),
    person_id: Optional[str] = typer.Option(None, "--person-id", help="Local person ID to link results to"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw report as JSON"),
):
    """Search every applicable source for a person and cache the matches."""
    import pydantic

    from .cache import close_match_cache, get_match_cache
    from .crossref import CrossReferenceOrchestrator
    from .models.person import PersonQuery
    from .tools import ToolContext

    settings = load_settings()
    configure_logging(settings.log_level)  # type: ignore[arg-type]

    try:
        query = PersonQuery(
            given_name=given_name,
            surname=surname,
            birth_year=birth_year,
            birth_place=birth_place,
            death_year=death_year,
            death_place=death_place,
            person_id=person_id,
        )
    except pydantic.ValidationError as e:
        err_console.print(f"[red]Invalid query:[/red] {e}")
        raise typer.Exit(2)

    async def run():
        ctx = ToolContext.from_settings(settings, cache=get_match_cache(settings.db_path))
        orchestrator: CrossReferenceOrchestrator = ctx.orchestrator()
        try:
            return await orchestrator.cross_reference(query, source)
        finally:
            await ctx.close()

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=err_console,
            transient=True,
        ) as progress:
            progress.add_task(f"Searching for {query.full_name}...", total=None)
            report = asyncio.run(run())
    except ResearchSourcesError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    finally:
        close_match_cache()

    if as_json:
        console.print_json(json.dumps(report.model_dump(mode="json")))
        return

    console.print(Panel(f"[bold]{query.full_name}[/bold]", title="Cross-reference"))

    table = Table(title=f"{report.total_results} results")
    table.add_column("Source", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Status")
    for name, entries in report.results.items():
        error = entries[0].get("error") if len(entries) == 1 else None
        if error:
            table.add_row(name, "0", f"[red]{error}[/red]")
        else:
            table.add_row(name, str(len(entries)), "[green]ok[/green]")
    console.print(table)


@app.command()
def matches(
    person_id: str = typer.Argument(..., help="Local person ID"),
    source_name: Optional[str] = typer.Option(
        None, "--source", "-s", help="chronicling_america, wikitree or openarch"
    ),
):
    """Show cached matches for a person."""
    from .cache import close_match_cache, get_match_cache

    settings = load_settings()
    configure_logging(settings.log_level)  # type: ignore[arg-type]
    try:
        rows = get_match_cache(settings.db_path).query(person_id, source_name)
    finally:
        close_match_cache()

    if not rows:
        console.print(f"[yellow]No cached matches for {person_id}[/yellow]")
        return

    table = Table(title=f"Cached matches for {person_id}")
    table.add_column("Score", justify="right")
    table.add_column("Source", style="cyan")
    table.add_column("Title")
    table.add_column("URL", style="dim")
    table.add_column("Searched", style="dim")
    for row in rows:
        table.add_row(
            f"{row.match_score:.1f}",
            row.source_name,
            row.title,
            row.url,
            row.searched_at.strftime("%Y-%m-%d %H:%M"),
        )
    console.print(table)


if __name__ == "__main__":
    app()

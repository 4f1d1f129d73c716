"""CLI interface for trending dashboard."""

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .config import settings
from .display import to_card
from .ingestion.fetcher import HttpRecordSource
from .models import ALL, FilterState
from .regions import REGION_LIST, region_tag
from .service import DashboardService, get_service

app = typer.Typer(help="YouTube Trending Dashboard - browse trending videos per region")
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


def build_service(source: str | None) -> DashboardService:
    """Use the shared service unless a different source URL is given."""
    if source:
        return DashboardService(HttpRecordSource(url=source))
    return get_service()


@app.command()
def videos(
    month: str = typer.Option(ALL, "--month", "-m", help="Scrape month (YYYY-MM)"),
    region: str = typer.Option(ALL, "--region", "-r", help="Region name, e.g. Japan"),
    match_type: str = typer.Option(ALL, "--match-type", "-t", help="Match type"),
    search: str = typer.Option("", "--search", "-s", help="Search title, region and channel"),
    limit: int = typer.Option(50, "--limit", "-n", min=1, help="Maximum cards shown"),
    source: Optional[str] = typer.Option(None, "--source", help="Override the source URL"),
    strict: bool = typer.Option(False, "--strict", help="Exit non-zero when the source fails"),
):
    """Show trending videos, newest first."""
    service = build_service(source)
    filters = FilterState(month=month, region=region, match_type=match_type, search_term=search)

    with console.status("Fetching trending data..."):
        view = service.view(filters)

    if view.error:
        console.print(f"[red]Source error: {view.error}[/red]")
        if strict:
            raise typer.Exit(1)

    console.print(f"\n[bold]{escape(view.heading)}[/bold]")

    if view.message:
        console.print(f"[yellow]{view.message}[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"{len(view.videos)} of {view.total_records} videos")
    table.add_column("Rank", style="cyan", justify="right")
    table.add_column("Title", style="green")
    table.add_column("Region")
    table.add_column("Type", style="magenta")
    table.add_column("Published", style="yellow")
    table.add_column("Channel", style="blue")

    for record in view.videos[:limit]:
        card = to_card(record)
        rank = f"#{record.video_rank}" if record.video_rank else "-"
        table.add_row(
            rank,
            escape(record.video_title[:60]),
            f"[bold {card.region_tag}]{escape(card.region_code)}[/bold {card.region_tag}]",
            escape(record.matched_type),
            card.published_display,
            escape(record.channel_id[:24]),
        )

    console.print(table)
    if len(view.videos) > limit:
        console.print(f"[dim]{len(view.videos) - limit} more not shown. Use --limit to see more.[/dim]")


@app.command()
def filters(
    source: Optional[str] = typer.Option(None, "--source", help="Override the source URL"),
):
    """Show selectable filter values."""
    service = build_service(source)

    with console.status("Fetching trending data..."):
        options = service.filter_options()

    console.print(f"\n[bold]Filter Options[/bold] [dim](regions from {service.region_policy})[/dim]")
    console.print("[bold cyan]Months:[/bold cyan] " + (escape(", ".join(options.months)) or "none"))
    console.print("[bold cyan]Regions:[/bold cyan] " + (escape(", ".join(options.regions)) or "none"))
    types = [t or "(no type)" for t in options.match_types]
    console.print("[bold cyan]Match types:[/bold cyan] " + (escape(", ".join(types)) or "none"))


@app.command()
def regions():
    """Show the region reference table."""
    table = Table(title="Regions")
    table.add_column("Code", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Tag")

    for code, name in REGION_LIST:
        tag = region_tag(code)
        table.add_row(code, name, f"[{tag}]{tag}[/{tag}]")

    console.print(table)


@app.command()
def config():
    """Show current configuration."""
    console.print(f"\n[bold]Current Configuration[/bold]")
    console.print(f"Source URL: {settings.source_url}")
    console.print(f"Request Timeout: {settings.request_timeout}s")
    console.print(f"Fetch Attempts: {settings.fetch_attempts} (backoff {settings.fetch_backoff}s)")
    console.print(f"Cache TTL: {settings.cache_ttl_seconds}s")
    console.print(f"Region Options: {settings.region_options}")
    console.print(f"Log Level: {settings.log_level}")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", "-h", help="Host to bind"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind"),
):
    """Start the API server."""
    import uvicorn

    console.print(f"Starting server at http://{host}:{port}")
    uvicorn.run("trending_dashboard.api.routes:app", host=host, port=port, reload=True)


if __name__ == "__main__":
    app()

"""Scrape commands: refresh the exported JSON data."""

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cli.config import DATA_DIR
from core.runner import SOURCES

app = typer.Typer(help="Scrape Wikisocion and export JSON data")
console = Console()


@app.callback(invoke_without_command=True)
def scrape(
    ctx: typer.Context,
    source: str = typer.Option(
        None,
        "--source",
        "-s",
        help="Type page source: auto, mediawiki or github (default: WIKISOCION_SOURCE or auto)",
    ),
    out: Path = typer.Option(
        DATA_DIR,
        "--out",
        "-o",
        help="Output directory for JSON files",
    ),
):
    """Scrape the 16 type pages and write types/relations/glossary/search/meta JSON.

    Examples:
        socio scrape                      # MediaWiki first, GitHub mirror as fallback
        socio scrape --source github      # GitHub mirror only
        socio scrape --out public/data    # Custom output directory
    """
    if ctx.invoked_subcommand is not None:
        return

    if source is not None and source not in SOURCES:
        console.print(f"[red]Error:[/] Unknown source: {source}")
        console.print(f"[dim]Valid sources: {', '.join(SOURCES)}[/]")
        raise typer.Exit(1)

    from core.runner import run as run_scrape

    console.print(
        Panel(
            f"[bold]Wikisocion scrape[/]\n\n"
            f"Source: [cyan]{source or 'default'}[/]\n"
            f"Output: {out}",
            title="Wikisocion",
        )
    )

    try:
        result = run_scrape(source=source, out_dir=out)
    except Exception as e:
        console.print(f"[red]Scrape failed:[/] {e}")
        raise typer.Exit(1)

    table = Table(title="Results")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Source", result["source"])
    table.add_row("Types", str(result["types"]))
    table.add_row("Glossary Terms", str(result["glossary"]))
    table.add_row("Dual Pairs", str(result["relations"]))
    table.add_row("Search Entries", str(result["search_entries"]))
    table.add_row("Time", f"{result['elapsed_seconds']:.1f}s")

    console.print(table)
    console.print(f"\n[green]✓[/] Wrote {len(result['files'])} files to {result['out_dir']}")


@app.command("pages")
def list_pages(
    category: str = typer.Option(
        None,
        "--category",
        "-c",
        help="MediaWiki category (default: WIKISOCION_TYPES_CATEGORY)",
    ),
):
    """List type pages in the MediaWiki category and flag missing canonical titles."""
    from core.catalog import TYPE_PAGES
    from core.steps.fetch import list_category_members, make_client

    async def _list() -> list[str]:
        async with make_client() as client:
            return await list_category_members(client, category)

    try:
        titles = asyncio.run(_list())
    except Exception as e:
        console.print(f"[red]Failed to list category:[/] {e}")
        raise typer.Exit(1)

    for title in titles:
        console.print(f"  {title}")

    missing = sorted(set(TYPE_PAGES.values()) - set(titles))
    console.print(f"\n[bold]{len(titles)}[/] pages in category")
    if missing:
        console.print(f"[yellow]Canonical titles not in category:[/] {', '.join(missing)}")

"""Main CLI entry point for Wikisocion."""

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from cli import __version__
from cli.commands import relation, scrape, serve
from cli.config import DATA_DIR
from cli.utils import (
    data_file_status,
    format_timestamp,
    load_dataset,
    load_meta,
    types_table,
)
from core.dataset import UnknownTypeError, validate_dataset
from core.models import InformationElement, Quadra, Temperament
from core.relations import pair_traits
from core.search import ALL, filter_types

app = typer.Typer(
    name="socio",
    help="Wikisocion - socionics reference data CLI",
    no_args_is_help=True,
)
console = Console()

# Add subcommand groups
app.add_typer(scrape.app, name="scrape", help="Scrape Wikisocion and export JSON data")
app.add_typer(relation.app, name="relation", help="Classify intertype relations")
app.add_typer(serve.app, name="serve", help="Start API server")


def _check_choice(name: str, value: str, choices: list[str]) -> None:
    if value != ALL and value not in choices:
        console.print(f"[red]Error:[/] Invalid {name}: {value}")
        console.print(f"[dim]Valid values: {ALL}, {', '.join(choices)}[/]")
        raise typer.Exit(1)


@app.command()
def version():
    """Show version information."""
    console.print(f"[bold]Wikisocion CLI[/] v{__version__}")


@app.command()
def status():
    """Show exported data files and generation metadata."""
    table = Table(title="Data Files", show_header=True)
    table.add_column("File", style="cyan")
    table.add_column("Size", style="white", justify="right")
    table.add_column("Modified", style="green")
    table.add_column("Status", style="yellow")

    for info in data_file_status():
        if info["exists"]:
            table.add_row(info["name"], f"{info['size']:,} B", info["modified"], "✓ Present")
        else:
            table.add_row(info["name"], "-", "-", "○ Missing")

    console.print(table)

    meta = load_meta()
    if meta:
        console.print(f"\n[dim]Data directory: {DATA_DIR}[/]")
        console.print(f"  Generated: {format_timestamp(meta.get('generatedAt'))}")
        for name, src in sorted(meta.get("sources", {}).items()):
            console.print(f"  {name}: {src}")


def _live_dataset():
    from core import runner

    try:
        return asyncio.run(runner.fetch_live_dataset())
    except Exception as e:
        console.print(f"[red]Live fetch failed:[/] {e}")
        raise typer.Exit(1)


@app.command("types")
def list_types(
    quadra: str = typer.Option(ALL, "--quadra", "-q", help="Alpha, Beta, Gamma or Delta"),
    temperament: str = typer.Option(ALL, "--temperament", "-t", help="EP, EJ, IP or IJ"),
    leading: str = typer.Option(ALL, "--leading", "-l", help="Leading element (e.g., Ti)"),
    live: bool = typer.Option(
        False, "--live", help="Fetch overviews straight from the MediaWiki API"
    ),
):
    """List types, optionally filtered.

    Examples:
        socio types                     # All 16 types
        socio types --quadra Alpha      # Alpha quadra only
        socio types -t IJ -l Ti         # IJ temperament with Ti leading
        socio types --live              # Fresh data, nothing written
    """
    _check_choice("quadra", quadra, [q.value for q in Quadra])
    _check_choice("temperament", temperament, [t.value for t in Temperament])
    _check_choice("leading element", leading, [e.value for e in InformationElement])

    dataset = _live_dataset() if live else load_dataset()
    filtered = filter_types(dataset.type_list, quadra, temperament, leading)
    console.print(types_table(filtered, title=f"Types ({len(filtered)})"))


@app.command("type")
def show_type(
    code: str = typer.Argument(..., help="Type code (e.g., LII)"),
):
    """Show a type with its dual and related types."""
    dataset = load_dataset()
    try:
        t = dataset.get(code)
    except UnknownTypeError as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1)

    console.print(f"[bold cyan]{t.code}[/] [bold]{t.full_name}[/] ({t.alias})")
    console.print(
        f"  Quadra: {t.quadra.value} · Temperament: {t.temperament.value} · "
        f"Leading: {t.leading.value} · Creative: {t.creative.value}"
    )
    if t.overview:
        console.print(f"\n{t.overview}")
    if t.href:
        console.print(f"\n[dim]{t.href}[/]")

    related = dataset.related(t.code)
    dual = related["dual"]
    if dual:
        console.print(f"\n[green]Dual:[/] {dual.code} {dual.full_name} ({dual.alias})")
        for trait in pair_traits(t, dual):
            console.print(f"  [dim]{trait}[/]")

    for key, title in [
        ("same_quadra", "Same quadra"),
        ("same_temperament", "Same temperament"),
        ("same_leading", "Same leading element"),
    ]:
        codes = ", ".join(r.code for r in related[key]) or "-"
        console.print(f"[cyan]{title}:[/] {codes}")


@app.command()
def glossary():
    """List information element definitions."""
    dataset = load_dataset()
    table = Table(title="Glossary", show_header=True)
    table.add_column("Term", style="cyan", width=6)
    table.add_column("Definition", style="white")

    for g in dataset.glossary:
        table.add_row(g.term, g.short_def)

    console.print(table)


@app.command()
def search(
    query: str = typer.Argument(..., help='Search text (e.g., "LII", "Fe", "logic")'),
    limit: int = typer.Option(10, "--limit", "-n", help="Max results"),
):
    """Search types and glossary terms."""
    dataset = load_dataset()
    results = dataset.search(query, limit=limit)

    if not results:
        console.print(f"[yellow]No results for {query!r}[/]")
        return

    for r in results:
        if r["kind"] == "type":
            console.print(f"  [cyan]{r['code']}[/] {r['fullName']} [dim]({r['alias']})[/]")
        else:
            console.print(f"  [magenta]Glossary[/] [bold]{r['term']}[/] [dim]{r['shortDef']}[/]")


@app.command()
def check():
    """Run dataset integrity checks."""
    dataset = load_dataset()
    problems = validate_dataset(dataset)

    if problems:
        for problem in problems:
            console.print(f"[red]✗[/] {problem}")
        raise typer.Exit(1)

    console.print(
        f"[green]✓[/] {len(dataset.type_list)} types, {len(dataset.duals)} dual pairs, "
        f"{len(dataset.glossary)} glossary terms: all checks passed"
    )


@app.callback()
def main():
    """Wikisocion CLI - socionics reference data."""
    pass


if __name__ == "__main__":
    app()

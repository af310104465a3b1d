"""Intertype relation commands."""

import typer
from rich.console import Console
from rich.table import Table

from cli.utils import label_style, load_dataset
from core.dataset import UnknownTypeError
from core.models import RelationLabel
from core.relations import RELATION_COLORS, pair_traits

app = typer.Typer(help="Classify intertype relations")
console = Console()

# One-letter abbreviations for the matrix view
LABEL_ABBREVIATIONS = {
    RelationLabel.IDENTITY: "=",
    RelationLabel.DUALITY: "D",
    RelationLabel.ACTIVATION: "A",
    RelationLabel.MIRROR: "M",
    RelationLabel.SEMI_DUALITY: "S",
    RelationLabel.EXTINGUISHMENT: "X",
    RelationLabel.CONFLICT: "C",
    RelationLabel.BUSINESS: "B",
    RelationLabel.SUPER_EGO: "E",
    RelationLabel.OTHER: "?",
}


@app.command("classify")
def classify_pair(
    a: str = typer.Argument(..., help="First type code (e.g., LII)"),
    b: str = typer.Argument(..., help="Second type code (e.g., ESE)"),
):
    """Classify the relation between two types.

    Examples:
        socio relation classify LII ESE    # Duality
        socio relation classify ILE LII    # Activation
    """
    dataset = load_dataset()
    try:
        type_a = dataset.get(a)
        type_b = dataset.get(b)
    except UnknownTypeError as e:
        console.print(f"[red]Error:[/] {e}")
        console.print(f"[dim]Valid codes: {', '.join(dataset.types)}[/]")
        raise typer.Exit(1)

    result = dataset.classify(type_a.code, type_b.code)
    console.print(
        f"[bold]{type_a.code} ↔ {type_b.code}[/]: "
        f"[{label_style(result.label)}]{result.label.value}[/]"
    )
    for trait in pair_traits(type_a, type_b):
        console.print(f"  [dim]{trait}[/]")

    relation = dataset.relation_for(type_a.code, type_b.code)
    if relation and relation.summary:
        console.print(f"\n{relation.summary}")


@app.command("matrix")
def show_matrix():
    """Show the relation label for every pair of types."""
    dataset = load_dataset()
    matrix = dataset.matrix()
    codes = list(matrix)

    table = Table(title="Intertype Relations", show_header=True)
    table.add_column("", style="cyan")
    for code in codes:
        table.add_column(code, justify="center")

    for a in codes:
        cells = []
        for b in codes:
            label = matrix[a][b]
            abbr = LABEL_ABBREVIATIONS[label]
            cells.append(f"[{label_style(label)}]{abbr}[/]")
        table.add_row(a, *cells)

    console.print(table)
    legend = ", ".join(f"{abbr} {label.value}" for label, abbr in LABEL_ABBREVIATIONS.items())
    console.print(f"[dim]{legend}[/]")


@app.command("colors")
def show_colors():
    """List relation labels with their display colours."""
    table = Table(title="Relation Colours")
    table.add_column("Relation", style="white")
    table.add_column("Colour")

    for label, color in RELATION_COLORS.items():
        table.add_row(label.value, f"[{color}]{color}[/]")

    console.print(table)

"""CLI utility functions."""

import json
from datetime import datetime
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from cli.config import DATA_DIR
from core.dataset import (
    GLOSSARY_FILE,
    META_FILE,
    RELATIONS_FILE,
    SEARCH_FILE,
    TYPES_FILE,
    Dataset,
    DatasetError,
    canonical_dataset,
    load_local,
)
from core.models import TypeRecord
from core.relations import RELATION_COLORS

console = Console()

DATA_FILES = [TYPES_FILE, RELATIONS_FILE, GLOSSARY_FILE, SEARCH_FILE, META_FILE]


def has_local_data(data_dir: Path | None = None) -> bool:
    data_dir = data_dir or DATA_DIR
    return (data_dir / TYPES_FILE).exists()


def load_dataset(data_dir: Path | None = None) -> Dataset:
    """Load exported data, or the built-in tables when nothing was scraped yet."""
    data_dir = data_dir or DATA_DIR
    if has_local_data(data_dir):
        try:
            return load_local(data_dir)
        except DatasetError as e:
            console.print(f"[red]Data load failed:[/] {e}")
            raise typer.Exit(1)
    console.print(
        f"[dim]No data in {data_dir}; using built-in tables (run 'socio scrape')[/]"
    )
    return canonical_dataset()


def load_meta(data_dir: Path | None = None) -> dict:
    """Load meta.json, or return empty dict if not exists."""
    data_dir = data_dir or DATA_DIR
    path = data_dir / META_FILE
    if path.exists():
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            return {}
    return {}


def data_file_status(data_dir: Path | None = None) -> list[dict]:
    """Presence, size and modification time of each exported file."""
    data_dir = data_dir or DATA_DIR
    status = []
    for name in DATA_FILES:
        path = data_dir / name
        if path.exists():
            stat = path.stat()
            status.append(
                {
                    "name": name,
                    "exists": True,
                    "size": stat.st_size,
                    "modified": datetime.fromtimestamp(stat.st_mtime).strftime(
                        "%Y-%m-%d %H:%M:%S"
                    ),
                }
            )
        else:
            status.append({"name": name, "exists": False, "size": 0, "modified": None})
    return status


def format_timestamp(ts: str | None) -> str:
    """Format an ISO timestamp for display."""
    if not ts:
        return "-"
    try:
        dt = datetime.fromisoformat(ts.replace("Z", "+00:00"))
        return dt.strftime("%Y-%m-%d %H:%M:%S")
    except ValueError:
        return ts


def types_table(types: list[TypeRecord], title: str = "Types") -> Table:
    table = Table(title=title, show_header=True)
    table.add_column("Code", style="cyan", width=5)
    table.add_column("Name", style="white")
    table.add_column("Alias", style="dim", width=6)
    table.add_column("Quadra", style="green")
    table.add_column("Temp.", style="yellow", width=5)
    table.add_column("Elements", style="magenta")

    for t in types:
        table.add_row(
            t.code,
            t.full_name,
            t.alias,
            t.quadra.value,
            t.temperament.value,
            f"{t.leading.value}/{t.creative.value}",
        )
    return table


def label_style(label) -> str:
    return RELATION_COLORS.get(label, "white")

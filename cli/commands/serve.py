"""API server command."""

import os
import subprocess
import sys
from pathlib import Path

import typer
from rich.console import Console

from cli.config import API_HOST, API_PORT, DATA_DIR, PROJECT_ROOT

app = typer.Typer(help="Start API server")
console = Console()


@app.callback(invoke_without_command=True)
def serve(
    ctx: typer.Context,
    host: str = typer.Option(API_HOST, "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(API_PORT, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(
        False, "--reload", "-r", help="Restart on source changes (development)"
    ),
    data_dir: Path = typer.Option(
        DATA_DIR, "--data-dir", "-d", help="Directory with exported JSON files"
    ),
):
    """Run the Wikisocion API under uvicorn.

    Serves types, glossary, search and relation classification, and can
    trigger a background scrape. Without exported files in the data
    directory the built-in tables are served.

    Examples:
        socio serve                      # localhost:8000
        socio serve --port 3001          # Custom port
        socio serve -d public/data -r    # Other data directory, auto-reload
    """
    if ctx.invoked_subcommand is not None:
        return

    base = f"http://{host}:{port}"
    console.print(f"[bold]Wikisocion API[/] on {base}")
    console.print(f"[dim]Data: {data_dir}[/]")
    if reload:
        console.print("[yellow]Auto-reload on[/]")
    console.print(f"  Docs:      {base}/docs")
    console.print(f"  Types:     {base}/data/types")
    console.print(f"  Relations: {base}/relations/matrix")
    console.print("[dim]Ctrl+C to stop[/]\n")

    cmd = [sys.executable, "-m", "uvicorn", "server.main:app", "--host", host, "--port", str(port)]
    if reload:
        cmd.append("--reload")

    env = {**os.environ, "WIKISOCION_DATA_DIR": str(data_dir)}
    try:
        completed = subprocess.run(cmd, cwd=PROJECT_ROOT, env=env)
    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped[/]")
        return

    if completed.returncode != 0:
        console.print(f"[red]Server exited with code {completed.returncode}[/]")
        raise typer.Exit(completed.returncode)

"""Scrape control endpoints."""

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, BackgroundTasks, HTTPException
from pydantic import BaseModel

from core.runner import SOURCES
from server.routers import data

router = APIRouter()

# Scrape state
_running_scrape: dict[str, Any] | None = None


class ScrapeRunRequest(BaseModel):
    """Request to refresh the exported data."""

    source: str | None = None  # auto, mediawiki or github


def run_scrape_task(source: str | None):
    """Background task to run the scrape pipeline."""
    global _running_scrape

    if not _running_scrape or _running_scrape.get("status") != "running":
        _running_scrape = {
            "started_at": datetime.now(timezone.utc).isoformat(),
            "source": source,
            "status": "running",
        }

    try:
        from core.runner import run

        result = run(source=source, out_dir=data.DATA_DIR)

        _running_scrape["status"] = "completed"
        _running_scrape["completed_at"] = datetime.now(timezone.utc).isoformat()
        _running_scrape["result"] = result

    except Exception as e:
        _running_scrape["status"] = "error"
        _running_scrape["error"] = str(e)
        _running_scrape["completed_at"] = datetime.now(timezone.utc).isoformat()


@router.post("/run")
async def run_scrape(
    request: ScrapeRunRequest,
    background_tasks: BackgroundTasks,
) -> dict[str, Any]:
    """
    Trigger a scrape in the background.

    The scrape fetches the 16 type pages (MediaWiki API, or the GitHub
    mirror as fallback) and rewrites the JSON files in the data directory.
    """
    global _running_scrape

    if _running_scrape and _running_scrape.get("status") == "running":
        raise HTTPException(
            status_code=409,
            detail="Scrape is already running",
        )

    if request.source is not None and request.source not in SOURCES:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid source: {request.source}",
        )

    # Marked before queueing so a second request is rejected
    _running_scrape = {
        "started_at": datetime.now(timezone.utc).isoformat(),
        "source": request.source,
        "status": "running",
    }
    background_tasks.add_task(run_scrape_task, request.source)

    return {
        "status": "started",
        "source": request.source,
        "started_at": _running_scrape["started_at"],
    }


@router.get("/running")
async def get_running() -> dict[str, Any]:
    """Get info about the current or last scrape."""
    if not _running_scrape:
        return {"running": False}

    return {
        **_running_scrape,
        "running": _running_scrape.get("status") == "running",
    }

"""
Scrape pipeline runner.

Sequential pipeline that:
- Fetches the 16 type pages (MediaWiki API, GitHub mirror as fallback)
- Combines overviews with the hardcoded type, glossary and duality tables
- Runs integrity checks
- Writes types/relations/glossary/search/meta JSON files

Usage:
    from core.runner import run
    run()                    # auto source, writes to data/
    run(source="github")     # GitHub mirror only
"""

import asyncio
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import httpx
from loguru import logger

from core.catalog import TYPE_CODES, TYPE_PAGES
from core.dataset import DATA_DIR, Dataset, ensure_valid
from core.models import TypeRecord
from core.steps import fetch
from core.steps.export import build_dataset, write_dataset
from core.steps.parse import type_from_github, type_from_mediawiki

# =============================================================================
# CONFIGURATION
# =============================================================================

SOURCES = ("auto", "mediawiki", "github")
MEDIAWIKI_DELAY = 0.12  # pause between Action API requests


# =============================================================================
# TYPE SCRAPERS
# =============================================================================


async def scrape_types_mediawiki(client: httpx.AsyncClient) -> list[TypeRecord]:
    types = []
    for code in TYPE_CODES:
        parsed = await fetch.parse_page(client, TYPE_PAGES[code])
        types.append(type_from_mediawiki(code, parsed, fetch.MW_PAGE_BASE))
        logger.debug(f"Scraped {code} via MediaWiki")
        await asyncio.sleep(MEDIAWIKI_DELAY)
    return types


async def scrape_types_github(client: httpx.AsyncClient) -> list[TypeRecord]:
    types = []
    for code in TYPE_CODES:
        url, html = await fetch.fetch_page_html(client, code)
        types.append(type_from_github(code, html, url))
        logger.debug(f"Scraped {code} via GitHub mirror")
    return types


async def scrape_types(
    client: httpx.AsyncClient,
    source: str = "auto",
) -> tuple[list[TypeRecord], str]:
    """
    Scrape all type pages from the requested source.

    Returns:
        (types, source actually used)
    """
    if source not in SOURCES:
        raise ValueError(f"Unknown source: {source}. Valid sources: {', '.join(SOURCES)}")

    if source == "github":
        return await scrape_types_github(client), "github"

    try:
        return await scrape_types_mediawiki(client), "mediawiki"
    except (httpx.HTTPError, fetch.MediaWikiError, ValueError) as e:
        if source == "auto":
            logger.warning(f"Auto mode: MediaWiki unavailable ({e}). Using GitHub pages.")
        else:
            logger.warning(f"MediaWiki scrape failed ({e}); falling back to GitHub content.")
        return await scrape_types_github(client), "github"


# =============================================================================
# MAIN RUNNER
# =============================================================================


async def run_async(
    source: str | None = None,
    out_dir: Path | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    """
    Run the scrape pipeline asynchronously.

    Args:
        source: "auto", "mediawiki" or "github" (default from WIKISOCION_SOURCE)
        out_dir: Output directory (default: data/)
        transport: Optional httpx transport (used by tests)

    Returns:
        Dict with run statistics
    """
    source = source or fetch.DEFAULT_SOURCE
    out_dir = out_dir or DATA_DIR
    start = time.monotonic()
    generated_at = datetime.now(timezone.utc).isoformat()

    logger.info(f"Starting scrape (source: {source})")
    async with fetch.make_client(transport) as client:
        types, used_source = await scrape_types(client, source)
    logger.info(f"Scraped {len(types)} types from {used_source}")

    dataset = ensure_valid(build_dataset(types, used_source, fetch.MW_API, generated_at))
    written = write_dataset(dataset, out_dir)

    elapsed = time.monotonic() - start
    logger.info(f"Done! Output: {out_dir} ({elapsed:.1f}s)")
    return {
        "source": used_source,
        "types": len(dataset.type_list),
        "glossary": len(dataset.glossary),
        "relations": len(dataset.relations),
        "search_entries": len(dataset.search_entries),
        "files": [str(p) for p in written],
        "out_dir": str(out_dir),
        "generated_at": generated_at,
        "elapsed_seconds": elapsed,
    }


def run(source: str | None = None, out_dir: Path | None = None) -> dict[str, Any]:
    """Synchronous wrapper for run_async."""
    return asyncio.run(run_async(source=source, out_dir=out_dir))


async def fetch_live_dataset(
    transport: httpx.AsyncBaseTransport | None = None,
) -> Dataset:
    """Fetch a fresh dataset straight from the MediaWiki API without writing files."""
    generated_at = datetime.now(timezone.utc).isoformat()
    async with fetch.make_client(transport) as client:
        types = await scrape_types_mediawiki(client)
    return build_dataset(types, "mediawiki", fetch.MW_API, generated_at, mode="live")

"""
Fetch type pages from Wikisocion.

Two sources are supported:
- MediaWiki Action API (wikisocion.net): parse output for each type page
- GitHub mirror (wikisocion.github.io): static HTML per type code

Every request goes through fetch_with_retry: independent timeout per
attempt, a fixed number of retries with linear backoff, then the last
httpx error is re-raised.
"""

import asyncio
import os
from typing import Any

import httpx
from dotenv import load_dotenv
from loguru import logger

from core.catalog import GITHUB_CONTENT_BASE

load_dotenv()

# =============================================================================
# CONFIGURATION
# =============================================================================

MW_API = os.getenv("WIKISOCION_API", "https://wikisocion.net/w/api.php")
MW_PAGE_BASE = os.getenv(
    "WIKISOCION_PAGE_BASE", "https://wikisocion.net/en/index.php?title="
)
TYPES_CATEGORY = os.getenv("WIKISOCION_TYPES_CATEGORY", "Socionics types")
DEFAULT_SOURCE = os.getenv("WIKISOCION_SOURCE", "auto")

USER_AGENT = "wikisocion-mvp-scraper/1.1"
REQUEST_TIMEOUT = 8.0
MAX_RETRIES = 2  # retries after the first attempt
BACKOFF_SECONDS = 0.4  # multiplied by the attempt number


class MediaWikiError(Exception):
    """The Action API answered with an error payload."""


# =============================================================================
# HTTP HELPERS
# =============================================================================


def make_client(transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers={"User-Agent": USER_AGENT},
        timeout=REQUEST_TIMEOUT,
        follow_redirects=True,
        transport=transport,
    )


async def fetch_with_retry(
    client: httpx.AsyncClient,
    url: str,
    params: dict[str, Any] | None = None,
) -> httpx.Response:
    """GET with retry logic; raises the last error once retries are exhausted."""
    attempts = MAX_RETRIES + 1
    for attempt in range(1, attempts + 1):
        try:
            resp = await client.get(url, params=params)
            resp.raise_for_status()
            return resp
        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            if attempt == attempts:
                logger.error(f"Failed to fetch {url}: {e}")
                raise
            logger.warning(f"Retry {attempt}/{MAX_RETRIES} for {url}: {e}")
            await asyncio.sleep(BACKOFF_SECONDS * attempt)
    raise RuntimeError("unreachable")


# =============================================================================
# MEDIAWIKI ACTION API
# =============================================================================


async def mw_get(
    client: httpx.AsyncClient,
    params: dict[str, Any],
    api: str | None = None,
) -> dict[str, Any]:
    """Call the Action API and return the decoded JSON payload."""
    query = {"format": "json", "origin": "*", **params}
    resp = await fetch_with_retry(client, api or MW_API, params=query)
    data = resp.json()
    if isinstance(data, dict) and data.get("error"):
        error = data["error"]
        raise MediaWikiError(
            f"MediaWiki API error: {error.get('info') or error.get('code')}"
        )
    return data


async def list_category_members(
    client: httpx.AsyncClient,
    category: str | None = None,
    api: str | None = None,
) -> list[str]:
    """List page titles in a category, following continuation tokens."""
    cmtitle = f"Category:{category or TYPES_CATEGORY}"
    titles: list[str] = []
    cmcontinue = None
    while True:
        params = {
            "action": "query",
            "list": "categorymembers",
            "cmtitle": cmtitle,
            "cmlimit": "max",
            "cmtype": "page",
        }
        if cmcontinue:
            params["cmcontinue"] = cmcontinue
        data = await mw_get(client, params, api=api)
        members = data.get("query", {}).get("categorymembers", [])
        titles.extend(m["title"] for m in members)
        cmcontinue = data.get("continue", {}).get("cmcontinue")
        if not cmcontinue:
            break
    logger.debug(f"{cmtitle}: {len(titles)} pages")
    return titles


async def parse_page(
    client: httpx.AsyncClient,
    title: str,
    api: str | None = None,
) -> dict[str, Any] | None:
    """Fetch rendered HTML, revision id and display title of a page."""
    data = await mw_get(
        client,
        {
            "action": "parse",
            "page": title,
            "prop": "text|sections|revid|displaytitle",
            "formatversion": "2",
            "redirects": "true",
            "disableeditsection": "true",
        },
        api=api,
    )
    return data.get("parse")


# =============================================================================
# GITHUB MIRROR
# =============================================================================


def github_url(code: str, base: str | None = None) -> str:
    return f"{base or GITHUB_CONTENT_BASE}/{code}.html"


async def fetch_page_html(
    client: httpx.AsyncClient,
    code: str,
    base: str | None = None,
) -> tuple[str, str]:
    """Fetch a type page from the GitHub mirror; returns (url, html)."""
    url = github_url(code, base)
    resp = await fetch_with_retry(client, url)
    return url, resp.text

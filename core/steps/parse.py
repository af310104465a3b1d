"""HTML extraction for type pages (BeautifulSoup)."""

import re
from typing import Any
from urllib.parse import quote

from bs4 import BeautifulSoup

from core.catalog import TYPE_PAGES, type_record

# =============================================================================
# CONFIGURATION
# =============================================================================

LEAD_MIN_LENGTH = 60
MEDIAWIKI_OVERVIEW_CHARS = 500
GITHUB_OVERVIEW_CHARS = 280
DEFAULT_OVERVIEW = "Socionics type description."


# =============================================================================
# TEXT EXTRACTION
# =============================================================================


def clean_text(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def paragraph_texts(html: str) -> list[str]:
    soup = BeautifulSoup(html, "html.parser")
    return [clean_text(p.get_text()) for p in soup.find_all("p")]


def extract_lead_paragraph(html: str, min_length: int = LEAD_MIN_LENGTH) -> str | None:
    """
    First substantial paragraph of a rendered page.

    Skips short paragraphs (infobox captions, coordinates) and falls back to
    the first non-empty one when nothing reaches min_length.
    """
    texts = paragraph_texts(html)
    for text in texts:
        if len(text) >= min_length:
            return text
    for text in texts:
        if text:
            return text
    return None


def first_paragraph(html: str) -> str | None:
    soup = BeautifulSoup(html, "html.parser")
    p = soup.find("p")
    if p is None:
        return None
    return clean_text(p.get_text()) or None


def strip_tags(html: str) -> str:
    return clean_text(BeautifulSoup(html, "html.parser").get_text())


# =============================================================================
# TYPE RECORDS
# =============================================================================


def type_from_mediawiki(code: str, parsed: dict[str, Any] | None, page_base: str):
    """Build a TypeRecord from an Action API parse result."""
    page_title = TYPE_PAGES.get(code, code)
    if not parsed or not parsed.get("text"):
        raise ValueError(f"No parse for {page_title}")

    overview = extract_lead_paragraph(parsed["text"]) or DEFAULT_OVERVIEW
    display_title = parsed.get("displaytitle")
    return type_record(
        code,
        href=page_base + quote(page_title, safe="!*'()"),
        overview=overview[:MEDIAWIKI_OVERVIEW_CHARS],
        rev_id=parsed.get("revid"),
        title=strip_tags(display_title) if display_title else page_title,
    )


def type_from_github(code: str, html: str, url: str):
    """Build a TypeRecord from a GitHub mirror page."""
    overview = first_paragraph(html) or DEFAULT_OVERVIEW
    return type_record(code, href=url, overview=overview[:GITHUB_OVERVIEW_CHARS])

"""Scrape pipeline steps as reusable functions."""

from core.steps.export import build_dataset, dataset_files, save_json, write_dataset
from core.steps.fetch import (
    MediaWikiError,
    fetch_page_html,
    fetch_with_retry,
    list_category_members,
    make_client,
    mw_get,
    parse_page,
)
from core.steps.parse import (
    extract_lead_paragraph,
    first_paragraph,
    type_from_github,
    type_from_mediawiki,
)

__all__ = [
    # Fetch
    "MediaWikiError",
    "fetch_page_html",
    "fetch_with_retry",
    "list_category_members",
    "make_client",
    "mw_get",
    "parse_page",
    # Parse
    "extract_lead_paragraph",
    "first_paragraph",
    "type_from_github",
    "type_from_mediawiki",
    # Export
    "build_dataset",
    "dataset_files",
    "save_json",
    "write_dataset",
]

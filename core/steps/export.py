"""
Export scraped data as static JSON files.

Output:
    To: data/ (or a directory given by the caller)
    Files:
        - types.json: 16 type records
        - relations.json: 8 dual pairs with summary text
        - glossary.json: 8 information element definitions
        - search.json: {"entries": [...]} precomputed search index
        - meta.json: generation time and source description
"""

import json
from pathlib import Path
from typing import Any

from loguru import logger

from core.catalog import GITHUB_CONTENT_BASE, build_glossary, build_relations
from core.dataset import (
    GLOSSARY_FILE,
    META_FILE,
    RELATIONS_FILE,
    SEARCH_FILE,
    TYPES_FILE,
    Dataset,
)
from core.models import TypeRecord
from core.search import build_search_entries


def describe_sources(source: str, api: str) -> dict[str, str]:
    if source == "mediawiki":
        types_source = f"{api} (Action API: parse)"
    else:
        types_source = f"{GITHUB_CONTENT_BASE}/[TYPE].html"
    return {
        "types": types_source,
        "relations": "DUAL_PAIRS hardcoded (script)",
        "glossary": "Short definitions embedded in script",
    }


def build_dataset(
    types: list[TypeRecord],
    source: str,
    api: str,
    generated_at: str,
    mode: str = "scrape",
) -> Dataset:
    """Combine scraped types with the hardcoded glossary and relations."""
    glossary = build_glossary()
    return Dataset.build(
        types,
        glossary,
        build_relations(),
        meta={
            "generatedAt": generated_at,
            "mode": mode,
            "source": source,
            "sources": describe_sources(source, api),
        },
        search_entries=build_search_entries(types, glossary),
    )


def dataset_files(dataset: Dataset) -> dict[str, Any]:
    """File name -> JSON payload."""
    return {
        TYPES_FILE: [t.to_dict() for t in dataset.type_list],
        RELATIONS_FILE: [r.to_dict() for r in dataset.relations],
        GLOSSARY_FILE: [g.to_dict() for g in dataset.glossary],
        SEARCH_FILE: {"entries": list(dataset.search_entries)},
        META_FILE: dict(dataset.meta),
    }


def save_json(data: Any, filepath: Path) -> None:
    """Save data to JSON file."""
    filepath.parent.mkdir(parents=True, exist_ok=True)
    filepath.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info(f"Saved: {filepath}")


def write_dataset(dataset: Dataset, out_dir: Path) -> list[Path]:
    """
    Write every dataset file, replacing the old ones only once all are staged.

    Each payload goes to a `.tmp` sibling first; a failure while staging
    removes the temp files and leaves the previous export untouched.
    """
    staged: list[tuple[Path, Path]] = []
    try:
        for name, payload in dataset_files(dataset).items():
            path = out_dir / name
            tmp = path.with_name(path.name + ".tmp")
            staged.append((tmp, path))
            save_json(payload, tmp)
    except OSError:
        for tmp, _ in staged:
            tmp.unlink(missing_ok=True)
        raise

    written = []
    for tmp, path in staged:
        tmp.replace(path)
        written.append(path)
    logger.info(f"Wrote {len(written)} files to {out_dir}")
    return written

"""Data endpoints for serving the exported reference data."""

import os
from pathlib import Path
from typing import Any

from fastapi import APIRouter, HTTPException, Query

from core.dataset import (
    TYPES_FILE,
    Dataset,
    DatasetError,
    UnknownTypeError,
    canonical_dataset,
    load_local,
)
from core.models import InformationElement, Quadra, Temperament
from core.search import ALL, SEARCH_LIMIT, filter_types

router = APIRouter()

# Data directory - relative to project root
DATA_DIR = Path(
    os.getenv("WIKISOCION_DATA_DIR", Path(__file__).parent.parent.parent / "data")
)


def get_dataset() -> Dataset:
    """Load exported data, falling back to the built-in tables."""
    if not (DATA_DIR / TYPES_FILE).exists():
        return canonical_dataset()
    try:
        return load_local(DATA_DIR)
    except DatasetError as e:
        raise HTTPException(status_code=500, detail=str(e))


def get_type_or_404(dataset: Dataset, code: str):
    try:
        return dataset.get(code)
    except UnknownTypeError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _check_choice(name: str, value: str, choices: list[str]) -> None:
    if value != ALL and value not in choices:
        raise HTTPException(status_code=400, detail=f"Invalid {name}: {value}")


# =============================================================================
# TYPES
# =============================================================================


@router.get("/types")
async def get_types(
    quadra: str = Query(ALL, description="Alpha, Beta, Gamma, Delta or All"),
    temperament: str = Query(ALL, description="EP, EJ, IP, IJ or All"),
    leading: str = Query(ALL, description="Leading element (e.g., Ti) or All"),
) -> dict[str, Any]:
    """Get type records, optionally filtered."""
    _check_choice("quadra", quadra, [q.value for q in Quadra])
    _check_choice("temperament", temperament, [t.value for t in Temperament])
    _check_choice("leading", leading, [e.value for e in InformationElement])

    dataset = get_dataset()
    types = filter_types(dataset.type_list, quadra, temperament, leading)
    return {
        "count": len(types),
        "data": [t.to_dict() for t in types],
    }


@router.get("/types/{code}")
async def get_type(code: str) -> dict[str, Any]:
    """Get one type record with its related types."""
    dataset = get_dataset()
    record = get_type_or_404(dataset, code)
    related = dataset.related(record.code)

    return {
        "data": record.to_dict(),
        "dual": related["dual"].code if related["dual"] else None,
        "related": {
            key: [t.code for t in related[key]]
            for key in ("same_quadra", "same_temperament", "same_leading")
        },
    }


# =============================================================================
# GLOSSARY, RELATIONS, META
# =============================================================================


@router.get("/glossary")
async def get_glossary() -> dict[str, Any]:
    """Get information element definitions."""
    dataset = get_dataset()
    return {
        "count": len(dataset.glossary),
        "data": [g.to_dict() for g in dataset.glossary],
    }


@router.get("/relations")
async def get_relations() -> dict[str, Any]:
    """Get published dual pair records."""
    dataset = get_dataset()
    return {
        "count": len(dataset.relations),
        "data": [r.to_dict() for r in dataset.relations],
    }


@router.get("/meta")
async def get_meta() -> dict[str, Any]:
    """Get dataset generation metadata."""
    dataset = get_dataset()
    return dict(dataset.meta)


@router.get("/search")
async def search(
    q: str = Query("", description="Search text"),
    limit: int = Query(SEARCH_LIMIT, ge=1, le=100, description="Max results"),
) -> dict[str, Any]:
    """Search types and glossary terms."""
    dataset = get_dataset()
    results = dataset.search(q, limit=limit)
    return {
        "query": q,
        "count": len(results),
        "data": results,
    }

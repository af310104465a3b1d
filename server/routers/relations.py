"""Relation classification endpoints."""

from typing import Any

from fastapi import APIRouter, Query
from pydantic import BaseModel

from core.relations import RELATION_COLORS, pair_traits
from server.routers.data import get_dataset, get_type_or_404

router = APIRouter()


class ClassifyRequest(BaseModel):
    """Pair of type codes to classify."""

    a: str
    b: str


def classify_pair(a: str, b: str) -> dict[str, Any]:
    dataset = get_dataset()
    type_a = get_type_or_404(dataset, a)
    type_b = get_type_or_404(dataset, b)
    result = dataset.classify(type_a.code, type_b.code)

    return {
        "a": type_a.code,
        "b": type_b.code,
        **result.to_dict(),
        "traits": pair_traits(type_a, type_b),
    }


@router.get("/classify")
async def classify_get(
    a: str = Query(..., description="First type code"),
    b: str = Query(..., description="Second type code"),
) -> dict[str, Any]:
    """Classify the relation between two types."""
    return classify_pair(a, b)


@router.post("/classify")
async def classify_post(request: ClassifyRequest) -> dict[str, Any]:
    """Classify the relation between two types (JSON body)."""
    return classify_pair(request.a, request.b)


@router.get("/matrix")
async def get_matrix() -> dict[str, Any]:
    """Get the relation label for every ordered pair of types."""
    dataset = get_dataset()
    matrix = dataset.matrix()
    return {
        "codes": list(matrix),
        "data": {
            a: {b: label.value for b, label in row.items()}
            for a, row in matrix.items()
        },
    }


@router.get("/related/{code}")
async def get_related(code: str) -> dict[str, Any]:
    """Get the dual and types sharing quadra, temperament or leading element."""
    dataset = get_dataset()
    record = get_type_or_404(dataset, code)
    related = dataset.related(record.code)

    return {
        "code": record.code,
        "dual": related["dual"].to_dict() if related["dual"] else None,
        "same_quadra": [t.to_dict() for t in related["same_quadra"]],
        "same_temperament": [t.to_dict() for t in related["same_temperament"]],
        "same_leading": [t.to_dict() for t in related["same_leading"]],
    }


@router.get("/colors")
async def get_colors() -> dict[str, str]:
    """Get display colours keyed by relation label."""
    return {label.value: color for label, color in RELATION_COLORS.items()}

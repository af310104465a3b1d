"""Search index and list filters over types and glossary terms."""

from collections.abc import Iterable
from typing import Any

from core.models import GlossaryTerm, TypeRecord

# =============================================================================
# CONFIGURATION
# =============================================================================

SEARCH_LIMIT = 10
ALL = "All"


# =============================================================================
# INDEX
# =============================================================================


def type_haystack(t: TypeRecord) -> str:
    fields = [
        t.code,
        t.full_name,
        t.alias,
        t.quadra.value,
        t.temperament.value,
        t.leading.value,
        t.creative.value,
    ]
    return " ".join(fields).lower()


def build_search_entries(
    types: Iterable[TypeRecord],
    glossary: Iterable[GlossaryTerm],
) -> list[dict[str, Any]]:
    """Precompute lower-cased haystacks for every type and glossary term."""
    entries: list[dict[str, Any]] = []
    for t in types:
        entries.append(
            {
                "kind": "type",
                "id": t.code,
                "code": t.code,
                "fullName": t.full_name,
                "alias": t.alias,
                "haystack": type_haystack(t),
            }
        )
    for g in glossary:
        entries.append(
            {
                "kind": "gloss",
                "id": g.term,
                "term": g.term,
                "shortDef": g.short_def,
                "haystack": f"{g.term} {g.short_def}".lower(),
            }
        )
    return entries


# =============================================================================
# QUERIES
# =============================================================================


def search(
    query: str,
    entries: list[dict[str, Any]] | None = None,
    types: Iterable[TypeRecord] | None = None,
    glossary: Iterable[GlossaryTerm] | None = None,
    limit: int = SEARCH_LIMIT,
) -> list[dict[str, Any]]:
    """
    Case-insensitive substring search.

    Uses the precomputed index when given; otherwise matches type fields
    (code, name, alias, quadra, elements) first and glossary terms after.
    """
    q = (query or "").strip().lower()
    if not q:
        return []

    if entries is not None:
        return [e for e in entries if q in (e.get("haystack") or "")][:limit]

    results: list[dict[str, Any]] = []
    for t in types or []:
        fields = [
            t.code,
            t.full_name,
            t.alias,
            t.quadra.value,
            t.leading.value,
            t.creative.value,
        ]
        if any(q in v.lower() for v in fields):
            results.append(
                {
                    "kind": "type",
                    "id": t.code,
                    "code": t.code,
                    "fullName": t.full_name,
                    "alias": t.alias,
                }
            )
    for g in glossary or []:
        if q in g.term.lower() or q in g.short_def.lower():
            results.append(
                {"kind": "gloss", "id": g.term, "term": g.term, "shortDef": g.short_def}
            )
    return results[:limit]


def filter_types(
    types: Iterable[TypeRecord],
    quadra: str = ALL,
    temperament: str = ALL,
    leading: str = ALL,
) -> list[TypeRecord]:
    """Filter by quadra, temperament and leading element; "All" disables a filter."""
    return [
        t
        for t in types
        if (quadra == ALL or t.quadra.value == quadra)
        and (temperament == ALL or t.temperament.value == temperament)
        and (leading == ALL or t.leading.value == leading)
    ]

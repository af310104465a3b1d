"""
Loaded dataset: types, glossary, relations, search index and metadata.

The exported JSON files are read once into an immutable Dataset. Lookups of
unknown codes raise UnknownTypeError; the classifier itself never sees an
unknown code.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from loguru import logger

from core.catalog import (
    DUAL_PAIRS,
    DualPairSet,
    canonical_dataset_parts,
    dual_key,
)
from core.models import DualRelation, GlossaryTerm, RelationLabel, TypeRecord
from core.relations import RelationResult, classify, related_types, relation_matrix
from core.search import build_search_entries, search

# =============================================================================
# CONFIGURATION
# =============================================================================

DATA_DIR = Path(__file__).parent.parent / "data"

TYPES_FILE = "types.json"
GLOSSARY_FILE = "glossary.json"
RELATIONS_FILE = "relations.json"
SEARCH_FILE = "search.json"
META_FILE = "meta.json"

EXPECTED_TYPE_COUNT = 16
EXPECTED_DUAL_COUNT = 8


# =============================================================================
# ERRORS
# =============================================================================


class DatasetError(Exception):
    """Dataset files are missing, unreadable or inconsistent."""


class UnknownTypeError(KeyError):
    """A type code is not part of the dataset."""

    def __init__(self, code: str):
        super().__init__(code)
        self.code = code

    def __str__(self) -> str:
        return f"Unknown type code: {self.code}"


# =============================================================================
# DATASET
# =============================================================================


@dataclass(frozen=True)
class Dataset:
    """Read-only view of the reference data."""

    type_list: tuple[TypeRecord, ...]
    glossary: tuple[GlossaryTerm, ...]
    relations: tuple[DualRelation, ...]
    meta: Mapping[str, Any] = field(default_factory=dict)
    search_entries: tuple[dict[str, Any], ...] = ()

    @classmethod
    def build(
        cls,
        types: list[TypeRecord],
        glossary: list[GlossaryTerm],
        relations: list[DualRelation],
        meta: dict[str, Any] | None = None,
        search_entries: list[dict[str, Any]] | None = None,
    ) -> "Dataset":
        if search_entries is None:
            search_entries = build_search_entries(types, glossary)
        return cls(
            type_list=tuple(types),
            glossary=tuple(glossary),
            relations=tuple(relations),
            meta=MappingProxyType(dict(meta or {})),
            search_entries=tuple(search_entries),
        )

    @property
    def types(self) -> Mapping[str, TypeRecord]:
        return MappingProxyType({t.code: t for t in self.type_list})

    @property
    def duals(self) -> DualPairSet:
        return DualPairSet.from_relations(self.relations)

    def get(self, code: str) -> TypeRecord:
        record = self.types.get(code.upper())
        if record is None:
            raise UnknownTypeError(code)
        return record

    def classify(self, a_code: str, b_code: str) -> RelationResult:
        return classify(self.get(a_code), self.get(b_code), self.duals)

    def related(self, code: str) -> dict[str, Any]:
        return related_types(self.type_list, self.duals, self.get(code).code)

    def matrix(self) -> dict[str, dict[str, RelationLabel]]:
        return relation_matrix(self.type_list, self.duals)

    def search(self, query: str, limit: int = 10) -> list[dict[str, Any]]:
        return search(query, entries=list(self.search_entries), limit=limit)

    def relation_for(self, a_code: str, b_code: str) -> DualRelation | None:
        """Published relation record for a pair, if any."""
        key = dual_key(a_code.upper(), b_code.upper())
        for rel in self.relations:
            if dual_key(rel.a, rel.b) == key:
                return rel
        return None


def canonical_dataset() -> Dataset:
    """Dataset built from the hardcoded tables, without overviews."""
    types, glossary, relations = canonical_dataset_parts()
    return Dataset.build(types, glossary, relations, meta={"mode": "canonical"})


# =============================================================================
# LOADING
# =============================================================================


def _read_required(path: Path) -> Any:
    if not path.exists():
        raise DatasetError(f"Missing data file: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DatasetError(f"Invalid JSON in {path.name}: {e}") from e


def _read_optional(path: Path) -> Any:
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to parse optional JSON at {path}: {e}")
        return None


def _search_index(search_json: Any) -> list[dict[str, Any]] | None:
    """Entries from search.json, or None when the index must be rebuilt."""
    if search_json is None:
        return None
    entries = search_json.get("entries") if isinstance(search_json, dict) else None
    if isinstance(entries, list) and all(
        isinstance(e, dict) and isinstance(e.get("haystack"), str) for e in entries
    ):
        return entries
    logger.warning("Ignoring malformed search index; rebuilding from types and glossary")
    return None


def load_local(data_dir: Path | None = None) -> Dataset:
    """
    Load exported JSON files from a data directory.

    Args:
        data_dir: Directory holding types/glossary/relations JSON (default: data/)

    Returns:
        Dataset (search index rebuilt when search.json is absent or malformed)

    Raises:
        DatasetError: required file missing, unreadable or malformed
    """
    data_dir = data_dir or DATA_DIR

    raw_types = _read_required(data_dir / TYPES_FILE)
    raw_glossary = _read_required(data_dir / GLOSSARY_FILE)
    raw_relations = _read_required(data_dir / RELATIONS_FILE)

    try:
        types = [TypeRecord.from_dict(t) for t in raw_types]
        glossary = [GlossaryTerm.from_dict(g) for g in raw_glossary]
        relations = [DualRelation.from_dict(r) for r in raw_relations]
    except (ValueError, KeyError, TypeError) as e:
        raise DatasetError(f"Malformed dataset in {data_dir}: {e}") from e

    meta_json = _read_optional(data_dir / META_FILE)
    search_json = _read_optional(data_dir / SEARCH_FILE)

    entries = _search_index(search_json)

    meta = dict(meta_json) if isinstance(meta_json, dict) else {}
    meta.setdefault("mode", "local")

    logger.debug(f"Loaded {len(types)} types from {data_dir}")
    return Dataset.build(types, glossary, relations, meta=meta, search_entries=entries)


# =============================================================================
# INTEGRITY CHECKS
# =============================================================================


def validate_dataset(dataset: Dataset) -> list[str]:
    """Run integrity checks; returns a list of problems (empty when valid)."""
    problems: list[str] = []
    codes = [t.code for t in dataset.type_list]

    if len(codes) != EXPECTED_TYPE_COUNT:
        problems.append(f"Expected {EXPECTED_TYPE_COUNT} types, got {len(codes)}")
    if len(set(codes)) != len(codes):
        problems.append("Type codes are not unique")

    duals = dataset.duals
    if len(duals) != EXPECTED_DUAL_COUNT:
        problems.append(f"Expected {EXPECTED_DUAL_COUNT} dual pairs, got {len(duals)}")
    for a, b in DUAL_PAIRS:
        if (a, b) not in duals:
            problems.append(f"Expected dual mapping for {a}-{b}")
    try:
        duals.validate(codes)
    except ValueError as e:
        problems.append(str(e))

    lii = dataset.types.get("LII")
    if lii is None:
        problems.append("LII missing from types")
    elif lii.leading.value != "Ti":
        problems.append("LII leading should be Ti")

    if not any(e.get("id") == "LII" for e in dataset.search("lii")):
        problems.append("Search should find LII")
    if not any(e.get("id") == "Te" for e in dataset.search("extroverted logic")):
        problems.append("Glossary search should find Te")

    return problems


def ensure_valid(dataset: Dataset) -> Dataset:
    problems = validate_dataset(dataset)
    if problems:
        raise DatasetError("; ".join(problems))
    return dataset

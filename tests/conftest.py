"""Shared fixtures for wikisocion tests."""

from __future__ import annotations

import pytest

from core.catalog import CANONICAL_DUALS, canonical_types
from core.dataset import Dataset, canonical_dataset
from core.models import InformationElement, Quadra, Temperament, TypeRecord
from core.steps.export import build_dataset, write_dataset


def make_type(
    code: str = "AAA",
    quadra: str = "Alpha",
    temperament: str = "EP",
    leading: str = "Ne",
    creative: str = "Ti",
    full_name: str = "Test Type",
    alias: str = "TEST",
) -> TypeRecord:
    """Factory helper for creating TypeRecord instances."""
    return TypeRecord(
        code=code,
        full_name=full_name,
        alias=alias,
        quadra=Quadra(quadra),
        temperament=Temperament(temperament),
        leading=InformationElement(leading),
        creative=InformationElement(creative),
    )


def make_parse(text: str, displaytitle: str | None = None, revid: int = 1234) -> dict:
    """Factory helper for an Action API parse payload."""
    parsed = {"title": "Page", "text": text, "revid": revid}
    if displaytitle is not None:
        parsed["displaytitle"] = displaytitle
    return parsed


LONG_PARAGRAPH = (
    "This type is described at length here, with enough words to count as "
    "the lead paragraph of the page."
)


@pytest.fixture
def types() -> list[TypeRecord]:
    return canonical_types()


@pytest.fixture
def by_code(types) -> dict[str, TypeRecord]:
    return {t.code: t for t in types}


@pytest.fixture
def duals():
    return CANONICAL_DUALS


@pytest.fixture
def dataset() -> Dataset:
    return canonical_dataset()


@pytest.fixture
def data_dir(tmp_path, types):
    """A data directory holding a freshly exported canonical dataset."""
    ds = build_dataset(types, "github", "https://example.test/api.php", "2024-01-01T00:00:00+00:00")
    write_dataset(ds, tmp_path)
    return tmp_path

"""Tests for core/dataset.py."""

from __future__ import annotations

import json

import pytest

from core.dataset import (
    DatasetError,
    UnknownTypeError,
    ensure_valid,
    load_local,
    validate_dataset,
)
from core.models import RelationLabel


# ── Dataset lookups ──────────────────────────────────────────────────


class TestDataset:
    def test_get_is_case_insensitive(self, dataset):
        assert dataset.get("lii").code == "LII"

    def test_get_unknown_code(self, dataset):
        with pytest.raises(UnknownTypeError) as exc:
            dataset.get("XYZ")
        assert exc.value.code == "XYZ"
        assert str(exc.value) == "Unknown type code: XYZ"
        assert isinstance(exc.value, KeyError)

    def test_types_mapping_is_read_only(self, dataset):
        with pytest.raises(TypeError):
            dataset.types["LII"] = None

    def test_classify(self, dataset):
        assert dataset.classify("LII", "ESE").label == RelationLabel.DUALITY
        assert dataset.classify("ese", "lii").label == RelationLabel.DUALITY

    def test_classify_unknown_code(self, dataset):
        with pytest.raises(UnknownTypeError):
            dataset.classify("LII", "ABC")

    def test_related(self, dataset):
        assert dataset.related("lii")["dual"].code == "ESE"

    def test_matrix_is_square(self, dataset):
        matrix = dataset.matrix()
        assert len(matrix) == 16
        assert all(len(row) == 16 for row in matrix.values())

    def test_relation_for(self, dataset):
        rel = dataset.relation_for("ESE", "LII")
        assert rel is not None
        assert rel.name == "Duality"
        assert dataset.relation_for("ILE", "LII") is None

    def test_canonical_meta(self, dataset):
        assert dataset.meta["mode"] == "canonical"


# ── load_local ───────────────────────────────────────────────────────


class TestLoadLocal:
    def test_loads_exported_files(self, data_dir):
        ds = load_local(data_dir)
        assert len(ds.type_list) == 16
        assert len(ds.glossary) == 8
        assert len(ds.duals) == 8
        assert ds.meta["source"] == "github"
        assert ds.meta["mode"] == "scrape"

    def test_missing_required_file(self, data_dir):
        (data_dir / "glossary.json").unlink()
        with pytest.raises(DatasetError, match="Missing data file"):
            load_local(data_dir)

    def test_invalid_required_json(self, data_dir):
        (data_dir / "types.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(DatasetError, match="Invalid JSON"):
            load_local(data_dir)

    def test_invalid_utf8_required_file(self, data_dir):
        (data_dir / "types.json").write_bytes(b"[\xff]")
        with pytest.raises(DatasetError):
            load_local(data_dir)

    def test_malformed_record(self, data_dir):
        types = json.loads((data_dir / "types.json").read_text(encoding="utf-8"))
        types[0]["leading"] = "Xx"
        (data_dir / "types.json").write_text(json.dumps(types), encoding="utf-8")
        with pytest.raises(DatasetError, match="Malformed"):
            load_local(data_dir)

    def test_bad_optional_files_ignored(self, data_dir):
        (data_dir / "meta.json").write_text("oops", encoding="utf-8")
        (data_dir / "search.json").unlink()
        ds = load_local(data_dir)
        assert ds.meta["mode"] == "local"
        assert len(ds.search_entries) == 24
        assert any(e["id"] == "LII" for e in ds.search("lii"))

    def test_invalid_utf8_optional_file_ignored(self, data_dir):
        (data_dir / "meta.json").write_bytes(b'{"mode": "\xff\xfe"}')
        ds = load_local(data_dir)
        assert ds.meta["mode"] == "local"

    @pytest.mark.parametrize(
        "index",
        [
            {"entries": ["lii"]},
            {"entries": [{"id": "LII", "haystack": 42}]},
            {"entries": "lii"},
            ["lii"],
        ],
    )
    def test_malformed_search_index_rebuilt(self, data_dir, index):
        (data_dir / "search.json").write_text(json.dumps(index), encoding="utf-8")
        ds = load_local(data_dir)
        assert len(ds.search_entries) == 24
        assert any(e["id"] == "LII" for e in ds.search("lii"))


# ── integrity checks ─────────────────────────────────────────────────


class TestValidateDataset:
    def test_canonical_is_valid(self, dataset):
        assert validate_dataset(dataset) == []
        assert ensure_valid(dataset) is dataset

    def test_exported_is_valid(self, data_dir):
        assert validate_dataset(load_local(data_dir)) == []

    def test_missing_type_and_dual(self, data_dir):
        types = json.loads((data_dir / "types.json").read_text(encoding="utf-8"))
        relations = json.loads((data_dir / "relations.json").read_text(encoding="utf-8"))
        (data_dir / "types.json").write_text(json.dumps(types[:-1]), encoding="utf-8")
        (data_dir / "relations.json").write_text(json.dumps(relations[:-1]), encoding="utf-8")

        problems = validate_dataset(load_local(data_dir))
        assert "Expected 16 types, got 15" in problems
        assert "Expected 8 dual pairs, got 7" in problems
        assert "Expected dual mapping for SLI-IEE" in problems

    def test_ensure_valid_raises(self, data_dir):
        types = json.loads((data_dir / "types.json").read_text(encoding="utf-8"))
        (data_dir / "types.json").write_text(json.dumps(types[:8]), encoding="utf-8")
        with pytest.raises(DatasetError, match="Expected 16 types"):
            ensure_valid(load_local(data_dir))

"""Tests for the socio command line."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from cli import utils
from cli.commands.relation import LABEL_ABBREVIATIONS
from cli.main import app
from core import runner as core_runner
from core.dataset import canonical_dataset
from core.models import RelationLabel

runner = CliRunner()


@pytest.fixture(autouse=True)
def empty_data_dir(monkeypatch, tmp_path):
    monkeypatch.setattr(utils, "DATA_DIR", tmp_path / "data")


# ── info commands ────────────────────────────────────────────────────


class TestInfo:
    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_status_without_data(self):
        result = runner.invoke(app, ["status"])
        assert result.exit_code == 0
        assert "types.json" in result.output
        assert "Missing" in result.output

    def test_status_with_data(self, monkeypatch, data_dir):
        monkeypatch.setattr(utils, "DATA_DIR", data_dir)
        result = runner.invoke(app, ["status"])
        assert result.exit_code == 0
        assert "Present" in result.output
        assert "2024-01-01" in result.output


# ── types, glossary, search ──────────────────────────────────────────


class TestBrowse:
    def test_types(self):
        result = runner.invoke(app, ["types"])
        assert result.exit_code == 0
        assert "Types (16)" in result.output

    def test_types_live(self, monkeypatch):
        async def fake_fetch(transport=None):
            return canonical_dataset()

        monkeypatch.setattr(core_runner, "fetch_live_dataset", fake_fetch)
        result = runner.invoke(app, ["types", "--live", "-q", "Alpha"])
        assert result.exit_code == 0
        assert "Types (4)" in result.output
        assert not (utils.DATA_DIR / "types.json").exists()

    def test_types_live_failure(self, monkeypatch):
        async def failing_fetch(transport=None):
            raise RuntimeError("api down")

        monkeypatch.setattr(core_runner, "fetch_live_dataset", failing_fetch)
        result = runner.invoke(app, ["types", "--live"])
        assert result.exit_code == 1
        assert "Live fetch failed" in result.output
        assert "api down" in result.output

    def test_types_filtered(self):
        result = runner.invoke(app, ["types", "--quadra", "Alpha", "-l", "Ti"])
        assert result.exit_code == 0
        assert "Types (1)" in result.output
        assert "LII" in result.output

    def test_types_invalid_filter(self):
        result = runner.invoke(app, ["types", "--temperament", "XX"])
        assert result.exit_code == 1
        assert "Invalid temperament" in result.output

    def test_type_detail(self):
        result = runner.invoke(app, ["type", "lii"])
        assert result.exit_code == 0
        assert "Logical Intuitive Introvert" in result.output
        assert "Dual:" in result.output
        assert "ESE" in result.output

    def test_type_unknown(self):
        result = runner.invoke(app, ["type", "XYZ"])
        assert result.exit_code == 1
        assert "Unknown type code: XYZ" in result.output

    def test_glossary(self):
        result = runner.invoke(app, ["glossary"])
        assert result.exit_code == 0
        assert "Fi" in result.output

    def test_search(self):
        result = runner.invoke(app, ["search", "extroverted logic"])
        assert result.exit_code == 0
        assert "Te" in result.output

    def test_search_no_results(self):
        result = runner.invoke(app, ["search", "zzz"])
        assert result.exit_code == 0
        assert "No results" in result.output

    def test_check(self):
        result = runner.invoke(app, ["check"])
        assert result.exit_code == 0
        assert "all checks passed" in result.output

    def test_check_with_bad_data(self, monkeypatch, data_dir):
        (data_dir / "relations.json").write_text("[]", encoding="utf-8")
        monkeypatch.setattr(utils, "DATA_DIR", data_dir)
        result = runner.invoke(app, ["check"])
        assert result.exit_code == 1
        assert "Expected 8 dual pairs, got 0" in result.output

    def test_corrupt_data_exits(self, monkeypatch, data_dir):
        (data_dir / "glossary.json").write_text("{", encoding="utf-8")
        monkeypatch.setattr(utils, "DATA_DIR", data_dir)
        result = runner.invoke(app, ["glossary"])
        assert result.exit_code == 1
        assert "Data load failed" in result.output


# ── relation ─────────────────────────────────────────────────────────


class TestRelation:
    def test_classify(self):
        result = runner.invoke(app, ["relation", "classify", "LII", "ESE"])
        assert result.exit_code == 0
        assert "Duality" in result.output
        assert "Complementary strengths" in result.output

    def test_classify_unknown(self):
        result = runner.invoke(app, ["relation", "classify", "LII", "ABC"])
        assert result.exit_code == 1
        assert "Unknown type code: ABC" in result.output

    def test_matrix(self):
        result = runner.invoke(app, ["relation", "matrix"])
        assert result.exit_code == 0
        assert "Identity" in result.output

    def test_colors(self):
        result = runner.invoke(app, ["relation", "colors"])
        assert result.exit_code == 0
        assert "#16a34a" in result.output

    def test_every_label_has_abbreviation(self):
        assert set(LABEL_ABBREVIATIONS) == set(RelationLabel)
        assert len(set(LABEL_ABBREVIATIONS.values())) == len(RelationLabel)


# ── scrape ───────────────────────────────────────────────────────────


class TestScrape:
    def test_invalid_source(self):
        result = runner.invoke(app, ["scrape", "--source", "ftp"])
        assert result.exit_code == 1
        assert "Unknown source" in result.output

    def test_runs_pipeline(self, monkeypatch, tmp_path):
        calls = []

        def fake_run(source=None, out_dir=None):
            calls.append((source, out_dir))
            return {
                "source": "github",
                "types": 16,
                "glossary": 8,
                "relations": 8,
                "search_entries": 24,
                "files": ["a", "b", "c", "d", "e"],
                "out_dir": str(out_dir),
                "elapsed_seconds": 0.5,
            }

        monkeypatch.setattr(core_runner, "run", fake_run)
        result = runner.invoke(app, ["scrape", "-s", "github", "-o", str(tmp_path)])
        assert result.exit_code == 0
        assert calls == [("github", tmp_path)]
        assert "Wrote 5 files" in result.output

    def test_failure_exits(self, monkeypatch):
        def failing_run(source=None, out_dir=None):
            raise RuntimeError("offline")

        monkeypatch.setattr(core_runner, "run", failing_run)
        result = runner.invoke(app, ["scrape"])
        assert result.exit_code == 1
        assert "Scrape failed" in result.output

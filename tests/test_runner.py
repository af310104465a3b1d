"""Tests for core/runner.py and core/steps/export.py."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from core import runner
from core.catalog import TYPE_PAGES
from core.dataset import load_local, validate_dataset
from core.steps import export, fetch
from core.steps.export import dataset_files, describe_sources

from tests.conftest import LONG_PARAGRAPH

MW_HOST = "wiki.test"
GITHUB_HOST = "wikisocion.github.io"


@pytest.fixture(autouse=True)
def fast_scrape(monkeypatch):
    monkeypatch.setattr(fetch, "BACKOFF_SECONDS", 0)
    monkeypatch.setattr(fetch, "MW_API", f"https://{MW_HOST}/w/api.php")
    monkeypatch.setattr(runner, "MEDIAWIKI_DELAY", 0)


def mediawiki_ok(request):
    if request.url.host == MW_HOST:
        title = request.url.params["page"]
        return httpx.Response(
            200,
            json={
                "parse": {
                    "title": title,
                    "displaytitle": f"<span>{title}</span>",
                    "revid": 100,
                    "text": f"<p>Short</p><p>{title}: {LONG_PARAGRAPH}</p>",
                }
            },
        )
    return httpx.Response(404)


def mediawiki_down(request):
    if request.url.host == MW_HOST:
        return httpx.Response(503)
    code = request.url.path.rsplit("/", 1)[-1].removesuffix(".html")
    return httpx.Response(200, text=f"<h1>{code}</h1><p>{code} mirror text.</p>")


# ── scrape_types ─────────────────────────────────────────────────────


class TestScrapeTypes:
    def _scrape(self, handler, source):
        async def main():
            async with fetch.make_client(httpx.MockTransport(handler)) as client:
                return await runner.scrape_types(client, source)

        return asyncio.run(main())

    def test_mediawiki(self):
        types, used = self._scrape(mediawiki_ok, "mediawiki")
        assert used == "mediawiki"
        assert len(types) == 16
        lii = next(t for t in types if t.code == "LII")
        assert lii.title == TYPE_PAGES["LII"]
        assert lii.rev_id == 100
        assert lii.overview.startswith("LII (INTj): ")

    def test_auto_falls_back_to_github(self):
        types, used = self._scrape(mediawiki_down, "auto")
        assert used == "github"
        assert types[0].overview == "ILE mirror text."
        assert types[0].href == "https://wikisocion.github.io/content/ILE.html"

    def test_explicit_mediawiki_falls_back(self):
        _, used = self._scrape(mediawiki_down, "mediawiki")
        assert used == "github"

    def test_github_only(self):
        def handler(request):
            assert request.url.host == GITHUB_HOST
            return mediawiki_down(request)

        _, used = self._scrape(handler, "github")
        assert used == "github"

    def test_unknown_source(self):
        with pytest.raises(ValueError, match="Unknown source"):
            self._scrape(mediawiki_ok, "ftp")


# ── run_async ────────────────────────────────────────────────────────


class TestRun:
    def test_writes_all_files(self, tmp_path):
        result = asyncio.run(
            runner.run_async(
                source="auto",
                out_dir=tmp_path,
                transport=httpx.MockTransport(mediawiki_down),
            )
        )
        assert result["source"] == "github"
        assert result["types"] == 16
        assert result["glossary"] == 8
        assert result["relations"] == 8
        assert result["search_entries"] == 24
        assert len(result["files"]) == 5

        names = sorted(p.name for p in tmp_path.iterdir())
        assert names == ["glossary.json", "meta.json", "relations.json", "search.json", "types.json"]

        meta = json.loads((tmp_path / "meta.json").read_text(encoding="utf-8"))
        assert meta["source"] == "github"
        assert meta["generatedAt"] == result["generated_at"]
        assert "[TYPE].html" in meta["sources"]["types"]

        search = json.loads((tmp_path / "search.json").read_text(encoding="utf-8"))
        assert "entries" in search

        ds = load_local(tmp_path)
        assert validate_dataset(ds) == []
        assert ds.get("LII").overview == "LII mirror text."

    def test_fetch_live_dataset(self):
        ds = asyncio.run(runner.fetch_live_dataset(transport=httpx.MockTransport(mediawiki_ok)))
        assert ds.meta["mode"] == "live"
        assert ds.meta["source"] == "mediawiki"
        assert len(ds.type_list) == 16


# ── export helpers ───────────────────────────────────────────────────


class TestExport:
    def test_describe_sources(self):
        sources = describe_sources("mediawiki", "https://api.test")
        assert sources["types"] == "https://api.test (Action API: parse)"
        assert set(sources) == {"types", "relations", "glossary"}

    def test_dataset_files_shapes(self, dataset):
        files = dataset_files(dataset)
        assert isinstance(files["types.json"], list)
        assert files["relations.json"][0]["name"] == "Duality"
        assert files["glossary.json"][0] == {
            "term": "Ne",
            "shortDef": "Extroverted intuition - possibilities, patterns, divergence.",
        }
        assert isinstance(files["search.json"]["entries"], list)

    def test_write_dataset_leaves_no_temp_files(self, tmp_path, dataset):
        (tmp_path / "types.json").write_text("[]", encoding="utf-8")
        written = export.write_dataset(dataset, tmp_path)
        assert sorted(p.name for p in tmp_path.iterdir()) == sorted(p.name for p in written)
        assert len(json.loads((tmp_path / "types.json").read_text(encoding="utf-8"))) == 16

    def test_failed_write_keeps_previous_export(self, tmp_path, dataset, monkeypatch):
        (tmp_path / "types.json").write_text("[]", encoding="utf-8")
        real_save = export.save_json
        calls = []

        def flaky_save(data, filepath):
            calls.append(filepath)
            if len(calls) == 3:
                raise OSError("disk full")
            real_save(data, filepath)

        monkeypatch.setattr(export, "save_json", flaky_save)
        with pytest.raises(OSError, match="disk full"):
            export.write_dataset(dataset, tmp_path)

        assert [p.name for p in tmp_path.iterdir()] == ["types.json"]
        assert (tmp_path / "types.json").read_text(encoding="utf-8") == "[]"

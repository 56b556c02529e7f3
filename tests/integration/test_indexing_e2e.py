"""End-to-end indexing: component tree -> index file -> served snapshot."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from showcase.indexer.builder import run_indexer
from showcase.indexer.scanner import DirectoryScanner
from showcase.service.artifact_store import ArtifactStore
from showcase.settings import IndexerConfig
from tests.conftest import FIXTURE_NAMES, USERS_TABLE_JSX, make_config


def _load(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


class TestTwoComponentTree:
    @pytest.fixture(autouse=True)
    def tree(self, write_component: Callable[..., Path]) -> None:
        write_component("bar-chart.jsx", "export default function Bars() {\n  return null;\n}\n")
        write_component("data-table.jsx", USERS_TABLE_JSX)

    def test_index_document(self, tmp_config: IndexerConfig) -> None:
        assert run_indexer(tmp_config) == 0
        data = _load(tmp_config.output_path)
        assert data["count"] == 2
        first, second = data["artifacts"]
        assert first["id"] == "bar-chart"
        assert first["name"] == "Bar Chart"
        assert first["type"] == "component"
        assert first["tags"] == []
        assert first["description"] == "Bar Chart component"
        assert second["name"] == "Users Table"
        assert second["tags"] == ["data", "table"]
        assert data["generatedAt"].endswith("Z") or data["generatedAt"].endswith("+00:00")

    def test_served_after_indexing(self, tmp_config: IndexerConfig) -> None:
        run_indexer(tmp_config)
        store = ArtifactStore.from_index_file(tmp_config)
        assert store.get_by_id("data-table").name == "Users Table"  # type: ignore[union-attr]
        component = store.read_source("bar-chart")
        assert component is not None
        assert component.module == "bar-chart"


class TestMissingScanRoot:
    def test_scanner_returns_empty(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        config = make_config(tmp_path / "absent", tmp_path / "index.json")
        result = DirectoryScanner(config).scan()
        assert result.records == []
        assert "Directory not found" in caplog.text

    def test_existing_index_kept(self, tmp_path: Path) -> None:
        output = tmp_path / "index.json"
        output.write_text('{"artifacts": [], "count": 0}', encoding="utf-8")
        config = make_config(tmp_path / "absent", output)
        assert run_indexer(config) == 0
        assert output.read_text(encoding="utf-8") == '{"artifacts": [], "count": 0}'


class TestCorruptFileAmongValid:
    def test_nine_of_ten(
        self, tmp_config: IndexerConfig, write_component: Callable[..., Path]
    ) -> None:
        for i in range(9):
            write_component(f"Widget{i}.jsx")
        write_component("Broken.jsx", b"\xc3\x28 invalid utf-8")
        assert run_indexer(tmp_config) == 0
        data = _load(tmp_config.output_path)
        assert data["count"] == 9
        assert "broken" not in {a["id"] for a in data["artifacts"]}


class TestIndexProperties:
    def test_rerun_is_byte_identical_apart_from_timestamp(
        self, fixture_config: IndexerConfig
    ) -> None:
        run_indexer(fixture_config)
        first = _load(fixture_config.output_path)
        run_indexer(fixture_config)
        second = _load(fixture_config.output_path)
        assert json.dumps(first["artifacts"]) == json.dumps(second["artifacts"])

    def test_count_matches_length(self, fixture_config: IndexerConfig) -> None:
        run_indexer(fixture_config)
        data = _load(fixture_config.output_path)
        assert data["count"] == len(data["artifacts"]) == len(FIXTURE_NAMES)

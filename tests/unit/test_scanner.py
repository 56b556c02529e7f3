"""Tests for DirectoryScanner: traversal, exclusions, failures, ordering, duplicates."""

from __future__ import annotations

import os
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import pytest

from showcase.indexer.errors import DuplicateArtifactError
from showcase.indexer.scanner import DirectoryScanner, file_timestamps
from showcase.settings import IndexerConfig
from tests.conftest import FIXTURE_NAMES, make_config


class TestFixtureTree:
    def test_names_sorted(self, fixture_config: IndexerConfig) -> None:
        result = DirectoryScanner(fixture_config).scan()
        assert [r.name for r in result.records] == FIXTURE_NAMES
        assert result.clean

    def test_exclusions(self, fixture_config: IndexerConfig) -> None:
        ids = {r.id for r in DirectoryScanner(fixture_config).scan().records}
        # helpers/ is an ignored dir; README.md, .draft.jsx and notes.txt are skipped
        assert ids == {"barchart", "datatable", "signupform", "pulsing-grid"}

    def test_paths_relative_posix(self, fixture_config: IndexerConfig) -> None:
        paths = {r.id: r.path for r in DirectoryScanner(fixture_config).scan().records}
        assert paths["signupform"] == "forms/SignupForm.tsx"
        assert paths["barchart"] == "BarChart.jsx"

    def test_relative_scan_root(
        self, monkeypatch: pytest.MonkeyPatch, fixture_config: IndexerConfig, tmp_path: Path
    ) -> None:
        monkeypatch.chdir(fixture_config.scan_root.parent)
        config = make_config(Path(fixture_config.scan_root.name), tmp_path / "index.json")
        records = {r.id: r for r in DirectoryScanner(config).scan().records}
        assert records["barchart"].path == "BarChart.jsx"
        assert records["pulsing-grid"].artifact_type == "widgets"

    def test_extracted_metadata(self, fixture_config: IndexerConfig) -> None:
        records = {r.id: r for r in DirectoryScanner(fixture_config).scan().records}
        assert records["barchart"].artifact_type == "visualization"
        assert records["barchart"].tags == ["chart", "visualization"]
        assert records["datatable"].name == "Users Table"
        assert records["datatable"].tags == ["data", "table"]
        assert records["datatable"].description == (
            "Sortable list of users with role and status columns."
        )
        assert records["signupform"].artifact_type == "input"
        assert records["signupform"].tags == ["forms", "form", "input"]
        assert records["pulsing-grid"].artifact_type == "widgets"
        assert records["pulsing-grid"].tags == ["widgets"]

    def test_repeat_scans_identical(self, fixture_config: IndexerConfig) -> None:
        first = DirectoryScanner(fixture_config).scan().records
        second = DirectoryScanner(fixture_config).scan().records
        assert [r.model_dump() for r in first] == [r.model_dump() for r in second]

    def test_custom_ignored_dirs(self, fixture_config: IndexerConfig, tmp_path: Path) -> None:
        config = make_config(
            fixture_config.scan_root,
            tmp_path / "index.json",
            ignored_dirs=frozenset({"forms", "widgets"}),
        )
        ids = {r.id for r in DirectoryScanner(config).scan().records}
        assert ids == {"barchart", "datatable", "colors"}


class TestFailures:
    def test_missing_root(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        config = make_config(tmp_path / "nope", tmp_path / "index.json")
        result = DirectoryScanner(config).scan()
        assert result.records == []
        assert [e.code for e in result.errors] == ["SCAN_ROOT_MISSING"]
        assert "Directory not found" in caplog.text

    def test_undecodable_file_skipped(
        self, tmp_config: IndexerConfig, write_component: Callable[..., Path]
    ) -> None:
        write_component("Good.jsx")
        write_component("Broken.jsx", b"\xff\xfe\x00\x81 not utf-8")
        result = DirectoryScanner(tmp_config).scan()
        assert [r.id for r in result.records] == ["good"]
        assert [e.code for e in result.errors] == ["READ_ERROR"]
        assert result.errors[0].path == "Broken.jsx"

    def test_one_corrupt_among_ten(
        self, tmp_config: IndexerConfig, write_component: Callable[..., Path]
    ) -> None:
        for i in range(9):
            write_component(f"widget{i}.jsx")
        write_component("corrupt.jsx", b"\x80\x81\x82")
        result = DirectoryScanner(tmp_config).scan()
        assert len(result.records) == 9
        assert len(result.errors) == 1

    def test_directory_named_like_component_is_walked(
        self, tmp_config: IndexerConfig, write_component: Callable[..., Path]
    ) -> None:
        write_component("odd.jsx/Inner.jsx")
        assert [r.path for r in DirectoryScanner(tmp_config).scan().records] == [
            "odd.jsx/Inner.jsx"
        ]


class TestDuplicateIds:
    @pytest.fixture
    def duplicated(self, write_component: Callable[..., Path]) -> None:
        write_component("a/Card.jsx")
        write_component("b/Card.jsx")

    @pytest.mark.usefixtures("duplicated")
    def test_suffix_policy(self, tmp_config: IndexerConfig) -> None:
        result = DirectoryScanner(tmp_config).scan()
        assert [(r.id, r.path) for r in result.records] == [
            ("card", "a/Card.jsx"),
            ("card-2", "b/Card.jsx"),
        ]
        assert [w.code for w in result.warnings] == ["DUPLICATE_ID"]

    @pytest.mark.usefixtures("duplicated")
    def test_first_policy(self, tmp_config: IndexerConfig) -> None:
        config = make_config(
            tmp_config.scan_root, tmp_config.output_path, duplicate_policy="first"
        )
        result = DirectoryScanner(config).scan()
        assert [r.path for r in result.records] == ["a/Card.jsx"]
        assert [w.code for w in result.warnings] == ["DUPLICATE_ID"]

    @pytest.mark.usefixtures("duplicated")
    def test_error_policy(self, tmp_config: IndexerConfig) -> None:
        config = make_config(
            tmp_config.scan_root, tmp_config.output_path, duplicate_policy="error"
        )
        with pytest.raises(DuplicateArtifactError, match="card"):
            DirectoryScanner(config).scan()

    def test_suffix_skips_taken_ids(
        self, tmp_config: IndexerConfig, write_component: Callable[..., Path]
    ) -> None:
        write_component("a/Card.jsx")
        write_component("b/Card.jsx")
        write_component("b/Card-2.jsx")
        ids = sorted(r.id for r in DirectoryScanner(tmp_config).scan().records)
        assert len(ids) == len(set(ids)) == 3


class TestFileTimestamps:
    def test_utc(self, tmp_path: Path) -> None:
        path = tmp_path / "x.jsx"
        path.write_text("")
        stat = os.stat(path)
        created, modified = file_timestamps(stat)
        assert created.tzinfo is UTC
        assert modified == datetime.fromtimestamp(stat.st_mtime, UTC)

"""Shared test fixtures for the artifact showcase."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from showcase.parser.extractor import MetadataExtractor
from showcase.service.artifact_store import ArtifactStore
from showcase.settings import IndexerConfig

FIXTURES_DIR = Path(__file__).parent / "fixtures"
ARTIFACTS_DIR = FIXTURES_DIR / "artifacts"

STATIC_COMPONENTS = {"barchart": "BarChart.jsx", "datatable": "DataTable.jsx"}

# Display names of the fixture tree, in index order
FIXTURE_NAMES = ["Bar Chart", "Pulsing Grid", "Signup Form", "Users Table"]

USERS_TABLE_JSX = """\
/** @title Users Table
 * @tags data,table */
export default function DataTable() {
  return null;
}
"""


def make_config(scan_root: Path, output_path: Path, **overrides: object) -> IndexerConfig:
    options: dict[str, object] = {"static_components": dict(STATIC_COMPONENTS)}
    options.update(overrides)
    return IndexerConfig(scan_root=scan_root, output_path=output_path, **options)  # type: ignore[arg-type]


@pytest.fixture
def fixture_config(tmp_path: Path) -> IndexerConfig:
    """Config scanning the checked-in fixture tree, writing into tmp_path."""
    return make_config(ARTIFACTS_DIR, tmp_path / "out" / "artifactsIndex.json")


@pytest.fixture
def tmp_config(tmp_path: Path) -> IndexerConfig:
    """Config scanning an empty ``tmp_path/artifacts`` tree."""
    root = tmp_path / "artifacts"
    root.mkdir()
    return make_config(root, tmp_path / "artifactsIndex.json")


@pytest.fixture
def extractor(tmp_config: IndexerConfig) -> MetadataExtractor:
    return MetadataExtractor(tmp_config)


@pytest.fixture
def write_component(tmp_config: IndexerConfig) -> Callable[..., Path]:
    """Write a file under the tmp scan root and return its path."""

    def _write(rel_path: str, content: str | bytes = "export default () => null;\n") -> Path:
        path = tmp_config.scan_root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def fixture_store(fixture_config: IndexerConfig) -> ArtifactStore:
    """Store derived on the fly from the fixture tree."""
    return ArtifactStore.from_directory(fixture_config)

"""Scan + wrap + write: one full indexing run."""

from __future__ import annotations

import logging
from datetime import datetime

from showcase.indexer.errors import DuplicateArtifactError, IndexWriteError
from showcase.indexer.scanner import DirectoryScanner
from showcase.indexer.writer import write_index
from showcase.models.artifact import ArtifactIndex
from showcase.models.errors import ScanResult
from showcase.settings import IndexerConfig

logger = logging.getLogger("showcase.indexer")


def build_index(
    config: IndexerConfig, generated_at: datetime | None = None
) -> tuple[ArtifactIndex, ScanResult]:
    """Scan ``config.scan_root`` and wrap the records in an index envelope."""
    result = DirectoryScanner(config).scan()
    return ArtifactIndex.build(result.records, generated_at=generated_at), result


def run_indexer(config: IndexerConfig) -> int:
    """Rebuild the index file.  Returns a process exit status.

    A missing scan root is reported and leaves any existing index alone
    (status 0).  Write failures and rejected duplicates return 1.
    """
    logger.info("Building artifacts index...")
    logger.info("Scanning directory: %s", config.scan_root)

    try:
        index, result = build_index(config)
    except DuplicateArtifactError as exc:
        logger.error("Index build aborted: %s", exc)
        return 1

    if any(issue.code == "SCAN_ROOT_MISSING" for issue in result.errors):
        logger.error("Artifacts directory not found: %s", config.scan_root)
        return 0

    try:
        write_index(index, config.output_path)
    except IndexWriteError as exc:
        logger.error("Failed to write artifacts index: %s", exc)
        return 1

    if result.errors:
        logger.warning("Skipped %d file(s) that could not be processed", len(result.errors))
    logger.info("Successfully generated artifacts index with %d artifacts", index.count)
    logger.info("Output written to: %s", config.output_path)
    return 0

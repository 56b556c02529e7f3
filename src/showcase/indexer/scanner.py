"""Recursive component-directory scanner."""

from __future__ import annotations

import logging
import os
from datetime import UTC, datetime
from pathlib import Path

from showcase.indexer.errors import DuplicateArtifactError
from showcase.models.artifact import ArtifactRecord
from showcase.models.errors import IndexIssue, ScanResult
from showcase.parser.extractor import MetadataExtractor
from showcase.settings import IndexerConfig

logger = logging.getLogger("showcase.indexer")


def file_timestamps(stat: os.stat_result) -> tuple[datetime, datetime]:
    """Return ``(created, modified)`` in UTC.

    Creation time comes from ``st_birthtime`` where the platform records it,
    otherwise from ``st_ctime``.
    """
    born = getattr(stat, "st_birthtime", None) or stat.st_ctime
    return (
        datetime.fromtimestamp(born, UTC),
        datetime.fromtimestamp(stat.st_mtime, UTC),
    )


class DirectoryScanner:
    """Walks ``config.scan_root`` depth-first and extracts one record per component.

    Entries are visited in sorted name order and the final list is sorted by
    display name, so identical trees produce identical output.
    """

    def __init__(
        self, config: IndexerConfig, extractor: MetadataExtractor | None = None
    ) -> None:
        self._config = config
        self._extractor = extractor or MetadataExtractor(config)

    def scan(self) -> ScanResult:
        result = ScanResult()
        root = self._config.scan_root
        if not root.is_dir():
            logger.error("Directory not found: %s", root)
            result.errors.append(
                IndexIssue(
                    code="SCAN_ROOT_MISSING",
                    message=f"Directory not found: {root}",
                    path=str(root),
                )
            )
            return result

        records: list[ArtifactRecord] = []
        self._scan_directory(root, records, result)
        records = self._resolve_duplicates(records, result)
        result.records = sorted(records, key=lambda r: r.name)
        return result

    # -- walking -------------------------------------------------------------

    def _should_skip(self, entry: Path) -> bool:
        name = entry.name
        if name in self._config.ignored_files or name.startswith("."):
            return True
        return entry.is_dir() and name in self._config.ignored_dirs

    def _is_component(self, entry: Path) -> bool:
        return entry.is_file() and entry.suffix.lower() in self._config.component_extensions

    def _scan_directory(
        self, directory: Path, records: list[ArtifactRecord], result: ScanResult
    ) -> None:
        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            logger.error("Cannot list %s: %s", directory, exc)
            result.errors.append(
                IndexIssue(code="READ_ERROR", message=str(exc), path=self._rel(directory))
            )
            return

        for entry in entries:
            if self._should_skip(entry):
                continue
            if entry.is_dir():
                self._scan_directory(entry, records, result)
            elif self._is_component(entry):
                record = self._process_file(entry, result)
                if record is not None:
                    records.append(record)

    def _process_file(self, path: Path, result: ScanResult) -> ArtifactRecord | None:
        logger.info("Processing artifact: %s", path)
        try:
            content = path.read_text(encoding="utf-8")
            created, modified = file_timestamps(path.stat())
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Error processing %s: %s", path, exc)
            result.errors.append(
                IndexIssue(code="READ_ERROR", message=str(exc), path=self._rel(path))
            )
            return None
        return self._extractor.extract(content, path, created, modified)

    def _rel(self, path: Path) -> str:
        try:
            return path.relative_to(self._config.scan_root).as_posix()
        except ValueError:
            return str(path)

    # -- duplicate ids -------------------------------------------------------

    def _resolve_duplicates(
        self, records: list[ArtifactRecord], result: ScanResult
    ) -> list[ArtifactRecord]:
        """Apply ``config.duplicate_policy`` to records sharing an id (walk order)."""
        policy = self._config.duplicate_policy
        taken: dict[str, str] = {}  # id -> path that owns it
        resolved: list[ArtifactRecord] = []

        for record in records:
            owner = taken.get(record.id)
            if owner is None:
                taken[record.id] = record.path
                resolved.append(record)
                continue

            if policy == "error":
                raise DuplicateArtifactError(record.id, [owner, record.path])

            if policy == "first":
                message = f"Skipping '{record.path}': id '{record.id}' already used by '{owner}'"
            else:
                suffix = 2
                while f"{record.id}-{suffix}" in taken:
                    suffix += 1
                new_id = f"{record.id}-{suffix}"
                message = (
                    f"Renamed '{record.path}' to id '{new_id}': "
                    f"'{record.id}' already used by '{owner}'"
                )
                taken[new_id] = record.path
                resolved.append(record.model_copy(update={"id": new_id}))

            logger.warning("%s", message)
            result.warnings.append(IndexIssue(code="DUPLICATE_ID", message=message, path=record.path))

        return resolved

"""Read-only artifact snapshot: core service layer reusable by MCP and REST API."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from showcase.indexer.scanner import DirectoryScanner
from showcase.indexer.writer import read_index
from showcase.models.artifact import ArtifactDraft, ArtifactRecord
from showcase.models.errors import IndexIssue
from showcase.parser.validator import IndexValidator
from showcase.service.registry import (
    ComponentRegistry,
    ComponentSource,
    ComponentResolutionError,
    LazyComponent,
    module_factory,
)
from showcase.settings import IndexerConfig, Settings

logger = logging.getLogger("showcase.service")


class ArtifactStore:
    """Immutable record snapshot answering the gallery's queries.

    The snapshot is taken once (from the index file or a fresh directory
    scan) and never changes.  No public method raises: failures are logged
    and reported as empty results or ``None``.
    """

    def __init__(
        self,
        records: Iterable[ArtifactRecord],
        config: IndexerConfig,
        registry: ComponentRegistry | None = None,
        issues: Sequence[IndexIssue] = (),
    ) -> None:
        self._config = config
        self._records: tuple[ArtifactRecord, ...] = tuple(records)
        self._registry = registry or ComponentRegistry.from_static(
            config.scan_root, config.static_components
        )
        self._issues: list[IndexIssue] = list(issues)
        self._issues.extend(IndexValidator().validate(self._records))

        # First occurrence wins when a hand-edited index repeats an id.
        self._by_id: dict[str, ArtifactRecord] = {}
        for record in self._records:
            self._by_id.setdefault(record.id, record)
        for issue in self._issues:
            logger.warning("%s: %s", issue.code, issue.message)

    # -- constructors --------------------------------------------------------

    @classmethod
    def from_index_file(
        cls, config: IndexerConfig, path: Path | None = None
    ) -> ArtifactStore:
        """Snapshot from a generated index; absent or corrupt files give an empty store."""
        index_path = path or config.output_path
        index = read_index(index_path)
        if index is None:
            issue = IndexIssue(
                code="INDEX_UNAVAILABLE",
                message=f"No usable artifact index at {index_path}",
                path=str(index_path),
            )
            return cls((), config, issues=[issue])
        issues: list[IndexIssue] = []
        if not index.count_matches:
            issues.append(
                IndexIssue(
                    code="COUNT_MISMATCH",
                    message=(
                        f"Index declares count={index.count} but contains "
                        f"{len(index.artifacts)} artifacts"
                    ),
                    path=str(index_path),
                )
            )
        return cls(index.artifacts, config, issues=issues)

    @classmethod
    def from_directory(cls, config: IndexerConfig) -> ArtifactStore:
        """Snapshot derived on the fly from ``config.scan_root``."""
        try:
            result = DirectoryScanner(config).scan()
        except Exception as exc:
            logger.exception("Scanning %s failed", config.scan_root)
            return cls((), config, issues=[IndexIssue(code="SCAN_FAILED", message=str(exc))])
        return cls(result.records, config, issues=[*result.errors, *result.warnings])

    @classmethod
    def from_settings(cls, settings: Settings) -> ArtifactStore:
        """Snapshot from the index file or the scan root, per ``settings.source``."""
        config = settings.indexer_config()
        if settings.source == "directory":
            return cls.from_directory(config)
        return cls.from_index_file(config)

    # -- properties ----------------------------------------------------------

    @property
    def issues(self) -> list[IndexIssue]:
        """Problems noticed while building the snapshot."""
        return list(self._issues)

    @property
    def registry(self) -> ComponentRegistry:
        return self._registry

    def __len__(self) -> int:
        return len(self._records)

    # -- queries -------------------------------------------------------------

    def list_all(self) -> list[ArtifactRecord]:
        """Every record, in stored (name) order."""
        return list(self._records)

    def get_by_id(self, artifact_id: str) -> ArtifactRecord | None:
        """Exact id match, or ``None``."""
        return self._by_id.get(artifact_id)

    def get_by_name(self, name: str) -> ArtifactRecord | None:
        """Exact display-name match (first in stored order), or ``None``."""
        return next((r for r in self._records if r.name == name), None)

    def search(
        self,
        term: str | None = None,
        artifact_type: str | None = None,
        tags: Iterable[str] = (),
    ) -> list[ArtifactRecord]:
        """Gallery filter: all given criteria must hold.

        *term* matches name, description or any tag case-insensitively;
        *artifact_type* must equal the record's type; every tag in *tags*
        must be present on the record.
        """
        needle = (term or "").strip().lower()
        required = [t for t in tags if t]

        def matches(record: ArtifactRecord) -> bool:
            if needle and not (
                needle in record.name.lower()
                or needle in record.description.lower()
                or any(needle in tag.lower() for tag in record.tags)
            ):
                return False
            if artifact_type and record.artifact_type != artifact_type:
                return False
            return all(tag in record.tags for tag in required)

        return [r for r in self._records if matches(r)]

    def types(self) -> list[str]:
        """Sorted unique types across the snapshot."""
        return sorted({r.artifact_type for r in self._records})

    def tags(self) -> list[str]:
        """Sorted unique tags across the snapshot."""
        return sorted({tag for r in self._records for tag in r.tags})

    # -- resolution ----------------------------------------------------------

    def resolve_loadable(self, artifact_id: str) -> LazyComponent | None:
        """Deferred handle to the component behind *artifact_id*.

        Statically registered ids use their registry factory; other known ids
        fall back to locating ``record.module`` under the scan root when
        dynamic resolution is allowed.  Unknown or unregistered ids give ``None``.
        """
        record = self.get_by_id(artifact_id)
        if record is None:
            logger.error('Artifact with ID "%s" not found', artifact_id)
            return None
        if artifact_id in self._registry:
            return LazyComponent(record.id, self._registry.get(artifact_id))
        if not self._config.allow_dynamic_resolution:
            logger.warning("Artifact '%s' has no registered component", artifact_id)
            return None
        factory = module_factory(
            record, self._config.scan_root, self._config.component_extensions
        )
        return LazyComponent(record.id, factory)

    def read_source(self, artifact_id: str) -> ComponentSource | None:
        """Resolve and materialise in one step; ``None`` on any failure."""
        handle = self.resolve_loadable(artifact_id)
        if handle is None:
            return None
        try:
            return handle.materialize()
        except ComponentResolutionError:
            return None

    # -- creation stub -------------------------------------------------------

    def create(self, draft: ArtifactDraft | Mapping[str, Any]) -> ArtifactRecord | None:
        """Complete a draft with a time-based id and timestamps.

        Nothing is written and the snapshot is unchanged; persisting the new
        component belongs to the caller.
        """
        try:
            if not isinstance(draft, ArtifactDraft):
                draft = ArtifactDraft.model_validate(draft)
            now = datetime.now(UTC)
            record = ArtifactRecord(
                id=f"artifact-{time.time_ns() // 1_000_000}",
                name=draft.name,
                description=draft.description or f"{draft.name} component",
                artifact_type=draft.artifact_type,
                tags=draft.tags,
                path=draft.path,
                created_at=now,
                updated_at=now,
            )
        except ValidationError as exc:
            logger.error("Rejected artifact draft: %s", exc)
            return None
        logger.info("Creating artifact: %s (%s)", record.id, record.name)
        return record

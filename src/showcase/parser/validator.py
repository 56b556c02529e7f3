"""Index integrity checks: unique ids, relative paths, count consistency."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import PurePosixPath

from showcase.models.artifact import ArtifactIndex, ArtifactRecord
from showcase.models.errors import IndexIssue


class IndexValidator:
    """Checks a record set (or a whole index document) for integrity problems."""

    def validate(self, records: Sequence[ArtifactRecord]) -> list[IndexIssue]:
        issues: list[IndexIssue] = []
        issues.extend(self._check_ids_present(records))
        issues.extend(self._check_unique_ids(records))
        issues.extend(self._check_paths_inside_root(records))
        return issues

    def validate_index(self, index: ArtifactIndex) -> list[IndexIssue]:
        issues = self.validate(index.artifacts)
        if not index.count_matches:
            issues.append(
                IndexIssue(
                    code="COUNT_MISMATCH",
                    message=(
                        f"Index declares count={index.count} but contains "
                        f"{len(index.artifacts)} artifacts"
                    ),
                )
            )
        return issues

    def _check_ids_present(self, records: Sequence[ArtifactRecord]) -> list[IndexIssue]:
        return [
            IndexIssue(code="EMPTY_ID", message="Artifact has an empty id", path=r.path)
            for r in records
            if not r.id
        ]

    def _check_unique_ids(self, records: Sequence[ArtifactRecord]) -> list[IndexIssue]:
        issues: list[IndexIssue] = []
        first_seen: dict[str, str] = {}  # id -> path of first record
        for record in records:
            existing = first_seen.get(record.id)
            if existing is not None:
                issues.append(
                    IndexIssue(
                        code="DUPLICATE_ID",
                        message=(
                            f"Artifact id '{record.id}' from '{record.path}' "
                            f"conflicts with '{existing}'"
                        ),
                        path=record.path,
                    )
                )
            else:
                first_seen[record.id] = record.path
        return issues

    def _check_paths_inside_root(self, records: Sequence[ArtifactRecord]) -> list[IndexIssue]:
        issues: list[IndexIssue] = []
        for record in records:
            if ".." in PurePosixPath(record.path).parts:
                issues.append(
                    IndexIssue(
                        code="PATH_OUTSIDE_ROOT",
                        message=f"Artifact '{record.id}' path escapes the scan root",
                        path=record.path,
                    )
                )
        return issues

"""Indexer failures that must reach the caller."""

from __future__ import annotations

from pathlib import Path


class IndexWriteError(Exception):
    """Raised when the index document cannot be written.

    The previous index file, if any, is left untouched.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write artifact index to {path}: {reason}")


class DuplicateArtifactError(Exception):
    """Raised under ``duplicate_policy="error"`` when two files share an id."""

    def __init__(self, artifact_id: str, paths: list[str]) -> None:
        self.artifact_id = artifact_id
        self.paths = paths
        super().__init__(f"Duplicate artifact id '{artifact_id}': {', '.join(paths)}")

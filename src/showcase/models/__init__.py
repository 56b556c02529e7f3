"""Pydantic domain models for the artifact showcase."""

from showcase.models.artifact import ArtifactDraft, ArtifactIndex, ArtifactRecord
from showcase.models.errors import IndexIssue, ScanResult

__all__ = [
    "ArtifactDraft",
    "ArtifactIndex",
    "ArtifactRecord",
    "IndexIssue",
    "ScanResult",
]

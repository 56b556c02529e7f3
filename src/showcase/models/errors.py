"""Structured issues reported while scanning, extracting and loading."""

from __future__ import annotations

from pydantic import BaseModel, Field

from showcase.models.artifact import ArtifactRecord


class IndexIssue(BaseModel):
    """A recoverable problem attached to a file or record."""

    code: str
    message: str
    path: str | None = None


class ScanResult(BaseModel):
    """Records produced by one scan plus everything that was skipped or adjusted."""

    records: list[ArtifactRecord] = Field(default_factory=list)
    errors: list[IndexIssue] = Field(default_factory=list)
    warnings: list[IndexIssue] = Field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.errors and not self.warnings

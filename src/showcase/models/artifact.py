"""Artifact record, draft and index envelope models."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import PurePosixPath, PureWindowsPath
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator


def _utcnow() -> datetime:
    return datetime.now(UTC)


def unique_tags(tags: Iterable[str]) -> list[str]:
    """Drop blanks and duplicates, keeping first-seen order."""
    seen: dict[str, None] = {}
    for tag in tags:
        tag = tag.strip()
        if tag:
            seen.setdefault(tag, None)
    return list(seen)


class ArtifactRecord(BaseModel):
    """One indexed component file."""

    id: str
    name: str
    description: str = ""
    artifact_type: str = Field(alias="type")
    tags: list[str] = Field(default_factory=list)
    path: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = {"populate_by_name": True, "frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _default_updated_at(cls, data: Any) -> Any:
        # Older index files only carry createdAt
        if isinstance(data, dict):
            has_updated = "updatedAt" in data or "updated_at" in data
            created = data.get("createdAt", data.get("created_at"))
            if not has_updated and created is not None:
                data = {**data, "updatedAt": created}
        return data

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_never_null(cls, value: Any) -> Any:
        if value is None:
            return []
        return value

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, value: list[str]) -> list[str]:
        return unique_tags(value)

    @field_validator("path")
    @classmethod
    def _path_is_relative(cls, value: str) -> str:
        posix = value.replace("\\", "/")
        if PurePosixPath(posix).is_absolute() or PureWindowsPath(value).is_absolute():
            raise ValueError(f"artifact path must be relative to the scan root, got '{value}'")
        return posix

    @property
    def category(self) -> str:
        """Alias for ``artifact_type``."""
        return self.artifact_type

    @property
    def module(self) -> str:
        """Loadable reference: the record path without its file extension."""
        return str(PurePosixPath(self.path).with_suffix(""))


class ArtifactDraft(BaseModel):
    """Metadata describing a new artifact, before it has an id or timestamps."""

    name: str
    description: str = ""
    artifact_type: str = Field("component", alias="type")
    tags: list[str] = Field(default_factory=list)
    path: str = ""

    model_config = {"populate_by_name": True}

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_never_null(cls, value: Any) -> Any:
        return [] if value is None else value


class ArtifactIndex(BaseModel):
    """The generated index document: ``{artifacts, generatedAt, count}``."""

    artifacts: list[ArtifactRecord] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=_utcnow, alias="generatedAt")
    count: int = 0

    model_config = {"populate_by_name": True}

    @classmethod
    def build(
        cls, artifacts: Iterable[ArtifactRecord], generated_at: datetime | None = None
    ) -> ArtifactIndex:
        """Wrap records with a timestamp and a matching count."""
        records = list(artifacts)
        return cls(
            artifacts=records,
            generated_at=generated_at or _utcnow(),
            count=len(records),
        )

    @property
    def count_matches(self) -> bool:
        return self.count == len(self.artifacts)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)

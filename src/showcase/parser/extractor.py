"""Metadata extraction: one component file's text + path -> ``ArtifactRecord``."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path, PurePosixPath

from showcase.models.artifact import ArtifactRecord, unique_tags
from showcase.parser.docblock import DocBlock, find_doc_comment, parse_doc_comment, split_tags
from showcase.parser.naming import derive_id, derive_name
from showcase.settings import IndexerConfig

logger = logging.getLogger("showcase.parser")

# (keyword, inferred type, inferred tags); first keyword hit decides the type
_KEYWORD_RULES: tuple[tuple[str, str, tuple[str, ...]], ...] = (
    ("chart", "visualization", ("chart", "visualization")),
    ("table", "data-display", ("table", "data")),
    ("form", "input", ("form", "input")),
)


def infer_from_content(content: str) -> tuple[str | None, list[str]]:
    """Case-insensitive keyword scan.  Returns ``(type or None, tags)``."""
    lowered = content.lower()
    inferred_type: str | None = None
    tags: list[str] = []
    for keyword, kind, keyword_tags in _KEYWORD_RULES:
        if keyword in lowered:
            if inferred_type is None:
                inferred_type = kind
            tags.extend(keyword_tags)
    return inferred_type, tags


class MetadataExtractor:
    """Derives an :class:`ArtifactRecord` from a file's content and location.

    Field priority, highest first:

    - ``type``: ``@type`` annotation, containing subdirectory, content
      keyword, ``config.default_type``.
    - ``tags``: ``@tags`` annotation alone; otherwise the containing
      subdirectory followed by content-keyword tags.
    - ``name``: ``@title`` / ``@name``, then the filename.
    - ``description``: ``@description``, the comment's summary line, then
      ``"<name> component"``.

    :meth:`extract` never raises; anything unexpected degrades to the
    filename-derived defaults.
    """

    def __init__(self, config: IndexerConfig) -> None:
        self._config = config

    def relative_path(self, path: Path | str) -> PurePosixPath:
        """Express *path* relative to the scan root (POSIX separators)."""
        candidate = Path(path)
        if candidate.is_absolute():
            for root in (self._config.scan_root, self._config.scan_root.resolve()):
                try:
                    return PurePosixPath(candidate.relative_to(root.absolute()).as_posix())
                except ValueError:
                    continue
            logger.warning("%s is outside scan root %s", path, self._config.scan_root)
            return PurePosixPath(candidate.name)
        if not self._config.scan_root.is_absolute():
            try:
                return PurePosixPath(candidate.relative_to(self._config.scan_root).as_posix())
            except ValueError:
                pass
        return PurePosixPath(candidate.as_posix())

    def extract(
        self,
        content: str,
        path: Path | str,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> ArtifactRecord:
        rel_path = self.relative_path(path)
        created = created_at or datetime.now(UTC)
        updated = updated_at or created
        defaults = self._defaults(rel_path, created, updated)
        try:
            return self._extract(content or "", rel_path, defaults)
        except Exception as exc:
            logger.warning("Falling back to default metadata for %s: %s", rel_path, exc)
            return ArtifactRecord(**defaults)

    # -- internal ------------------------------------------------------------

    def _defaults(
        self, rel_path: PurePosixPath, created: datetime, updated: datetime
    ) -> dict[str, object]:
        stem = rel_path.stem
        name = derive_name(stem)
        return {
            "id": derive_id(stem),
            "name": name,
            "description": f"{name} component",
            "path": str(rel_path),
            "artifact_type": self._config.default_type,
            "tags": [],
            "created_at": created,
            "updated_at": updated,
        }

    def _extract(
        self, content: str, rel_path: PurePosixPath, defaults: dict[str, object]
    ) -> ArtifactRecord:
        fields = dict(defaults)

        directory = rel_path.parent.as_posix()
        subdirectory = directory if directory not in ("", ".") else None
        content_type, content_tags = infer_from_content(content)
        fields["artifact_type"] = subdirectory or content_type or self._config.default_type

        body = find_doc_comment(content)
        block = parse_doc_comment(body) if body is not None else DocBlock()
        if block.summary:
            fields["description"] = block.summary

        title = block.get("title", "name")
        if title:
            fields["name"] = title
        description = block.get("description")
        if description:
            fields["description"] = description
        explicit_type = block.get("type")
        if explicit_type:
            fields["artifact_type"] = explicit_type

        explicit_tags = split_tags(block.get("tags") or "")
        if explicit_tags:
            fields["tags"] = explicit_tags
        else:
            inferred = [subdirectory] if subdirectory else []
            fields["tags"] = unique_tags(inferred + content_tags)

        return ArtifactRecord(**fields)

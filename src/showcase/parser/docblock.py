"""Documentation-comment scraping for component source files.

Only the first ``/** ... */`` block of a file is considered.  Inside it,
lines of the form ``@key value`` are annotations; the first other non-empty
line is the summary.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_DOC_COMMENT_RE = re.compile(r"/\*\*\s*([\s\S]*?)\s*\*/")
_ANNOTATION_RE = re.compile(r"^@(\w+)(?:\s+(.*))?$")
_LEADING_STAR_RE = re.compile(r"^\s*\*+\s?")


@dataclass
class DocBlock:
    """Parsed contents of one documentation comment."""

    summary: str | None = None
    annotations: dict[str, str] = field(default_factory=dict)

    def get(self, *keys: str) -> str | None:
        """Return the first non-empty annotation among *keys*."""
        for key in keys:
            value = self.annotations.get(key)
            if value:
                return value
        return None


def find_doc_comment(content: str) -> str | None:
    """Return the body of the first documentation comment, or ``None``."""
    if not content:
        return None
    match = _DOC_COMMENT_RE.search(content)
    return match.group(1) if match else None


def _clean_line(line: str) -> str:
    return _LEADING_STAR_RE.sub("", line).strip()


def parse_doc_comment(body: str) -> DocBlock:
    """Split a comment body into summary text and annotations.

    Annotation keys are lowercased; when a key repeats, the first value wins.
    Annotations without a value are ignored, and a malformed ``@`` line
    (``@title: Foo``) is never taken as the summary.
    """
    block = DocBlock()
    for raw_line in body.splitlines():
        line = _clean_line(raw_line)
        if not line:
            continue
        match = _ANNOTATION_RE.match(line)
        if match:
            key, value = match.group(1).lower(), (match.group(2) or "").strip()
            if value and key not in block.annotations:
                block.annotations[key] = value
            continue
        if block.summary is None and not line.startswith("@"):
            block.summary = line
    return block


def split_tags(value: str) -> list[str]:
    """``"data, table,,data"`` -> ``["data", "table"]``."""
    seen: dict[str, None] = {}
    for part in value.split(","):
        tag = part.strip()
        if tag:
            seen.setdefault(tag, None)
    return list(seen)

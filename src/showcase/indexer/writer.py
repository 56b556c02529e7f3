"""Index file persistence: atomic write, tolerant read."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

from pydantic import ValidationError

from showcase.indexer.errors import IndexWriteError
from showcase.models.artifact import ArtifactIndex

logger = logging.getLogger("showcase.indexer")


def _published_mode(output_path: Path) -> int:
    """Mode for the published index: keep an existing file's mode, else honour the umask."""
    try:
        return stat.S_IMODE(output_path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_index(index: ArtifactIndex, output_path: Path) -> None:
    """Write *index* as JSON, all-or-nothing.

    The document goes to a temporary file next to *output_path* and is then
    moved over it with :func:`os.replace`.  The result gets the mode of the
    file it replaces, or the umask-derived default for a new file.
    Raises :class:`IndexWriteError`.
    """
    payload = index.to_json() + "\n"
    tmp_name: str | None = None
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{output_path.name}.", suffix=".tmp", dir=output_path.parent
        )
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
        os.chmod(tmp_name, _published_mode(output_path))
        os.replace(tmp_name, output_path)
        tmp_name = None
    except OSError as exc:
        raise IndexWriteError(output_path, str(exc)) from exc
    finally:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)


def read_index(path: Path) -> ArtifactIndex | None:
    """Load an index document; ``None`` when it is absent or unreadable."""
    if not path.is_file():
        logger.warning("Artifact index not found: %s", path)
        return None
    try:
        return ArtifactIndex.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValidationError) as exc:
        logger.error("Artifact index %s is unreadable: %s", path, exc)
        return None

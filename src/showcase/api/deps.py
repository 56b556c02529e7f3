"""Dependency injection for FastAPI: ArtifactStore singleton."""

from __future__ import annotations

from showcase.service.artifact_store import ArtifactStore

_artifact_store: ArtifactStore | None = None


def init_artifact_store(store: ArtifactStore) -> None:
    """Set the global ArtifactStore (called at app startup)."""
    global _artifact_store  # noqa: PLW0603
    _artifact_store = store


def get_artifact_store() -> ArtifactStore:
    """FastAPI ``Depends`` provider for ArtifactStore."""
    if _artifact_store is None:
        raise RuntimeError("ArtifactStore not initialised; call init_artifact_store() first")
    return _artifact_store


def reset_artifact_store() -> None:
    """Clear the global ArtifactStore (for tests)."""
    global _artifact_store  # noqa: PLW0603
    _artifact_store = None

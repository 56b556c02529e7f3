"""Artifact browsing endpoints: list/search, lookup, component, create."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query

from showcase.api.deps import get_artifact_store
from showcase.api.schemas import (
    ArtifactCreateRequest,
    ArtifactListResponse,
    ComponentResponse,
)
from showcase.models.artifact import ArtifactDraft, ArtifactRecord
from showcase.service.artifact_store import ArtifactStore
from showcase.service.registry import ComponentResolutionError

router = APIRouter()


@router.get("", response_model=ArtifactListResponse)
async def list_artifacts(
    search: str | None = None,
    type: str | None = None,  # noqa: A002
    tag: list[str] = Query(default=[]),  # noqa: B008
    store: ArtifactStore = Depends(get_artifact_store),  # noqa: B008
) -> ArtifactListResponse:
    """List artifacts, optionally filtered by search term, type and tags."""
    if search or type or tag:
        artifacts = store.search(term=search, artifact_type=type, tags=tag)
    else:
        artifacts = store.list_all()
    return ArtifactListResponse(artifacts=artifacts, count=len(artifacts))


@router.get("/{artifact_id}", response_model=ArtifactRecord)
async def get_artifact(
    artifact_id: str,
    store: ArtifactStore = Depends(get_artifact_store),  # noqa: B008
) -> ArtifactRecord:
    """Get one artifact's metadata."""
    record = store.get_by_id(artifact_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Artifact '{artifact_id}' not found")
    return record


@router.get("/{artifact_id}/component", response_model=ComponentResponse)
async def get_component(
    artifact_id: str,
    store: ArtifactStore = Depends(get_artifact_store),  # noqa: B008
) -> ComponentResponse:
    """Resolve and load the component source behind an artifact."""
    handle = store.resolve_loadable(artifact_id)
    if handle is None:
        raise HTTPException(
            status_code=404, detail=f"No loadable component for artifact '{artifact_id}'"
        )
    try:
        component = handle.materialize()
    except ComponentResolutionError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from None
    return ComponentResponse(**asdict(component))


@router.post(
    "",
    response_model=ArtifactRecord,
    status_code=201,
)
async def create_artifact(
    body: ArtifactCreateRequest,
    store: ArtifactStore = Depends(get_artifact_store),  # noqa: B008
) -> ArtifactRecord:
    """Describe a new artifact.  Returns the completed record; nothing is stored."""
    record = store.create(ArtifactDraft.model_validate(body.model_dump()))
    if record is None:
        raise HTTPException(status_code=422, detail="Invalid artifact draft")
    return record

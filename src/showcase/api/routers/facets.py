"""Facet listing endpoint: GET /facets."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from showcase.api.deps import get_artifact_store
from showcase.api.schemas import FacetsResponse
from showcase.service.artifact_store import ArtifactStore

router = APIRouter()


@router.get("", response_model=FacetsResponse)
async def list_facets(
    store: ArtifactStore = Depends(get_artifact_store),  # noqa: B008
) -> FacetsResponse:
    """All types and tags present in the snapshot, for building filters."""
    return FacetsResponse(types=store.types(), tags=store.tags())

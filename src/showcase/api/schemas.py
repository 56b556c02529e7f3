"""API request/response Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from showcase.models.artifact import ArtifactRecord


class ArtifactListResponse(BaseModel):
    """Response for GET /artifacts."""

    artifacts: list[ArtifactRecord] = []
    count: int = 0


class FacetsResponse(BaseModel):
    """Response for GET /facets."""

    types: list[str] = []
    tags: list[str] = []


class ComponentResponse(BaseModel):
    """Response for GET /artifacts/{artifact_id}/component."""

    artifact_id: str
    module: str = Field(description="Record path without its file extension")
    file: str
    source: str


class ArtifactCreateRequest(BaseModel):
    """Request body for POST /artifacts."""

    name: str
    description: str = ""
    type: str = "component"
    tags: list[str] = Field(default_factory=list)
    path: str = ""


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = ""
    artifacts: int = 0

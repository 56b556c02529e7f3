"""Runtime query and component-resolution services."""

from showcase.service.artifact_store import ArtifactStore
from showcase.service.registry import (
    ComponentRegistry,
    ComponentResolutionError,
    ComponentSource,
    LazyComponent,
    UnregisteredComponentError,
)

__all__ = [
    "ArtifactStore",
    "ComponentRegistry",
    "ComponentResolutionError",
    "ComponentSource",
    "LazyComponent",
    "UnregisteredComponentError",
]

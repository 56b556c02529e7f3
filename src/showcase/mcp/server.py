"""FastMCP server exposing the artifact snapshot as MCP tools.

Run via::

    showcase-mcp                       # reads .env (default: stdio)
    MCP_TRANSPORT=http showcase-mcp    # streamable HTTP on port 9000

The snapshot is loaded once at startup from the index file (or the scan
root when ``SOURCE=directory``).  ``rebuild_index`` rescans, rewrites the
index and swaps in the new snapshot.
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from showcase import __version__
from showcase.indexer.builder import build_index
from showcase.indexer.errors import DuplicateArtifactError, IndexWriteError
from showcase.indexer.writer import write_index
from showcase.models.artifact import ArtifactRecord
from showcase.service.artifact_store import ArtifactStore
from showcase.service.registry import ComponentResolutionError
from showcase.settings import Settings

# ---------------------------------------------------------------------------
# Server + shared state
# ---------------------------------------------------------------------------

logger = logging.getLogger("showcase.mcp")

mcp = FastMCP("Artifact Showcase")
_settings: Settings | None = None
_store: ArtifactStore | None = None


def _require_store() -> ArtifactStore:
    if _store is None:
        raise ToolError("Artifact store not initialised")
    return _store


def _summary_line(record: ArtifactRecord) -> str:
    tags = f"  [{', '.join(record.tags)}]" if record.tags else ""
    return f"  {record.id}  {record.name}  ({record.artifact_type}){tags}"


def _format_list(records: list[ArtifactRecord], heading: str) -> str:
    if not records:
        return f"{heading}: none"
    lines = [f"{heading} ({len(records)}):"]
    lines.extend(_summary_line(r) for r in records)
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


@mcp.tool
def list_artifacts() -> str:
    """List every indexed artifact (id, name, type, tags), ordered by name."""
    return _format_list(_require_store().list_all(), "Artifacts")


@mcp.tool
def search_artifacts(
    term: str | None = None,
    artifact_type: str | None = None,
    tags: list[str] | None = None,
) -> str:
    """Search artifacts.  All given criteria must match.

    Args:
        term: Case-insensitive text matched against name, description and tags.
        artifact_type: Exact type, e.g. ``visualization`` or ``data-display``.
        tags: Tags that must all be present.
    """
    store = _require_store()
    matches = store.search(term=term, artifact_type=artifact_type, tags=tags or ())
    return _format_list(matches, "Matches")


@mcp.tool
def get_artifact(artifact_id: str) -> str:
    """Show the full metadata of one artifact.

    Args:
        artifact_id: Id as shown by ``list_artifacts``.
    """
    record = _require_store().get_by_id(artifact_id)
    if record is None:
        raise ToolError(f"Artifact '{artifact_id}' not found")
    return record.model_dump_json(by_alias=True, indent=2)


@mcp.tool
def get_component_source(artifact_id: str) -> str:
    """Return the source code of an artifact's component.

    Args:
        artifact_id: Id as shown by ``list_artifacts``.
    """
    logger.info("get_component_source called (artifact_id=%s)", artifact_id)
    handle = _require_store().resolve_loadable(artifact_id)
    if handle is None:
        raise ToolError(f"No loadable component for artifact '{artifact_id}'")
    try:
        component = handle.materialize()
    except ComponentResolutionError as exc:
        raise ToolError(str(exc)) from exc
    return f"// {component.file}\n{component.source}"


@mcp.tool
def rebuild_index() -> str:
    """Rescan the component directory, rewrite the index file and reload."""
    global _store  # noqa: PLW0603
    if _settings is None:
        raise ToolError("Settings not initialised")
    config = _settings.indexer_config()
    logger.info("rebuild_index called (scan_root=%s)", config.scan_root)
    try:
        index, result = build_index(config)
    except DuplicateArtifactError as exc:
        raise ToolError(str(exc)) from exc
    if any(issue.code == "SCAN_ROOT_MISSING" for issue in result.errors):
        raise ToolError(f"Artifacts directory not found: {config.scan_root}")
    try:
        write_index(index, config.output_path)
    except IndexWriteError as exc:
        raise ToolError(str(exc)) from exc

    _store = ArtifactStore(index.artifacts, config, issues=[*result.errors, *result.warnings])
    parts = [f"Indexed {index.count} artifacts -> {config.output_path}"]
    for issue in [*result.errors, *result.warnings]:
        parts.append(f"  {issue.code}: {issue.message}")
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Run the MCP server using settings from environment / .env file."""
    global _settings, _store  # noqa: PLW0603
    settings = Settings()

    logging.basicConfig(level=settings.log_level.upper())
    logger.info(
        "Artifact Showcase MCP Server v%s starting (transport=%s)",
        __version__,
        settings.mcp_transport,
    )

    _settings = settings
    _store = ArtifactStore.from_settings(settings)

    if settings.mcp_transport == "stdio":
        mcp.run(transport="stdio")
    else:
        mcp.run(
            transport=settings.mcp_transport,
            host=settings.mcp_server_host,
            port=settings.mcp_server_port,
            log_level=settings.log_level.lower(),
        )


if __name__ == "__main__":
    main()

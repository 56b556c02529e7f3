"""Shared settings loaded from environment / .env file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

DuplicatePolicy = Literal["suffix", "first", "error"]


@dataclass(frozen=True)
class IndexerConfig:
    """Explicit configuration passed to the scanner, extractor and store.

    Built from :class:`Settings` by entry points; tests construct it directly.
    """

    scan_root: Path
    output_path: Path
    ignored_files: frozenset[str] = frozenset({".gitkeep", ".DS_Store", "README.md"})
    ignored_dirs: frozenset[str] = frozenset({"utils", "helpers", "node_modules"})
    default_type: str = "component"
    component_extensions: tuple[str, ...] = (".jsx", ".tsx")
    duplicate_policy: DuplicatePolicy = "suffix"
    static_components: dict[str, str] = field(default_factory=dict)
    allow_dynamic_resolution: bool = True


class Settings(BaseSettings):
    """Configuration for the indexer CLI, REST API and MCP server.

    Values are read from environment variables and from a ``.env`` file
    in the working directory.  List-valued options accept JSON
    (``IGNORED_DIRS='["utils", "helpers"]'``).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Shared
    log_level: str = "INFO"

    # Indexer
    scan_root: Path = Path("src/artifacts")
    output_path: Path = Path("src/artifactsIndex.json")
    ignored_files: list[str] = [".gitkeep", ".DS_Store", "README.md"]
    ignored_dirs: list[str] = ["utils", "helpers", "node_modules"]
    component_extensions: list[str] = [".jsx", ".tsx"]
    default_type: str = "component"
    duplicate_policy: DuplicatePolicy = "suffix"

    # Runtime snapshot: read the generated index, or re-derive from scan_root
    source: Literal["index", "directory"] = "index"
    allow_dynamic_resolution: bool = True
    static_components: dict[str, str] = {
        "barchart": "BarChart.jsx",
        "datatable": "DataTable.jsx",
    }

    # REST API
    api_server_host: str = "localhost"
    api_server_port: int = 8000
    port: int | None = None  # Cloud Run injects PORT; takes precedence over api_server_port

    @property
    def effective_port(self) -> int:
        """Return the port to listen on (Cloud Run PORT takes precedence)."""
        return self.port if self.port is not None else self.api_server_port

    # MCP
    mcp_transport: Literal["stdio", "http", "sse"] = "stdio"
    mcp_server_host: str = "localhost"
    mcp_server_port: int = 9000

    def indexer_config(self) -> IndexerConfig:
        """Freeze the indexer-related settings into an :class:`IndexerConfig`."""
        return IndexerConfig(
            scan_root=self.scan_root,
            output_path=self.output_path,
            ignored_files=frozenset(self.ignored_files),
            ignored_dirs=frozenset(self.ignored_dirs),
            default_type=self.default_type,
            component_extensions=tuple(ext.lower() for ext in self.component_extensions),
            duplicate_policy=self.duplicate_policy,
            static_components=dict(self.static_components),
            allow_dynamic_resolution=self.allow_dynamic_resolution,
        )

"""Offline indexing: scan component files and write the JSON index."""

from showcase.indexer.builder import build_index, run_indexer
from showcase.indexer.errors import DuplicateArtifactError, IndexWriteError
from showcase.indexer.scanner import DirectoryScanner
from showcase.indexer.writer import read_index, write_index

__all__ = [
    "DirectoryScanner",
    "DuplicateArtifactError",
    "IndexWriteError",
    "build_index",
    "read_index",
    "run_indexer",
    "write_index",
]

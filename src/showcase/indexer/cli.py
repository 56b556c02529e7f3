"""``showcase-index`` entry point: rescan the component tree and rewrite the index."""

from __future__ import annotations

import logging
import sys

from showcase.indexer.builder import run_indexer
from showcase.settings import Settings


def main() -> None:
    """Run the indexer using settings from environment / .env file."""
    settings = Settings()
    logging.basicConfig(level=settings.log_level.upper(), format="%(message)s")
    sys.exit(run_indexer(settings.indexer_config()))


if __name__ == "__main__":
    main()

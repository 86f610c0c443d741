"""
Build script: crawls the image tree and writes the static catalog files
(public/manifest.json, manifest.source.json, public/data/*.json).

Usage:
    uv run python build_catalog.py            # all stages
    uv run python build_catalog.py crawl      # or clean / paginate
"""

import argparse
import logging
import sys

from catalog.config import BuildConfig
from catalog.errors import CatalogBuildError
from catalog.pipeline import STAGES

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build the static product catalog.")
    parser.add_argument("stage", nargs="?", default="all", choices=sorted(STAGES))
    args = parser.parse_args(argv)

    config = BuildConfig.from_env()
    try:
        STAGES[args.stage](config)
    except CatalogBuildError as exc:
        logger.error("Stage '%s' failed: %s", args.stage, exc)
        return 1
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    sys.exit(main())

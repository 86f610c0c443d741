"""
Static JSON output.

Every file is written to a temporary sibling and moved into place, so readers
never see a half-written document. Output is deterministic: stable key order,
2-space indent, UTF-8, trailing newline, no timestamps.
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any

from catalog.errors import FileSystemError
from catalog.paginate.pages import Page
from models import CatalogIndex, dump

logger = logging.getLogger(__name__)

INDEX_FILENAME = "manifest.json"
_PAGE_FILE = re.compile(r"^page-(\d+)\.json$")


def render_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def read_json(path: Path) -> Any:
    """Read and decode a JSON file. I/O failures raise FileSystemError; bad JSON raises ValueError."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FileSystemError(path, exc) from exc
    return json.loads(text)


def write_json(path: Path, payload: Any) -> None:
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(render_json(payload), encoding="utf-8")
        os.replace(tmp_path, path)
    except OSError as exc:
        raise FileSystemError(path, exc) from exc
    logger.debug("Wrote %s", path)


def publish_catalog(data_dir: Path, pages: list[Page], index: CatalogIndex) -> None:
    """Write page-N.json files, then the index, then drop pages from older, larger builds."""
    for page in pages:
        write_json(data_dir / page.filename, [dump(product) for product in page.products])
        logger.info("Wrote %d items to %s", len(page.products), data_dir / page.filename)

    write_json(data_dir / INDEX_FILENAME, dump(index))
    logger.info("Wrote catalog index to %s", data_dir / INDEX_FILENAME)

    _remove_stale_pages(data_dir, index.total_pages)


def _remove_stale_pages(data_dir: Path, total_pages: int) -> None:
    try:
        names = os.listdir(data_dir)
    except OSError as exc:
        raise FileSystemError(data_dir, exc) from exc
    for name in sorted(names):
        match = _PAGE_FILE.match(name)
        if match is None or 1 <= int(match.group(1)) <= total_pages:
            continue
        stale = data_dir / name
        try:
            stale.unlink()
        except OSError as exc:
            raise FileSystemError(stale, exc) from exc
        logger.info("Removed stale page %s", stale)

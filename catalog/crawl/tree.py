"""
Directory tree crawl.

  1. Walk the image root depth-first (pre-order) with an explicit stack.
  2. Record every file/folder as an ArenaEntry in a flat list; parents and
     children reference each other by index.
  3. A folder holding a product.json sidecar becomes a product entry. The
     sidecar itself is never listed as a child.
  4. The arena is serialized either as the nested legacy tree (to_tree) or as
     a flat product list (products) for the later build stages.

Paths are joined with "/" and start at the root folder's own name, so
"images/brand/coat/1.jpg" is usable as a site-relative URL on any OS.
"""
from __future__ import annotations

import json
import logging
import os
import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from catalog.errors import FileSystemError, MalformedSidecar
from models import STRUCTURAL_FIELDS, CatalogNode, Product, Sidecar, dump

logger = logging.getLogger(__name__)

SIDECAR_FILENAME = "product.json"
IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".webp", ".gif", ".avif"})


@dataclass
class ArenaEntry:
    path: str
    name: str
    kind: str
    parent: int | None = None
    children: list[int] = field(default_factory=list)
    sidecar: Sidecar | None = None

    @property
    def is_product(self) -> bool:
        return self.sidecar is not None


@dataclass
class NodeArena:
    """Flat pre-order list of crawled entries. Index 0 is the crawl root."""

    entries: list[ArenaEntry] = field(default_factory=list)

    def add(self, entry: ArenaEntry) -> int:
        index = len(self.entries)
        self.entries.append(entry)
        if entry.parent is not None:
            self.entries[entry.parent].children.append(index)
        return index

    def to_tree(self) -> CatalogNode:
        """Nested CatalogNode tree (the legacy whole-catalog manifest)."""
        if not self.entries:
            raise ValueError("cannot build a tree from an empty arena")
        # Children always sit after their parent in pre-order, so a reverse
        # sweep builds every subtree before the node that owns it.
        built: dict[int, CatalogNode] = {}
        for index in range(len(self.entries) - 1, -1, -1):
            entry = self.entries[index]
            children = [built.pop(child) for child in entry.children]
            built[index] = _build_node(entry, children)
        return built[0]

    def products(self) -> list[Product]:
        """Product entries flattened in crawl order, with raw ids."""
        products: list[Product] = []
        for entry in self.entries:
            if entry.sidecar is None:
                continue
            data = dump(entry.sidecar)
            data.setdefault("id", entry.name)
            data.setdefault("name", entry.name)
            if "images" not in data:
                data["images"] = self._image_files(entry)
            data["path"] = entry.path
            products.append(Product.model_validate(data))
        return products

    def _image_files(self, entry: ArenaEntry) -> list[str]:
        images: list[str] = []
        for child_index in entry.children:
            child = self.entries[child_index]
            if child.kind == "file" and Path(child.name).suffix.lower() in IMAGE_EXTENSIONS:
                images.append(child.path)
        return images


def crawl(root: Path | str, sidecar_name: str = SIDECAR_FILENAME) -> NodeArena:
    """Walk `root` and return the arena of everything beneath it (root included)."""
    root = Path(root)
    arena = NodeArena()
    root_name = root.name if root.name not in {"", ".."} else root.resolve().name
    stack: list[tuple[Path, str, int | None]] = [(root, root_name, None)]

    while stack:
        fs_path, rel_path, parent = stack.pop()
        # The root may itself be a symlinked folder; below it links are never followed.
        mode = _stat(fs_path, follow_symlinks=parent is None).st_mode
        is_folder = stat.S_ISDIR(mode)
        index = arena.add(
            ArenaEntry(
                path=rel_path,
                name=rel_path.rsplit("/", 1)[-1],
                kind="folder" if is_folder else "file",
                parent=parent,
            )
        )
        if not is_folder:
            continue

        names = _list_dir(fs_path)
        if sidecar_name in names:
            names.remove(sidecar_name)
            arena.entries[index].sidecar = _load_sidecar(
                fs_path / sidecar_name, f"{rel_path}/{sidecar_name}"
            )

        # Reversed so the stack pops children in listing order.
        for name in reversed(names):
            stack.append((fs_path / name, f"{rel_path}/{name}", index))

    product_count = sum(1 for entry in arena.entries if entry.is_product)
    logger.info(
        "Crawled %d entries (%d products) under %s", len(arena.entries), product_count, root
    )
    return arena


def parse_sidecar(raw: bytes, path: str) -> Sidecar:
    """Decode and validate sidecar bytes. Raises MalformedSidecar."""
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise MalformedSidecar(path, f"not valid JSON ({exc})") from exc
    if not isinstance(payload, dict):
        raise MalformedSidecar(path, f"expected an object, got {type(payload).__name__}")

    ignored = sorted(key for key in payload if key in STRUCTURAL_FIELDS)
    if ignored:
        logger.warning("Sidecar %s may not override %s; ignoring", path, ", ".join(ignored))
    data = {key: value for key, value in payload.items() if key not in STRUCTURAL_FIELDS}

    try:
        return Sidecar.model_validate(data)
    except ValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err["loc"])
        raise MalformedSidecar(path, f"invalid field(s): {fields or 'unknown'}") from exc


def _load_sidecar(fs_path: Path, rel_path: str) -> Sidecar | None:
    if not fs_path.is_file():
        logger.warning(
            "Sidecar %s is not a regular file; treating folder as a plain folder", rel_path
        )
        return None
    try:
        raw = fs_path.read_bytes()
    except OSError as exc:
        raise FileSystemError(fs_path, exc) from exc
    try:
        return parse_sidecar(raw, rel_path)
    except MalformedSidecar as exc:
        logger.warning("%s; treating folder as a plain folder", exc)
        return None


def _build_node(entry: ArenaEntry, children: list[CatalogNode]) -> CatalogNode:
    extras: dict[str, Any] = dump(entry.sidecar) if entry.sidecar is not None else {}
    name = extras.pop("name", entry.name)
    return CatalogNode(
        path=entry.path,
        name=name,
        kind=entry.kind,
        children=children if entry.kind == "folder" else None,
        is_product=entry.is_product,
        **extras,
    )


def _stat(path: Path, follow_symlinks: bool = False) -> os.stat_result:
    try:
        return os.stat(path, follow_symlinks=follow_symlinks)
    except OSError as exc:
        raise FileSystemError(path, exc) from exc


def _list_dir(path: Path) -> list[str]:
    try:
        return sorted(os.listdir(path))
    except OSError as exc:
        raise FileSystemError(path, exc) from exc

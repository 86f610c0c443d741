import json
from pathlib import Path
from typing import Any

from catalog.config import BuildConfig
from models import Product, Variant


def write_tree(root: Path, files: dict[str, Any]) -> None:
    """Create files under root. dict/list values are written as JSON, str/bytes verbatim."""
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        elif isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content), encoding="utf-8")


def make_config(base: Path, **overrides: Any) -> BuildConfig:
    options: dict[str, Any] = {
        "images_dir": base / "public" / "images",
        "public_dir": base / "public",
        "source_manifest": base / "manifest.source.json",
        "data_dir": base / "public" / "data",
        "items_per_page": 2,
    }
    options.update(overrides)
    return BuildConfig(**options)


def make_product(
    product_id: str,
    name: str | None = None,
    *,
    brand: str = "Acme",
    images: list[str] | None = None,
    variants: list[Variant] | None = None,
    similar: list[str] | None = None,
    recommended: list[str] | None = None,
) -> Product:
    return Product(
        id=product_id,
        name=name if name is not None else product_id,
        brand=brand,
        images=images if images is not None else [f"images/{product_id}/1.jpg"],
        variants=variants or [],
        similar=similar or [],
        recommended=recommended or [],
    )

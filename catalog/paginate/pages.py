"""
Pagination and index projection.

The full product list is split into fixed-size, 1-indexed pages (the last one
may be short) and summarised into a CatalogIndex that the browser uses to
resolve variant/similar/recommended links without fetching every page.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from catalog.errors import InvalidManifestShape
from models import CatalogIndex, Product, ProductSummary, SourceManifest


@dataclass(frozen=True)
class Page:
    number: int
    products: tuple[Product, ...]

    @property
    def filename(self) -> str:
        return page_filename(self.number)


def page_filename(number: int) -> str:
    return f"page-{number}.json"


def page_count(total: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return math.ceil(total / page_size)


def paginate(products: list[Product], page_size: int) -> list[Page]:
    """Contiguous, order-preserving pages covering every product exactly once."""
    total_pages = page_count(len(products), page_size)
    return [
        Page(
            number=number,
            products=tuple(products[(number - 1) * page_size : number * page_size]),
        )
        for number in range(1, total_pages + 1)
    ]


def build_index(name: str, products: list[Product], page_size: int) -> CatalogIndex:
    return CatalogIndex(
        name=name,
        total_products=len(products),
        total_pages=page_count(len(products), page_size),
        items_per_page=page_size,
        products=[ProductSummary.from_product(product) for product in products],
    )


def load_source_manifest(payload: Any) -> SourceManifest:
    """Validate a decoded manifest.source.json. Raises InvalidManifestShape."""
    if not isinstance(payload, dict):
        raise InvalidManifestShape(f"expected an object, got {type(payload).__name__}")
    if "children" not in payload:
        raise InvalidManifestShape("missing product list 'children'")
    if not isinstance(payload["children"], list):
        raise InvalidManifestShape(
            f"'children' must be a list, got {type(payload['children']).__name__}"
        )
    try:
        return SourceManifest.model_validate(
            {"name": payload.get("name") or "", "children": payload["children"]}
        )
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise InvalidManifestShape(f"{location}: {first['msg']}") from exc

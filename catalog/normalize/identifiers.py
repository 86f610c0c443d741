"""
Product id assignment.

  1. Clean each product's display name and slugify it (falling back to the raw
     id, then to a fixed placeholder) so every id is a non-empty URL token.
  2. Resolve collisions in source order: the first product keeps the bare slug,
     later ones get "-1", "-2", ... from a per-slug counter. Suffixes are never
     reused and a suffixed id already taken by another product is skipped.
  3. Rewrite variant/similar/recommended references from raw ids to the
     resolved ids. References to unknown ids are left untouched.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from catalog.normalize.slugs import clean_display_name, slugify
from models import Product, SourceManifest

logger = logging.getLogger(__name__)

FALLBACK_SLUG = "product"


@dataclass
class SlugCounters:
    """Next suffix to try per base slug, plus every id handed out so far."""

    next_suffix: dict[str, int] = field(default_factory=dict)
    assigned: set[str] = field(default_factory=set)


def derive_slug(clean_name: str, raw_id: str) -> str:
    return slugify(clean_name) or slugify(raw_id) or FALLBACK_SLUG


def resolve_unique_id(base: str, counters: SlugCounters) -> str:
    """Return `base` or the next free `base-N`, recording it in `counters`."""
    if base not in counters.next_suffix and base not in counters.assigned:
        counters.next_suffix[base] = 1
        counters.assigned.add(base)
        return base

    suffix = counters.next_suffix.get(base, 1)
    candidate = f"{base}-{suffix}"
    while candidate in counters.assigned:
        suffix += 1
        candidate = f"{base}-{suffix}"
    counters.next_suffix[base] = suffix + 1
    counters.assigned.add(candidate)
    return candidate


def normalize_products(
    products: list[Product],
    counters: SlugCounters | None = None,
) -> list[Product]:
    """Assign unique slug ids and cleaned names. Returns new Product copies."""
    counters = counters if counters is not None else SlugCounters()
    id_map: dict[str, str] = {}
    renamed: list[Product] = []
    collisions = 0

    for product in products:
        name = clean_display_name(product.name)
        base = derive_slug(name, product.id)
        new_id = resolve_unique_id(base, counters)
        if new_id != base:
            collisions += 1
        # First product carrying a raw id owns it for reference remapping.
        if product.id:
            id_map.setdefault(product.id, new_id)
        renamed.append(product.model_copy(update={"id": new_id, "name": name}, deep=True))

    if collisions:
        logger.info("Resolved %d slug collision(s) with numeric suffixes", collisions)
    return [_remap_references(product, id_map) for product in renamed]


def normalize_manifest(source: SourceManifest) -> SourceManifest:
    return SourceManifest(name=source.name, children=normalize_products(source.children))


def _remap_references(product: Product, id_map: dict[str, str]) -> Product:
    variants = [
        variant.model_copy(
            update={"product_id": id_map.get(variant.product_id, variant.product_id)}
        )
        for variant in product.variants
    ]
    return product.model_copy(
        update={
            "variants": variants,
            "similar": [id_map.get(ref, ref) for ref in product.similar],
            "recommended": [id_map.get(ref, ref) for ref in product.recommended],
        }
    )

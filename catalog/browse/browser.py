"""
Read-side queries over a published CatalogIndex: brand listing, keyword-based
subcategories and cross-reference resolution. Mirrors what the catalog front
end does with data/manifest.json.
"""
from __future__ import annotations

from typing import Literal

from models import CatalogIndex, ProductSummary

# Matched as whole words against the lowercased product name, in this order.
DEFAULT_SUBCATEGORY_KEYWORDS: tuple[str, ...] = (
    "scarpe",
    "magliette",
    "tute",
    "giacca",
    "orologio",
    "profumo",
    "borsa",
    "cintura",
    "zaino",
)
FALLBACK_SUBCATEGORY = "Altro"


class CatalogBrowser:
    def __init__(
        self,
        index: CatalogIndex,
        keywords: tuple[str, ...] = DEFAULT_SUBCATEGORY_KEYWORDS,
        fallback: str = FALLBACK_SUBCATEGORY,
    ) -> None:
        self.index = index
        self.keywords = keywords
        self.fallback = fallback
        self._by_id: dict[str, ProductSummary] = {}
        for product in index.products:
            self._by_id.setdefault(product.id, product)

    def brands(self) -> list[str]:
        """Distinct brands in first-seen order."""
        return list(dict.fromkeys(product.brand for product in self.index.products))

    def subcategory_for(self, product_name: str) -> str:
        padded = f" {product_name.lower()} "
        for keyword in self.keywords:
            if f" {keyword} " in padded:
                return keyword.capitalize()
        return self.fallback

    def subcategories(self, brand: str) -> list[str]:
        return list(
            dict.fromkeys(self.subcategory_for(product.name) for product in self._for_brand(brand))
        )

    def products_for(self, brand: str, subcategory: str | None = None) -> list[ProductSummary]:
        products = self._for_brand(brand)
        if subcategory is None:
            return products
        wanted = subcategory.lower()
        return [p for p in products if self.subcategory_for(p.name).lower() == wanted]

    def get(self, product_id: str) -> ProductSummary | None:
        return self._by_id.get(product_id)

    def related(
        self,
        product: ProductSummary,
        kind: Literal["similar", "recommended"],
    ) -> list[ProductSummary]:
        """Resolve similar/recommended ids; ids missing from the index are dropped."""
        resolved = (self._by_id.get(ref) for ref in getattr(product, kind))
        return [item for item in resolved if item is not None]

    def _for_brand(self, brand: str) -> list[ProductSummary]:
        return [product for product in self.index.products if product.brand == brand]

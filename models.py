from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

# Fields a sidecar may never override on a catalog node.
STRUCTURAL_FIELDS = frozenset({"path", "kind", "children", "isProduct", "is_product"})


class Variant(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True, extra="allow", coerce_numbers_to_str=True
    )

    product_id: str = Field(alias="productId")
    name: str = ""
    image: str | None = None


class Sidecar(BaseModel):
    """
    Contents of a per-folder product.json. Every field is optional; unknown
    keys (price, description, ...) are kept and carried through to the product.
    """

    model_config = ConfigDict(
        populate_by_name=True, extra="allow", coerce_numbers_to_str=True
    )

    id: str | None = None
    name: str | None = None
    brand: str | None = None
    images: list[str] | None = None
    variants: list[Variant] | None = None
    similar: list[str] | None = None
    recommended: list[str] | None = None


class CatalogNode(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True, extra="allow", coerce_numbers_to_str=True
    )

    path: str
    name: str
    kind: Literal["file", "folder"]
    children: list["CatalogNode"] | None = None
    is_product: bool = Field(default=False, alias="isProduct")


class Product(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True, extra="allow", coerce_numbers_to_str=True
    )

    id: str = ""
    name: str = ""
    brand: str = ""
    images: list[str] = Field(default_factory=list)
    variants: list[Variant] = Field(default_factory=list)
    similar: list[str] = Field(default_factory=list)
    recommended: list[str] = Field(default_factory=list)
    path: str | None = None

    @field_validator(
        "id", "name", "brand", "images", "variants", "similar", "recommended", mode="before"
    )
    @classmethod
    def _null_to_default(cls, v: object, info: ValidationInfo) -> object:
        """
        Hand-edited source manifests use null for "not set". Treat it like a
        missing key so id/name fallbacks apply during normalization.
        """
        if v is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return v


class ProductSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    brand: str = ""
    images: list[str] = Field(default_factory=list)
    variants: list[Variant] = Field(default_factory=list)
    similar: list[str] = Field(default_factory=list)
    recommended: list[str] = Field(default_factory=list)

    @classmethod
    def from_product(cls, product: Product) -> "ProductSummary":
        return cls(
            id=product.id,
            name=product.name,
            brand=product.brand,
            images=list(product.images),
            variants=[variant.model_copy() for variant in product.variants],
            similar=list(product.similar),
            recommended=list(product.recommended),
        )


class SourceManifest(BaseModel):
    """Intermediate flat product list passed between build stages (manifest.source.json)."""

    name: str = ""
    children: list[Product]


class CatalogIndex(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    total_products: int = Field(alias="totalProducts")
    total_pages: int = Field(alias="totalPages")
    items_per_page: int = Field(alias="itemsPerPage")
    products: list[ProductSummary] = Field(default_factory=list)


class ProductDetail(BaseModel):
    """A product with its similar/recommended references resolved against the index."""

    product: ProductSummary
    similar: list[ProductSummary] = Field(default_factory=list)
    recommended: list[ProductSummary] = Field(default_factory=list)


def dump(model: BaseModel) -> dict[str, Any]:
    """JSON-ready dict with camelCase aliases and no null fields."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)

"""
Read-only preview API over the published catalog (data/manifest.json + pages).
"""

from pathlib import Path

from fastapi import FastAPI, HTTPException
from pydantic import TypeAdapter

from catalog.browse import CatalogBrowser
from catalog.config import BuildConfig
from catalog.paginate.pages import page_filename
from catalog.publish.writer import INDEX_FILENAME
from models import CatalogIndex, Product, ProductDetail, ProductSummary

DATA_DIR: Path = BuildConfig.from_env().data_dir

_PAGE_ADAPTER = TypeAdapter(list[Product])

app = FastAPI(title="Product Catalog API")


def _load_index() -> CatalogIndex:
    path = DATA_DIR / INDEX_FILENAME
    if not path.exists():
        raise HTTPException(status_code=404, detail="Catalog has not been built yet")
    return CatalogIndex.model_validate_json(path.read_text(encoding="utf-8"))


@app.get("/manifest", response_model=CatalogIndex)
def get_manifest() -> CatalogIndex:
    return _load_index()


@app.get("/pages/{page_number}", response_model=list[Product])
def get_page(page_number: int) -> list[Product]:
    index = _load_index()
    path = DATA_DIR / page_filename(page_number)
    if not 1 <= page_number <= index.total_pages or not path.exists():
        raise HTTPException(status_code=404, detail=f"Page {page_number} not found")
    return _PAGE_ADAPTER.validate_json(path.read_text(encoding="utf-8"))


@app.get("/brands", response_model=list[str])
def list_brands() -> list[str]:
    return CatalogBrowser(_load_index()).brands()


@app.get("/brands/{brand}", response_model=list[str])
def list_subcategories(brand: str) -> list[str]:
    subcategories = CatalogBrowser(_load_index()).subcategories(brand)
    if not subcategories:
        raise HTTPException(status_code=404, detail=f"Brand '{brand}' not found")
    return subcategories


@app.get("/brands/{brand}/{subcategory}", response_model=list[ProductSummary])
def list_brand_products(brand: str, subcategory: str) -> list[ProductSummary]:
    return CatalogBrowser(_load_index()).products_for(brand, subcategory)


@app.get("/products/{product_id}", response_model=ProductDetail)
def get_product(product_id: str) -> ProductDetail:
    browser = CatalogBrowser(_load_index())
    product = browser.get(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product '{product_id}' not found")
    return ProductDetail(
        product=product,
        similar=browser.related(product, "similar"),
        recommended=browser.related(product, "recommended"),
    )

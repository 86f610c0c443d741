from .browser import DEFAULT_SUBCATEGORY_KEYWORDS, FALLBACK_SUBCATEGORY, CatalogBrowser

__all__ = ["CatalogBrowser", "DEFAULT_SUBCATEGORY_KEYWORDS", "FALLBACK_SUBCATEGORY"]

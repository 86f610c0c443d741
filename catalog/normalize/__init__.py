from .identifiers import SlugCounters, normalize_manifest, normalize_products, resolve_unique_id
from .slugs import TRANSLITERATION, clean_display_name, slugify

__all__ = [
    "SlugCounters",
    "TRANSLITERATION",
    "clean_display_name",
    "normalize_manifest",
    "normalize_products",
    "resolve_unique_id",
    "slugify",
]

"""
Build configuration: input/output locations and page size.

Defaults match a Vite-style site layout (public/images in, public/data out).
Every field is overridable through a CATALOG_* environment variable.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _read_env_int(name: str, default: int) -> int:
    """Read env var as a positive int; return default if unset or invalid."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _read_env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    return default


def _read_env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    return Path(raw) if raw else default


@dataclass(frozen=True)
class BuildConfig:
    """Paths and pagination settings. Overridable via CATALOG_* env vars."""

    images_dir: Path = field(default_factory=lambda: Path("public") / "images")
    public_dir: Path = field(default_factory=lambda: Path("public"))
    source_manifest: Path = field(default_factory=lambda: Path("manifest.source.json"))
    data_dir: Path = field(default_factory=lambda: Path("public") / "data")
    items_per_page: int = 50
    rewrite_image_urls: bool = True
    sidecar_name: str = "product.json"
    catalog_name: str | None = None

    @property
    def tree_manifest(self) -> Path:
        """Legacy whole-catalog tree written at the public root."""
        return self.public_dir / "manifest.json"

    @property
    def resolved_catalog_name(self) -> str:
        return self.catalog_name or self.images_dir.name

    @classmethod
    def from_env(cls) -> "BuildConfig":
        """Build config from CATALOG_* env vars, falling back to defaults."""
        defaults = cls()
        return cls(
            images_dir=_read_env_path("CATALOG_IMAGES_DIR", defaults.images_dir),
            public_dir=_read_env_path("CATALOG_PUBLIC_DIR", defaults.public_dir),
            source_manifest=_read_env_path(
                "CATALOG_SOURCE_MANIFEST", defaults.source_manifest
            ),
            data_dir=_read_env_path("CATALOG_DATA_DIR", defaults.data_dir),
            items_per_page=_read_env_int("CATALOG_ITEMS_PER_PAGE", defaults.items_per_page),
            rewrite_image_urls=_read_env_bool(
                "CATALOG_REWRITE_IMAGE_URLS", defaults.rewrite_image_urls
            ),
            sidecar_name=os.getenv("CATALOG_SIDECAR_NAME") or defaults.sidecar_name,
            catalog_name=os.getenv("CATALOG_NAME") or None,
        )

"""
Build stages: crawl -> clean -> paginate.

Each stage is a pure transform (crawl_stage, clean_stage, paginate_stage) plus a
runner that reads its input file and writes its output files. run_all chains
the transforms in memory and writes nothing until every stage has succeeded.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from catalog.config import BuildConfig
from catalog.crawl import crawl
from catalog.errors import InvalidManifestShape
from catalog.normalize import normalize_manifest
from catalog.paginate import (
    DriveThumbnailRewriter,
    Page,
    build_index,
    load_source_manifest,
    paginate,
)
from catalog.publish import publish_catalog, read_json, write_json
from models import CatalogIndex, CatalogNode, SourceManifest, dump

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CrawlResult:
    tree: CatalogNode
    source: SourceManifest


@dataclass(frozen=True)
class CatalogBuild:
    pages: list[Page]
    index: CatalogIndex


def crawl_stage(config: BuildConfig) -> CrawlResult:
    arena = crawl(config.images_dir, config.sidecar_name)
    source = SourceManifest(name=config.resolved_catalog_name, children=arena.products())
    return CrawlResult(tree=arena.to_tree(), source=source)


def clean_stage(source: SourceManifest) -> SourceManifest:
    cleaned = normalize_manifest(source)
    logger.info("Normalized %d product ids", len(cleaned.children))
    return cleaned


def paginate_stage(source: SourceManifest, config: BuildConfig) -> CatalogBuild:
    products = source.children
    if config.rewrite_image_urls:
        rewriter = DriveThumbnailRewriter()
        products = [rewriter.rewrite_product(product) for product in products]

    name = source.name or config.resolved_catalog_name
    pages = paginate(products, config.items_per_page)
    index = build_index(name, products, config.items_per_page)
    logger.info(
        "Found %d products. Splitting into %d pages of %d items each.",
        index.total_products,
        index.total_pages,
        index.items_per_page,
    )
    return CatalogBuild(pages=pages, index=index)


def read_source_manifest(config: BuildConfig) -> SourceManifest:
    try:
        payload = read_json(config.source_manifest)
    except ValueError as exc:
        raise InvalidManifestShape(f"{config.source_manifest} is not valid JSON ({exc})") from exc
    return load_source_manifest(payload)


def run_crawl(config: BuildConfig) -> None:
    result = crawl_stage(config)
    write_json(config.tree_manifest, dump(result.tree))
    write_json(config.source_manifest, dump(result.source))
    logger.info("Wrote %s and %s", config.tree_manifest, config.source_manifest)


def run_clean(config: BuildConfig) -> None:
    cleaned = clean_stage(read_source_manifest(config))
    write_json(config.source_manifest, dump(cleaned))
    logger.info("Successfully cleaned and updated %s", config.source_manifest)


def run_paginate(config: BuildConfig) -> None:
    build = paginate_stage(read_source_manifest(config), config)
    publish_catalog(config.data_dir, build.pages, build.index)
    logger.info("Manifest pagination successful")


def run_all(config: BuildConfig) -> None:
    crawled = crawl_stage(config)
    cleaned = clean_stage(crawled.source)
    build = paginate_stage(cleaned, config)

    write_json(config.tree_manifest, dump(crawled.tree))
    write_json(config.source_manifest, dump(cleaned))
    publish_catalog(config.data_dir, build.pages, build.index)
    logger.info("Catalog build complete: %d products", build.index.total_products)


STAGES: dict[str, Callable[[BuildConfig], None]] = {
    "crawl": run_crawl,
    "clean": run_clean,
    "paginate": run_paginate,
    "all": run_all,
}

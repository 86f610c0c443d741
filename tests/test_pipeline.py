"""End-to-end tests for the build stages and the build_catalog entry point."""

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from build_catalog import main
from catalog.errors import FileSystemError, InvalidManifestShape
from catalog.pipeline import run_all, run_clean, run_crawl, run_paginate
from tests.helpers import make_config, write_tree


def _catalog_files(base: Path) -> dict[str, bytes]:
    return {
        path.relative_to(base).as_posix(): path.read_bytes()
        for path in sorted(base.rglob("*.json"))
        if "images" not in path.relative_to(base).parts
    }


class PipelineTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.base = Path(self._tmp.name)
        self.config = make_config(self.base)
        write_tree(
            self.config.images_dir,
            {
                "Acme/Tee One/product.json": {
                    "id": "tee-a",
                    "name": "Classic Tee [2024-01-01]",
                    "brand": "Acme",
                    "images": ["https://drive.google.com/open?id=ABC123"],
                    "variants": [{"productId": "tee-b", "name": "Black", "image": "b.jpg"}],
                    "similar": ["tee-b", "gone"],
                    "recommended": ["coat"],
                },
                "Acme/Tee Two/product.json": {
                    "id": "tee-b",
                    "name": "Classic Tee",
                    "brand": "Acme",
                    "images": ["https://cdn.example.com/b.jpg"],
                },
                "Beta/Coat/product.json": {"id": "coat", "name": "Giacca 🔥", "brand": "Beta"},
                "Beta/Coat/1.jpg": b"jpg",
                "Beta/Scarf/product.json": "{broken",
                "Beta/Scarf/1.jpg": b"jpg",
            },
        )

    def _read(self, path: Path):
        return json.loads(path.read_text(encoding="utf-8"))


class TestRunAll(PipelineTestCase):
    def test_writes_tree_source_index_and_pages(self) -> None:
        run_all(self.config)

        tree = self._read(self.config.tree_manifest)
        self.assertEqual(tree["path"], "images")
        self.assertEqual(tree["kind"], "folder")

        index = self._read(self.config.data_dir / "manifest.json")
        self.assertEqual(index["name"], "images")
        self.assertEqual(index["totalProducts"], 3)
        self.assertEqual(index["totalPages"], 2)
        self.assertEqual(index["itemsPerPage"], 2)
        self.assertEqual(
            [p["id"] for p in index["products"]], ["classic-tee", "classic-tee-1", "giacca"]
        )

        page_1 = self._read(self.config.data_dir / "page-1.json")
        page_2 = self._read(self.config.data_dir / "page-2.json")
        self.assertEqual([p["id"] for p in page_1], ["classic-tee", "classic-tee-1"])
        self.assertEqual([p["id"] for p in page_2], ["giacca"])
        self.assertEqual(page_2[0]["images"], ["images/Beta/Coat/1.jpg"])
        self.assertEqual(page_2[0]["path"], "images/Beta/Coat")

    def test_drive_images_are_rewritten(self) -> None:
        run_all(self.config)

        index = self._read(self.config.data_dir / "manifest.json")
        self.assertEqual(
            index["products"][0]["images"],
            ["https://drive.google.com/thumbnail?id=ABC123&sz=w1000"],
        )
        self.assertEqual(index["products"][1]["images"], ["https://cdn.example.com/b.jpg"])

    def test_image_rewrite_can_be_disabled(self) -> None:
        run_all(make_config(self.base, rewrite_image_urls=False))

        index = self._read(self.config.data_dir / "manifest.json")
        self.assertEqual(index["products"][0]["images"], ["https://drive.google.com/open?id=ABC123"])

    def test_references_resolve_against_index(self) -> None:
        run_all(self.config)

        index = self._read(self.config.data_dir / "manifest.json")
        ids = {p["id"] for p in index["products"]}
        first = index["products"][0]
        self.assertEqual(first["variants"][0]["productId"], "classic-tee-1")
        self.assertEqual(first["similar"], ["classic-tee-1", "gone"])
        self.assertEqual(first["recommended"], ["giacca"])
        self.assertIn("classic-tee-1", ids)
        self.assertIn("giacca", ids)

    def test_rebuild_is_byte_identical(self) -> None:
        run_all(self.config)
        first = _catalog_files(self.base)

        run_all(self.config)
        second = _catalog_files(self.base)

        self.assertEqual(first, second)
        self.assertIn("public/data/page-2.json", first)

    def test_rebuild_with_larger_pages_removes_stale_files(self) -> None:
        run_all(make_config(self.base, items_per_page=1))
        self.assertTrue((self.config.data_dir / "page-3.json").exists())

        run_all(make_config(self.base, items_per_page=50))

        self.assertTrue((self.config.data_dir / "page-1.json").exists())
        self.assertFalse((self.config.data_dir / "page-2.json").exists())
        self.assertFalse((self.config.data_dir / "page-3.json").exists())

    def test_missing_images_dir_writes_nothing(self) -> None:
        config = make_config(self.base, images_dir=self.base / "missing")

        with self.assertRaises(FileSystemError):
            run_all(config)

        self.assertFalse(config.tree_manifest.exists())
        self.assertFalse(config.source_manifest.exists())
        self.assertFalse(config.data_dir.exists())


class TestStagedRun(PipelineTestCase):
    def test_crawl_clean_paginate_matches_run_all(self) -> None:
        run_crawl(self.config)
        raw = self._read(self.config.source_manifest)
        self.assertEqual([p["id"] for p in raw["children"]], ["tee-a", "tee-b", "coat"])

        run_clean(self.config)
        cleaned = self._read(self.config.source_manifest)
        self.assertEqual(
            [p["name"] for p in cleaned["children"]], ["Classic Tee", "Classic Tee", "Giacca"]
        )

        run_paginate(self.config)
        staged = _catalog_files(self.base)

        run_all(self.config)
        self.assertEqual(staged, _catalog_files(self.base))

    def test_paginate_rejects_manifest_without_product_list(self) -> None:
        self.config.source_manifest.write_text(json.dumps({"name": "images"}), encoding="utf-8")

        with self.assertRaises(InvalidManifestShape):
            run_paginate(self.config)

        self.assertFalse(self.config.data_dir.exists())

    def test_paginate_rejects_invalid_json(self) -> None:
        self.config.source_manifest.write_text("{", encoding="utf-8")

        with self.assertRaises(InvalidManifestShape):
            run_paginate(self.config)

    def test_clean_tolerates_hand_edited_entries(self) -> None:
        hand_edited = {
            "name": "images",
            "children": [
                {"id": "Tee A", "brand": None},
                {"name": "Wool Coat", "images": None},
            ],
        }
        self.config.source_manifest.write_text(json.dumps(hand_edited), encoding="utf-8")

        run_clean(self.config)
        run_paginate(self.config)

        cleaned = self._read(self.config.source_manifest)
        self.assertEqual([p["id"] for p in cleaned["children"]], ["tee-a", "wool-coat"])
        self.assertEqual(cleaned["children"][0]["brand"], "")
        self.assertEqual(cleaned["children"][1]["images"], [])
        index = self._read(self.config.data_dir / "manifest.json")
        self.assertEqual(index["totalProducts"], 2)

    def test_clean_without_source_manifest_is_file_system_error(self) -> None:
        with self.assertRaises(FileSystemError):
            run_clean(self.config)


class TestBuildCatalogMain(PipelineTestCase):
    def _env(self, **extra: str) -> dict[str, str]:
        env = {
            "CATALOG_IMAGES_DIR": str(self.config.images_dir),
            "CATALOG_PUBLIC_DIR": str(self.config.public_dir),
            "CATALOG_SOURCE_MANIFEST": str(self.config.source_manifest),
            "CATALOG_DATA_DIR": str(self.config.data_dir),
            "CATALOG_ITEMS_PER_PAGE": "2",
        }
        env.update(extra)
        return env

    def test_all_stage_succeeds(self) -> None:
        with patch.dict(os.environ, self._env()):
            self.assertEqual(main([]), 0)
        self.assertTrue((self.config.data_dir / "page-2.json").exists())

    def test_failure_returns_non_zero(self) -> None:
        with patch.dict(os.environ, self._env(CATALOG_IMAGES_DIR=str(self.base / "missing"))):
            with self.assertLogs("build_catalog", level="ERROR"):
                self.assertEqual(main(["all"]), 1)
        self.assertFalse(self.config.data_dir.exists())


if __name__ == "__main__":
    unittest.main()

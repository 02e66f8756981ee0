"""Tests for module resolution and listing over an on-disk project."""

import json
import os
import tempfile
import unittest

from entries.extractor import (
    ExtractionStats,
    describe_module,
    iter_entry_listing,
    main_module_entry,
    module_entries,
    module_entry,
)
from source_model.project import Project

INDEX_SOURCE = """
export class Widget {
  static build(): Widget { return new Widget(); }
  render(): void {}
}
export function area(width: number, height?: number) { return width; }
"""

UTIL_SOURCE = "export const PI = 3.14;\n"


def _write(root: str, rel_path: str, text: str) -> None:
    path = os.path.join(root, rel_path)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


class ExtractorTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.root = os.path.realpath(self.tmpdir.name)
        _write(self.root, "src/index.ts", INDEX_SOURCE)
        _write(self.root, "src/util.ts", UTIL_SOURCE)
        _write(
            self.root,
            "tsconfig.json",
            json.dumps({"compilerOptions": {"outDir": "lib", "rootDir": "src"}}),
        )

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def _package(self, data: dict) -> None:
        _write(self.root, "package.json", json.dumps(data))


class TestMainModuleEntry(ExtractorTestCase):
    def test_main_resolves_to_source_module(self) -> None:
        self._package({"name": "widgets", "main": "lib/index.js"})
        entry = main_module_entry(Project(self.root))
        self.assertIsNotNone(entry)
        self.assertEqual(entry.name, "src/index.ts")
        self.assertEqual(entry.output_file_paths, (os.path.join(self.root, "lib", "index.js"),))

    def test_main_resolves_through_extended_tsconfig(self) -> None:
        self._package({"name": "widgets", "main": "lib/index.js"})
        _write(
            self.root,
            "tsconfig.base.json",
            json.dumps({"compilerOptions": {"outDir": "lib", "rootDir": "src"}}),
        )
        _write(
            self.root,
            "tsconfig.json",
            json.dumps({"extends": "./tsconfig.base.json", "include": ["src"]}),
        )
        entry = main_module_entry(Project(self.root))
        self.assertIsNotNone(entry)
        self.assertEqual(entry.name, "src/index.ts")

    def test_extensionless_main(self) -> None:
        self._package({"name": "widgets", "main": "./lib/util"})
        entry = main_module_entry(Project(self.root))
        self.assertEqual(entry.name, "src/util.ts")

    def test_unset_main_is_none(self) -> None:
        self._package({"name": "widgets"})
        self.assertIsNone(main_module_entry(Project(self.root)))

    def test_main_without_matching_module_is_none(self) -> None:
        self._package({"name": "widgets", "main": "lib/missing.js"})
        self.assertIsNone(main_module_entry(Project(self.root)))


class TestModuleEntry(ExtractorTestCase):
    def test_module_by_relative_path(self) -> None:
        entry = module_entry(Project(self.root, strict=False), "src/util.ts")
        self.assertEqual(entry.title, "module src/util.ts")

    def test_unknown_module_is_none(self) -> None:
        self.assertIsNone(module_entry(Project(self.root, strict=False), "src/nope.ts"))

    def test_module_entries_in_path_order(self) -> None:
        entries = module_entries(Project(self.root, strict=False))
        self.assertEqual([e.name for e in entries], ["src/index.ts", "src/util.ts"])


class TestListing(ExtractorTestCase):
    def test_two_level_listing_and_stats(self) -> None:
        entry = module_entry(Project(self.root, strict=False), "src/index.ts")
        stats = ExtractionStats()
        listings = list(iter_entry_listing(entry, stats=stats))

        self.assertEqual(
            [(listing.title, listing.member_titles) for listing in listings],
            [
                ("class Widget", ["Widget.build()", "Widget#render()"]),
                ("function area(width, height?)", []),
            ],
        )
        self.assertEqual(
            stats.to_dict(),
            {"modules_listed": 1, "top_level_entries": 2, "member_entries": 2, "parse_errors": 0},
        )

    def test_parse_errors_are_counted(self) -> None:
        _write(self.root, "src/broken.ts", "export class {{{")
        entry = module_entry(Project(self.root, strict=False), "src/broken.ts")
        stats = ExtractionStats()
        list(iter_entry_listing(entry, stats=stats))
        self.assertEqual(stats.parse_errors, 1)

    def test_describe_module(self) -> None:
        entry = module_entry(Project(self.root, strict=False), "src/util.ts")
        self.assertEqual(
            describe_module(entry),
            {
                "module": "src/util.ts",
                "title": "module src/util.ts",
                "source_file_path": os.path.join(self.root, "src", "util.ts"),
                "output_file_paths": ["lib/util.js"],
                "entries": [{"title": "const PI", "members": []}],
            },
        )


if __name__ == "__main__":
    unittest.main()

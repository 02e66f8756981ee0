"""Tests for startup config validation helpers."""

import os
import tempfile
import unittest
from pathlib import Path

from core.startup_config import (
    ConfigValidationError,
    load_json_config,
    load_tsconfig,
    load_tsconfig_chain,
    resolve_compiler_options,
    resolve_main_file,
    resolve_strict_config_validation,
    validate_startup_config,
)


class TestStartupConfig(unittest.TestCase):
    def _write_config(self, content: str, suffix: str = ".json") -> str:
        handle = tempfile.NamedTemporaryFile(mode="w", suffix=suffix, delete=False)
        handle.write(content)
        handle.flush()
        handle.close()
        return handle.name

    def test_load_non_strict_missing_returns_empty(self) -> None:
        payload = load_json_config("/definitely/missing.json", strict=False)
        self.assertEqual(payload, {})

    def test_load_strict_missing_raises(self) -> None:
        with self.assertRaises(ConfigValidationError):
            load_json_config("/definitely/missing.json", strict=True)

    def test_load_strict_malformed_raises(self) -> None:
        path = self._write_config('{"name": ')
        try:
            with self.assertRaises(ConfigValidationError):
                load_json_config(path, strict=True)
            self.assertEqual(load_json_config(path, strict=False), {})
        finally:
            Path(path).unlink(missing_ok=True)

    def test_non_object_payload(self) -> None:
        path = self._write_config("[1, 2]")
        try:
            with self.assertRaises(ConfigValidationError):
                load_json_config(path, strict=True)
        finally:
            Path(path).unlink(missing_ok=True)

    def test_tsconfig_comments_and_trailing_commas(self) -> None:
        path = self._write_config(
            """{
  // compiler settings
  "compilerOptions": {
    "outDir": "lib", /* output */
    "paths": {"@app/*": ["src/*"]},
  },
}"""
        )
        try:
            payload = load_tsconfig(path, strict=True)
            self.assertEqual(payload["compilerOptions"]["outDir"], "lib")
            self.assertEqual(payload["compilerOptions"]["paths"], {"@app/*": ["src/*"]})
        finally:
            Path(path).unlink(missing_ok=True)

    def test_tsconfig_chain_merges_base_settings(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            Path(tmpdir, "base.json").write_text(
                '{"compilerOptions": {"outDir": "dist", "strict": true}, "include": ["src"], "exclude": ["src/**/*.spec.ts"]}',
                encoding="utf-8",
            )
            Path(tmpdir, "tsconfig.json").write_text(
                """{
  // project settings
  "extends": "./base.json",
  "compilerOptions": {"outDir": "lib"},
  "include": ["lib-src"],
}""",
                encoding="utf-8",
            )
            payload = load_tsconfig_chain(str(Path(tmpdir, "tsconfig.json")), strict=True)

        self.assertNotIn("extends", payload)
        self.assertEqual(payload["compilerOptions"]["outDir"], os.path.join(tmpdir, "lib"))
        self.assertTrue(payload["compilerOptions"]["strict"])
        self.assertEqual(payload["include"], ["lib-src"])
        self.assertEqual(payload["exclude"], ["src/**/*.spec.ts"])

    def test_tsconfig_chain_rejects_malformed_extends(self) -> None:
        path = self._write_config('{"extends": 42}')
        try:
            with self.assertRaises(ConfigValidationError):
                load_tsconfig_chain(path, strict=True)
            self.assertEqual(load_tsconfig_chain(path, strict=False), {})
        finally:
            Path(path).unlink(missing_ok=True)

    def test_resolve_main_file(self) -> None:
        self.assertEqual(
            resolve_main_file({"main": "./lib/index.js"}, "/pkg"),
            os.path.normpath("/pkg/lib/index.js"),
        )
        self.assertIsNone(resolve_main_file({}, "/pkg", strict=True))

    def test_resolve_main_file_strict_invalid_raises(self) -> None:
        with self.assertRaises(ConfigValidationError):
            resolve_main_file({"main": 42}, "/pkg", strict=True)
        self.assertIsNone(resolve_main_file({"main": ""}, "/pkg", strict=False))

    def test_resolve_compiler_options(self) -> None:
        self.assertEqual(resolve_compiler_options({"compilerOptions": {"outDir": "lib"}}), {"outDir": "lib"})
        self.assertEqual(resolve_compiler_options({}), {})
        with self.assertRaises(ConfigValidationError):
            resolve_compiler_options({"compilerOptions": "lib"}, strict=True)

    def test_validate_startup_config_strict_missing_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            Path(tmpdir, "package.json").write_text("{}", encoding="utf-8")
            with self.assertRaises(ConfigValidationError):
                validate_startup_config(tmpdir, strict=True)

            summary = validate_startup_config(tmpdir, strict=False)
            self.assertEqual(summary["missing_files"], ["tsconfig.json"])

    def test_strict_flag_from_env(self) -> None:
        previous = os.environ.get("STRICT_CONFIG_VALIDATION")
        try:
            os.environ["STRICT_CONFIG_VALIDATION"] = "yes"
            self.assertTrue(resolve_strict_config_validation())
            os.environ["STRICT_CONFIG_VALIDATION"] = "0"
            self.assertFalse(resolve_strict_config_validation(default=True))
        finally:
            if previous is None:
                os.environ.pop("STRICT_CONFIG_VALIDATION", None)
            else:
                os.environ["STRICT_CONFIG_VALIDATION"] = previous


if __name__ == "__main__":
    unittest.main()

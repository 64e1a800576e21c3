"""Tests for config override behavior with defaults."""

import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from PlexSearch.config import load_config_with_defaults


_BASE_YAML = """
log:
  level: INFO
  to_file: false
  dir: log

server:
  url: http://localhost:32400
  token_env: PLEX_TOKEN
  timeout: 30

search:
  limit: 25

output:
  base_dir: output
  formats: [console]
"""


def _write(tmp: str, name: str, text: str) -> Path:
    path = Path(tmp) / name
    path.write_text(text, encoding="utf-8")
    return path


class TestConfigOverride(unittest.TestCase):
    def test_override_merges_with_defaults(self) -> None:
        override_yaml = """
log:
  level: DEBUG

server:
  url: http://plex.lan:32400

search:
  limit: 10
"""
        with tempfile.TemporaryDirectory() as tmp:
            default_path = _write(tmp, "default.yml", _BASE_YAML)
            override_path = _write(tmp, "override.yml", override_yaml)

            cfg = load_config_with_defaults(override_path, default_path=default_path)

        self.assertEqual(cfg.runtime.level, "DEBUG")
        self.assertEqual(cfg.server.url, "http://plex.lan:32400")
        self.assertEqual(cfg.server.token_env, "PLEX_TOKEN")
        self.assertEqual(cfg.search.limit, 10)
        self.assertEqual(cfg.output.formats, ("console",))

    def test_empty_override_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            default_path = _write(tmp, "default.yml", _BASE_YAML)
            override_path = _write(tmp, "override.yml", "{}")

            cfg = load_config_with_defaults(override_path, default_path=default_path)

        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.search.limit, 25)

    def test_missing_default_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            override_path = _write(tmp, "override.yml", "search:\n  limit: 3\n")

            cfg = load_config_with_defaults(override_path, default_path=Path(tmp) / "absent.yml")

        self.assertEqual(cfg.search.limit, 3)
        self.assertEqual(cfg.server.url, "http://localhost:32400")

    def test_non_mapping_root(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            default_path = _write(tmp, "default.yml", _BASE_YAML)
            override_path = _write(tmp, "override.yml", "- a\n- b\n")
            with self.assertRaisesRegex(ValueError, "mapping"):
                load_config_with_defaults(override_path, default_path=default_path)


if __name__ == "__main__":
    unittest.main()

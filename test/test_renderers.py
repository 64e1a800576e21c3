"""Tests for console and JSON renderers."""

import json
import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from PlexSearch.core.filters import CanonicalFilter
from PlexSearch.core.models import MediaRecord
from PlexSearch.renderers.console import render_text
from PlexSearch.renderers.json import JsonFileWriter, format_duration, format_record
from PlexSearch.services.search import SearchOutcome


class TestFormatDuration(unittest.TestCase):
    def test_hours(self) -> None:
        self.assertEqual(format_duration(6_720_000), "1h 52m")

    def test_under_an_hour(self) -> None:
        self.assertEqual(format_duration(2_703_000), "45m 3s")


class TestFormatRecord(unittest.TestCase):
    def test_minimal_record(self) -> None:
        record = MediaRecord(id="1", title="Alien", type="movie")
        self.assertEqual(format_record(record), {"ratingKey": "1", "title": "Alien", "type": "movie", "year": None})

    def test_full_record(self) -> None:
        record = MediaRecord(
            id="1",
            title="Alien",
            type="movie",
            year=1979,
            rating=8.5,
            duration_ms=7_000_000,
            view_offset_ms=1_750_000,
            summary="x" * 200,
            genres=("Horror", "Sci-Fi"),
            cast=("A", "B", "C", "D"),
        )
        shown = format_record(record)
        self.assertEqual(shown["summary"], "x" * 150 + "...")
        self.assertEqual(shown["progress"], "25%")
        self.assertEqual(shown["genres"], "Horror, Sci-Fi")
        self.assertEqual(shown["starring"], "A, B, C")


class TestRenderText(unittest.TestCase):
    def test_lists_records(self) -> None:
        text = render_text([MediaRecord(id="1", title="Alien", type="movie", year=1979, rating=8.5)])
        self.assertIn("1. Alien (1979) [movie]", text)
        self.assertIn("Rating: 8.5", text)


class TestJsonFileWriter(unittest.TestCase):
    def test_writes_payload(self) -> None:
        outcome = SearchOutcome(
            message="Found 1 result(s)",
            query="alien",
            extracted=CanonicalFilter(genre="horror"),
            filters=CanonicalFilter(type="movie", genre="horror"),
            records=[MediaRecord(id="1", title="Alien", type="movie")],
        )
        with tempfile.TemporaryDirectory() as tmp:
            writer = JsonFileWriter(tmp)
            writer.write_outcome(outcome)
            writer.finalize("smart")
            (path,) = (Path(tmp) / "json").glob("smart_*.json")
            data = json.loads(path.read_text(encoding="utf-8"))

        self.assertEqual(data[0]["query"], "alien")
        self.assertEqual(data[0]["parsedFilters"], {"genre": "horror"})
        self.assertEqual(data[0]["filters"], {"type": "movie", "genre": "horror"})
        self.assertEqual(data[0]["results"][0]["title"], "Alien")


if __name__ == "__main__":
    unittest.main()

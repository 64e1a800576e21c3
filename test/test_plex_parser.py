"""Tests for Plex payload parsing."""

import sys
import unittest
from datetime import datetime, timezone
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from PlexSearch.core.filters import LibrarySection
from PlexSearch.sources.plex.parser import parse_media_items, parse_sections


class TestParseSections(unittest.TestCase):
    def test_parses_and_skips_keyless(self) -> None:
        entries = [
            {"key": "1", "type": "movie", "title": "Movies"},
            {"type": "show", "title": "Broken"},
            {"key": 2, "type": "show", "title": "TV"},
        ]
        self.assertEqual(
            parse_sections(entries),
            [LibrarySection(id="1", type="movie", title="Movies"), LibrarySection(id="2", type="show", title="TV")],
        )


class TestParseMediaItems(unittest.TestCase):
    def test_full_movie(self) -> None:
        item = {
            "ratingKey": "42",
            "title": "Alien",
            "type": "movie",
            "year": 1979,
            "rating": "8.5",
            "duration": 7020000,
            "summary": "In space no one can hear you scream.",
            "viewCount": 2,
            "viewOffset": 60000,
            "contentRating": "R",
            "studio": "20th Century Fox",
            "Genre": [{"tag": "Horror"}, {"tag": "Science Fiction"}],
            "Director": [{"tag": "Ridley Scott"}],
            "Role": [{"tag": "Sigourney Weaver"}, {"tag": "Tom Skerritt"}, {"nope": 1}],
            "addedAt": 1700000000,
            "originallyAvailableAt": "1979-05-25",
        }
        (record,) = parse_media_items([item])
        self.assertEqual(record.id, "42")
        self.assertEqual(record.year, 1979)
        self.assertEqual(record.rating, 8.5)
        self.assertEqual(record.duration_ms, 7020000)
        self.assertEqual(record.genres, ("Horror", "Science Fiction"))
        self.assertEqual(record.directors, ("Ridley Scott",))
        self.assertEqual(record.cast, ("Sigourney Weaver", "Tom Skerritt"))
        self.assertEqual(record.added_at, datetime.fromtimestamp(1700000000, tz=timezone.utc))
        self.assertEqual(record.released, datetime(1979, 5, 25))
        self.assertIsNone(record.last_viewed_at)

    def test_episode_fields(self) -> None:
        item = {"ratingKey": "7", "title": "Pilot", "type": "episode", "grandparentTitle": "Community",
                "parentTitle": "Season 1", "index": 1}
        (record,) = parse_media_items([item])
        self.assertEqual((record.show, record.season, record.episode), ("Community", "Season 1", 1))

    def test_missing_values(self) -> None:
        (record,) = parse_media_items([{"ratingKey": "1", "year": "n/a", "rating": True,
                                        "originallyAvailableAt": "soon"}])
        self.assertEqual(record.title, "Untitled")
        self.assertIsNone(record.year)
        self.assertIsNone(record.rating)
        self.assertIsNone(record.summary)
        self.assertIsNone(record.released)
        self.assertEqual(record.genres, ())


if __name__ == "__main__":
    unittest.main()

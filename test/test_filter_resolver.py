"""Tests for merging filters and applying defaults."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from PlexSearch.core.filters import CanonicalFilter
from PlexSearch.parsing.resolver import resolve_filter


class TestResolveFilter(unittest.TestCase):
    def test_defaults_on_empty_filter(self) -> None:
        resolved = resolve_filter(CanonicalFilter())
        self.assertEqual(resolved.type, "movie")
        self.assertEqual(resolved.sort, "titleSort")
        self.assertEqual(resolved.sort_order, "asc")
        self.assertEqual(resolved.limit, 25)

    def test_no_inputs_at_all(self) -> None:
        self.assertEqual(resolve_filter(), resolve_filter(CanonicalFilter()))

    def test_keeps_detected_values(self) -> None:
        resolved = resolve_filter(CanonicalFilter(type="show", sort="rating", sort_order="desc"))
        self.assertEqual((resolved.type, resolved.sort, resolved.sort_order), ("show", "rating", "desc"))

    def test_random_sort_gets_default_direction(self) -> None:
        resolved = resolve_filter(CanonicalFilter(sort="random"))
        self.assertEqual(resolved.sort, "random")
        self.assertEqual(resolved.sort_order, "asc")

    def test_unknown_sort_order_falls_back_to_asc(self) -> None:
        self.assertEqual(resolve_filter(CanonicalFilter(sort_order="sideways")).sort_order, "asc")

    def test_caller_limit_used_when_filter_has_none(self) -> None:
        self.assertEqual(resolve_filter(CanonicalFilter(), limit=10).limit, 10)

    def test_filter_limit_wins_over_caller_limit(self) -> None:
        self.assertEqual(resolve_filter(CanonicalFilter(limit=5), limit=10).limit, 5)

    def test_explicit_fields_override_extracted(self) -> None:
        extracted = CanonicalFilter(type="show", genre="comedy", min_rating=7.0)
        explicit = CanonicalFilter(type="movie", section_id="3")
        resolved = resolve_filter(extracted, explicit)
        self.assertEqual(resolved.type, "movie")
        self.assertEqual(resolved.section_id, "3")
        self.assertEqual(resolved.genre, "comedy")
        self.assertEqual(resolved.min_rating, 7.0)

    def test_contradictory_flags_pass_through(self) -> None:
        resolved = resolve_filter(CanonicalFilter(watched=True, unwatched=True, in_progress=True))
        self.assertTrue(resolved.watched)
        self.assertTrue(resolved.unwatched)
        self.assertTrue(resolved.in_progress)

    def test_values_are_not_clamped(self) -> None:
        resolved = resolve_filter(CanonicalFilter(min_rating=42.0, max_year=10, limit=-1))
        self.assertEqual(resolved.min_rating, 42.0)
        self.assertEqual(resolved.max_year, 10)
        self.assertEqual(resolved.limit, -1)

    def test_input_is_not_mutated(self) -> None:
        extracted = CanonicalFilter(genre="drama")
        resolve_filter(extracted)
        self.assertIsNone(extracted.type)
        self.assertIsNone(extracted.limit)


if __name__ == "__main__":
    unittest.main()

"""Free-text signal extractor.

Scans a natural-language query and returns a partial `CanonicalFilter`.
Nothing here applies defaults; absent signals simply leave fields unset.

Precedence rules
- Media type: movie/film, then show/series/tv, then episode. First hit wins.
- Watch status: unwatched phrases win over "watched"; "in progress" is
  independent, so all three flags may be set together.
- Years: a decade suffix (``90s``) or ``from YYYY`` suppress the bare-year
  match. ``before``/``after`` always apply, ``after`` overwriting ``from``.
- Genre, content rating: ordered tables, first entry found wins.
- Sort intent: best/top rated, then newest/latest/recent, then oldest,
  then random/surprise.
"""

from __future__ import annotations

import re
from typing import Any, Final

from PlexSearch.core.filters import CanonicalFilter
from PlexSearch.utils.log import log

_MOVIE_WORDS: Final = ("movie", "film")
_SHOW_WORDS: Final = ("show", "series", "tv")
_EPISODE_WORDS: Final = ("episode",)

_UNWATCHED_PHRASES: Final = ("unwatched", "not watched", "haven't watched")
_IN_PROGRESS_PHRASES: Final = ("in progress", "continue", "started")

_RE_DECADE = re.compile(r"(\d{2})s(?:\s|$)")
_RE_FROM_YEAR = re.compile(r"from\s+(\d{4})")
_RE_EXACT_YEAR = re.compile(r"\b(19\d{2}|20[0-2]\d)\b")
_RE_BEFORE_YEAR = re.compile(r"before\s+(\d{4})")
_RE_AFTER_YEAR = re.compile(r"after\s+(\d{4})")

_RE_RATING_ABOVE = re.compile(r"(?:rated?|rating)\s*(?:above|over|>|greater than)\s*(\d+(?:\.\d+)?)")
_RE_RATING_BELOW = re.compile(r"(?:rated?|rating)\s*(?:below|under|<|less than)\s*(\d+(?:\.\d+)?)")

GENRES: Final[tuple[str, ...]] = (
    "action",
    "adventure",
    "animation",
    "anime",
    "biography",
    "comedy",
    "crime",
    "documentary",
    "drama",
    "family",
    "fantasy",
    "film-noir",
    "history",
    "horror",
    "musical",
    "mystery",
    "romance",
    "sci-fi",
    "science fiction",
    "sport",
    "thriller",
    "war",
    "western",
)
_GENRE_ALIASES: Final = {"science fiction": "sci-fi"}

_RE_SHORT = re.compile(r"short|under\s+(\d+)\s*(?:min|hour)")
_RE_LONG = re.compile(r"long|over\s+(\d+)\s*(?:min|hour)")
_SHORT_DEFAULT_MINUTES: Final = 90
_LONG_DEFAULT_MINUTES: Final = 120

_RE_RECENT = re.compile(r"(?:added|new)\s*(?:in\s*)?(?:the\s*)?(?:last|past)?\s*(\d+)?\s*(day|week|month)")
_UNIT_DAYS: Final = {"day": 1, "week": 7, "month": 30}

CONTENT_RATINGS: Final[tuple[str, ...]] = (
    "G",
    "PG",
    "PG-13",
    "R",
    "NC-17",
    "TV-Y",
    "TV-Y7",
    "TV-G",
    "TV-PG",
    "TV-14",
    "TV-MA",
)


def _rating_pattern(label: str) -> re.Pattern[str]:
    variants = {label.lower(), label.lower().replace("-", " ")}
    alternatives = "|".join(re.escape(v) for v in sorted(variants, key=len, reverse=True))
    # Whole tokens only: "rated" must not read as "R", "pg-13" not as "PG".
    return re.compile(rf"(?<![\w-])(?:{alternatives})(?![\w-])")


_CONTENT_RATING_PATTERNS: Final = tuple((label, _rating_pattern(label)) for label in CONTENT_RATINGS)


def extract_filters(text: str) -> CanonicalFilter:
    """Extract a partial filter from free text.

    Args:
        text: Natural-language query, e.g. "unwatched sci-fi movies from the 90s".

    Returns:
        CanonicalFilter with only the detected fields set.
    """
    lowered = text.lower()
    found: dict[str, Any] = {}

    media_type = _detect_media_type(lowered)
    if media_type:
        found["type"] = media_type

    found.update(_detect_watch_status(lowered))
    found.update(_detect_years(lowered))
    found.update(_detect_rating_bounds(lowered))

    genre = _detect_genre(lowered)
    if genre:
        found["genre"] = genre

    found.update(_detect_duration(lowered))

    resolution = _detect_resolution(lowered)
    if resolution:
        found["resolution"] = resolution

    added_within = _detect_recency(lowered)
    if added_within is not None:
        found["added_within_days"] = added_within

    content_rating = _detect_content_rating(lowered)
    if content_rating:
        found["content_rating"] = content_rating

    found.update(_detect_sort(lowered))

    log.debug("Extracted filters from %r: %s", text, found)
    return CanonicalFilter(**found)


def _detect_media_type(text: str) -> str | None:
    if any(word in text for word in _MOVIE_WORDS):
        return "movie"
    if any(word in text for word in _SHOW_WORDS):
        return "show"
    if any(word in text for word in _EPISODE_WORDS):
        return "episode"
    return None


def _detect_watch_status(text: str) -> dict[str, bool]:
    out: dict[str, bool] = {}
    if any(phrase in text for phrase in _UNWATCHED_PHRASES):
        out["unwatched"] = True
    elif "watched" in text and "unwatched" not in text:
        out["watched"] = True
    if any(phrase in text for phrase in _IN_PROGRESS_PHRASES):
        out["in_progress"] = True
    return out


def _detect_years(text: str) -> dict[str, int]:
    """Detect decade, year bounds and exact year.

    The decade formula maps two digits below 30 to 2000 + d*10 and the rest
    to 1900 + d*10, so "90s" yields 2800. Kept as-is; the compiler expands
    whatever decade it receives into a ten-year range.
    """
    out: dict[str, int] = {}

    decade_match = _RE_DECADE.search(text)
    if decade_match:
        two_digits = int(decade_match.group(1))
        out["decade"] = 2000 + two_digits * 10 if two_digits < 30 else 1900 + two_digits * 10

    from_match = _RE_FROM_YEAR.search(text)
    if from_match:
        out["min_year"] = int(from_match.group(1))

    exact_match = _RE_EXACT_YEAR.search(text)
    if exact_match and not decade_match and not from_match:
        out["year"] = int(exact_match.group(1))

    before_match = _RE_BEFORE_YEAR.search(text)
    if before_match:
        out["max_year"] = int(before_match.group(1)) - 1

    after_match = _RE_AFTER_YEAR.search(text)
    if after_match:
        out["min_year"] = int(after_match.group(1)) + 1

    return out


def _detect_rating_bounds(text: str) -> dict[str, float]:
    out: dict[str, float] = {}
    above = _RE_RATING_ABOVE.search(text)
    if above:
        out["min_rating"] = float(above.group(1))
    below = _RE_RATING_BELOW.search(text)
    if below:
        out["max_rating"] = float(below.group(1))
    return out


def _detect_genre(text: str) -> str | None:
    for genre in GENRES:
        if genre in text:
            return _GENRE_ALIASES.get(genre, genre)
    return None


def _detect_duration(text: str) -> dict[str, int]:
    # The captured number is used as minutes even when the unit says "hour".
    out: dict[str, int] = {}
    short = _RE_SHORT.search(text)
    if short:
        out["max_duration_minutes"] = int(short.group(1)) if short.group(1) else _SHORT_DEFAULT_MINUTES
    long = _RE_LONG.search(text)
    if long:
        out["min_duration_minutes"] = int(long.group(1)) if long.group(1) else _LONG_DEFAULT_MINUTES
    return out


def _detect_resolution(text: str) -> str | None:
    if "4k" in text or "uhd" in text:
        return "4k"
    if "hd" in text:
        return "hd"
    return None


def _detect_recency(text: str) -> int | None:
    match = _RE_RECENT.search(text)
    if not match and "recently added" not in text and "new" not in text:
        return None
    count = int(match.group(1)) if match and match.group(1) else 1
    unit = match.group(2) if match else "week"
    return count * _UNIT_DAYS[unit]


def _detect_content_rating(text: str) -> str | None:
    for label, pattern in _CONTENT_RATING_PATTERNS:
        if pattern.search(text):
            return label
    return None


def _detect_sort(text: str) -> dict[str, str]:
    if "best" in text or "top rated" in text or "highest rated" in text:
        return {"sort": "rating", "sort_order": "desc"}
    if "newest" in text or "latest" in text or "recent" in text:
        return {"sort": "addedAt", "sort_order": "desc"}
    if "oldest" in text:
        return {"sort": "year", "sort_order": "asc"}
    if "random" in text or "surprise" in text:
        return {"sort": "random"}
    return {}

"""Structured filter parsing.

Turns a caller-supplied mapping (camelCase keys, as accepted by the
advanced search surface) into a `CanonicalFilter`. Only types and enums are
checked; numeric values are passed through for the backend to judge.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

from PlexSearch.config.common import expect_bool, expect_choice, expect_int, expect_number, expect_str
from PlexSearch.core.filters import (
    DEFAULT_LIMIT,
    MEDIA_TYPES,
    RESOLUTIONS,
    SORT_FIELDS,
    SORT_ORDERS,
    CanonicalFilter,
)

STRUCTURED_DEFAULT_SORT_ORDER = "desc"


def _choice(choices: tuple[str, ...]) -> Callable[[Any, str], str]:
    return lambda value, key: expect_choice(value, key, choices)


def _expect_section_id(value: Any, config_key: str) -> str:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return expect_str(value, config_key)


# Input key -> (filter field, validator). Aliases map onto the same field.
_FIELDS: dict[str, tuple[str, Callable[[Any, str], Any]]] = {
    "type": ("type", _choice(MEDIA_TYPES)),
    "sectionId": ("section_id", _expect_section_id),
    "title": ("title", expect_str),
    "year": ("year", expect_int),
    "minYear": ("min_year", expect_int),
    "maxYear": ("max_year", expect_int),
    "decade": ("decade", expect_int),
    "genre": ("genre", expect_str),
    "contentRating": ("content_rating", expect_str),
    "minRating": ("min_rating", expect_number),
    "maxRating": ("max_rating", expect_number),
    "director": ("director", expect_str),
    "actor": ("actor", expect_str),
    "studio": ("studio", expect_str),
    "unwatched": ("unwatched", expect_bool),
    "watched": ("watched", expect_bool),
    "inProgress": ("in_progress", expect_bool),
    "minDuration": ("min_duration_minutes", expect_number),
    "minDurationMinutes": ("min_duration_minutes", expect_number),
    "maxDuration": ("max_duration_minutes", expect_number),
    "maxDurationMinutes": ("max_duration_minutes", expect_number),
    "addedWithin": ("added_within_days", expect_number),
    "addedWithinDays": ("added_within_days", expect_number),
    "resolution": ("resolution", _choice(RESOLUTIONS)),
    "sort": ("sort", _choice(SORT_FIELDS)),
    "sortOrder": ("sort_order", _choice(SORT_ORDERS)),
    "limit": ("limit", expect_int),
}


def parse_structured_filter(value: Any, config_key: str = "filter") -> CanonicalFilter:
    """Parse a structured filter mapping into ``CanonicalFilter``.

    Args:
        value: Mapping of filter keys to values. ``None`` values count as unset.
        config_key: Key path used in error messages.

    Returns:
        Parsed filter. ``sort_order`` defaults to desc and ``limit`` to 25.

    Raises:
        TypeError: If the mapping or a field has the wrong type.
        ValueError: If ``type`` is missing, a key is unknown, or an enum value is invalid.
    """
    if not isinstance(value, Mapping):
        raise TypeError(f"{config_key} must be an object")

    unknown = sorted(str(k) for k in value.keys() if k not in _FIELDS)
    if unknown:
        raise ValueError(f"{config_key} has unknown fields: {unknown}")

    parsed: dict[str, Any] = {}
    for key, raw in value.items():
        if raw is None:
            continue
        field_name, check = _FIELDS[key]
        parsed[field_name] = check(raw, f"{config_key}.{key}")

    if "type" not in parsed:
        raise ValueError(f"Missing required field: {config_key}.type")

    parsed.setdefault("sort_order", STRUCTURED_DEFAULT_SORT_ORDER)
    parsed.setdefault("limit", DEFAULT_LIMIT)
    return CanonicalFilter(**parsed)

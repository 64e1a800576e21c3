"""Plex query compiler.

Compiles a resolved `CanonicalFilter` into the parameter set understood by
the Plex ``/library/sections/{id}/all`` endpoint.

Mapping
- type            -> type=<code>         (unknown types compile to movie=1)
- decade          -> year>>=D, year<<=D+9
- min/max year    -> year>>, year<<      (defaults 1800 / current year)
- year            -> year                (only when no decade or bounds)
- min/max rating  -> rating>>, rating<<
- unwatched       -> unwatched=1
- watched         -> viewCount>>=0
- in_progress     -> inProgress=1
- durations (min) -> duration>>, duration<< in milliseconds
- added_within    -> addedAt>>=<unix seconds>
- resolution      -> videoResolution 4k / 1080 (sd has no mapping)
- sort            -> sort=<field>:<direction>
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Sequence

from PlexSearch.core.errors import SectionResolutionError
from PlexSearch.core.filters import (
    DEFAULT_LIMIT,
    DEFAULT_SORT,
    SORT_FIELDS,
    TYPE_CODES,
    CanonicalFilter,
    CompiledQuery,
    LibrarySection,
    PageWindow,
)
from PlexSearch.utils.log import log

MIN_YEAR_FLOOR = 1800
MS_PER_MINUTE = 60_000
MS_PER_DAY = 86_400_000

_SECTION_FAMILIES: dict[str, frozenset[str]] = {
    "movie": frozenset({"movie"}),
    "show": frozenset({"show"}),
    "episode": frozenset({"show"}),
    "artist": frozenset({"artist", "music"}),
    "album": frozenset({"artist", "music"}),
    "track": frozenset({"artist", "music"}),
}

_RESOLUTION_PARAMS: dict[str, str] = {
    "4k": "4k",
    "hd": "1080",
}

_PASSTHROUGH_FIELDS: tuple[tuple[str, str], ...] = (
    ("genre", "genre"),
    ("content_rating", "contentRating"),
    ("director", "director"),
    ("actor", "actor"),
    ("studio", "studio"),
)


def resolve_section_id(filters: CanonicalFilter, sections: Sequence[LibrarySection]) -> str:
    """Pick the library section to search.

    An explicit ``section_id`` always wins. Otherwise the first section whose
    declared type belongs to the media type's family is used.

    Raises:
        SectionResolutionError: If no section id is given and none matches.
    """
    if filters.section_id:
        return str(filters.section_id)

    family = _SECTION_FAMILIES.get(filters.type or "movie", _SECTION_FAMILIES["movie"])
    for section in sections:
        if section.type in family:
            return section.id
    raise SectionResolutionError()


def compile_plex_query(
    filters: CanonicalFilter,
    *,
    sections: Sequence[LibrarySection] = (),
    now: datetime | None = None,
) -> CompiledQuery:
    """Compile a resolved filter into a Plex search request.

    Args:
        filters: Resolved filter (see ``resolve_filter``).
        sections: Library sections used when ``filters.section_id`` is unset.
        now: Reference time for open year bounds and ``addedAt``. Defaults to now (UTC).

    Returns:
        CompiledQuery for the first page of results.

    Raises:
        SectionResolutionError: If no target section can be determined.
    """
    section_id = resolve_section_id(filters, sections)
    reference = now or datetime.now(timezone.utc)

    params: dict[str, Any] = {"type": TYPE_CODES.get(filters.type or "", TYPE_CODES["movie"])}

    if filters.title is not None:
        params["title"] = filters.title

    params.update(_compile_years(filters, reference))

    for field_name, param in _PASSTHROUGH_FIELDS:
        value = getattr(filters, field_name)
        if value is not None:
            params[param] = value

    if filters.min_rating is not None:
        params["rating>>"] = filters.min_rating
    if filters.max_rating is not None:
        params["rating<<"] = filters.max_rating

    if filters.unwatched:
        params["unwatched"] = 1
    if filters.watched:
        params["viewCount>>"] = 0
    if filters.in_progress:
        params["inProgress"] = 1

    if filters.min_duration_minutes is not None:
        params["duration>>"] = filters.min_duration_minutes * MS_PER_MINUTE
    if filters.max_duration_minutes is not None:
        params["duration<<"] = filters.max_duration_minutes * MS_PER_MINUTE

    if filters.added_within_days is not None:
        params["addedAt>>"] = _added_since(filters.added_within_days, reference)

    if filters.resolution is not None:
        mapped = _RESOLUTION_PARAMS.get(filters.resolution)
        if mapped is None:
            log.debug("Resolution %r has no Plex filter, ignored", filters.resolution)
        else:
            params["videoResolution"] = mapped

    sort = compile_sort(filters.sort, filters.sort_order)
    params["sort"] = sort

    limit = filters.limit if filters.limit is not None else DEFAULT_LIMIT
    compiled = CompiledQuery(
        section_id=section_id,
        parameters=params,
        sort=sort,
        window=PageWindow(start=0, size=limit),
    )
    log.debug("Compiled Plex query section=%s params=%s window=%s", section_id, params, compiled.window)
    return compiled


def compile_sort(field: str | None, order: str | None) -> str:
    """Return ``<field>:<direction>``; direction is always present, even for random."""
    sort_field = field if field in SORT_FIELDS else DEFAULT_SORT
    direction = "desc" if order == "desc" else "asc"
    return f"{sort_field}:{direction}"


def _compile_years(filters: CanonicalFilter, reference: datetime) -> dict[str, int]:
    """Compile the year constraint; decade beats bounds, bounds beat exact year."""
    if filters.decade is not None:
        return {"year>>": filters.decade, "year<<": filters.decade + 9}
    if filters.min_year is not None or filters.max_year is not None:
        return {
            "year>>": filters.min_year if filters.min_year is not None else MIN_YEAR_FLOOR,
            "year<<": filters.max_year if filters.max_year is not None else reference.year,
        }
    if filters.year is not None:
        return {"year": filters.year}
    return {}


def _added_since(days: float, reference: datetime) -> int:
    """Unix-seconds lower bound for items added in the last ``days`` days."""
    now_ms = int(reference.timestamp() * 1000)
    return int((now_ms - days * MS_PER_DAY) // 1000)

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from types import MappingProxyType
from typing import Any, Final, Mapping, Optional

MEDIA_TYPES: Final[tuple[str, ...]] = ("movie", "show", "episode", "artist", "album", "track")
RESOLUTIONS: Final[tuple[str, ...]] = ("sd", "hd", "4k")
SORT_ORDERS: Final[tuple[str, ...]] = ("asc", "desc")

# Backend metadata type codes.
TYPE_CODES: Final[Mapping[str, int]] = MappingProxyType(
    {
        "movie": 1,
        "show": 2,
        "season": 3,
        "episode": 4,
        "trailer": 5,
        "comic": 6,
        "person": 7,
        "artist": 8,
        "album": 9,
        "track": 10,
        "photo": 11,
        "clip": 12,
        "photo_album": 13,
    }
)

SORT_FIELDS: Final[tuple[str, ...]] = (
    "titleSort",
    "year",
    "rating",
    "addedAt",
    "lastViewedAt",
    "duration",
    "random",
)

DEFAULT_TYPE: Final = "movie"
DEFAULT_SORT: Final = "titleSort"
DEFAULT_SORT_ORDER: Final = "asc"
DEFAULT_LIMIT: Final = 25


@dataclass(frozen=True, slots=True)
class CanonicalFilter:
    """Source-agnostic set of search constraints.

    Every field is independently optional. The extractor and the structured
    parser only fill what they see; defaults are applied by the resolver.
    The three watch-status flags are deliberately separate and may all be set
    at once.

    Attributes:
        type: Media type (movie/show/episode/artist/album/track).
        section_id: Explicit library section to search in.
        title: Title contains.
        year: Exact release year.
        min_year: Lower year bound.
        max_year: Upper year bound.
        decade: First year of a decade (e.g. 1990).
        genre: Genre tag.
        content_rating: Content rating label (e.g. PG-13).
        min_rating: Lower critic rating bound.
        max_rating: Upper critic rating bound.
        director: Director name.
        actor: Actor name.
        studio: Studio name.
        unwatched: Only items never watched.
        watched: Only items watched at least once.
        in_progress: Only partially watched items.
        min_duration_minutes: Lower duration bound in minutes.
        max_duration_minutes: Upper duration bound in minutes.
        added_within_days: Only items added in the last N days.
        resolution: Video resolution (sd/hd/4k).
        sort: Sort field name.
        sort_order: asc or desc.
        limit: Page size.
    """

    type: Optional[str] = None
    section_id: Optional[str] = None
    title: Optional[str] = None
    year: Optional[int] = None
    min_year: Optional[int] = None
    max_year: Optional[int] = None
    decade: Optional[int] = None
    genre: Optional[str] = None
    content_rating: Optional[str] = None
    min_rating: Optional[float] = None
    max_rating: Optional[float] = None
    director: Optional[str] = None
    actor: Optional[str] = None
    studio: Optional[str] = None
    unwatched: Optional[bool] = None
    watched: Optional[bool] = None
    in_progress: Optional[bool] = None
    min_duration_minutes: Optional[float] = None
    max_duration_minutes: Optional[float] = None
    added_within_days: Optional[float] = None
    resolution: Optional[str] = None
    sort: Optional[str] = None
    sort_order: Optional[str] = None
    limit: Optional[int] = None

    def set_fields(self) -> dict[str, Any]:
        """Return only the fields that carry a value, in declaration order."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

    def overlay(self, other: CanonicalFilter) -> CanonicalFilter:
        """Return a copy where every field set on ``other`` replaces ours."""
        return replace(self, **other.set_fields())


@dataclass(frozen=True, slots=True)
class LibrarySection:
    """A library partition with a declared media-type family.

    Attributes:
        id: Section key used in backend paths.
        type: Declared section type (movie/show/artist/photo...).
        title: Display title.
    """

    id: str
    type: str
    title: str = ""


@dataclass(frozen=True, slots=True)
class PageWindow:
    """Pagination window requested from the backend."""

    start: int
    size: int


@dataclass(frozen=True, slots=True)
class CompiledQuery:
    """Backend-ready search request.

    Attributes:
        section_id: Target library section.
        parameters: Ordered backend parameter name to scalar value.
            Includes the ``type`` code and the ``sort`` parameter.
        sort: ``<field>:<direction>`` string.
        window: Pagination window.
    """

    section_id: str
    parameters: Mapping[str, Any]
    sort: str
    window: PageWindow

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence


@dataclass(frozen=True, slots=True)
class MediaRecord:
    """Internal canonical media item model.

    Backend metadata entries are mapped to this shape before formatting.

    Attributes:
        id: Backend rating key.
        title: Display title.
        type: Backend media type (movie/show/episode/...).
        year: Release year if known.
        rating: Critic rating (0-10).
        duration_ms: Runtime in milliseconds.
        summary: Plot summary.
        show: Grandparent title for episodes.
        season: Parent title for episodes.
        episode: Episode index.
        view_count: Times watched.
        view_offset_ms: Resume position in milliseconds.
        content_rating: Content rating label.
        studio: Studio name.
        genres: Genre tags.
        directors: Director names.
        cast: Actor names in billing order.
        added_at: When the item was added to the library.
        last_viewed_at: When the item was last watched.
        released: Original release date.
    """

    id: str
    title: str
    type: str
    year: Optional[int] = None
    rating: Optional[float] = None
    duration_ms: Optional[int] = None
    summary: Optional[str] = None
    show: Optional[str] = None
    season: Optional[str] = None
    episode: Optional[int] = None
    view_count: Optional[int] = None
    view_offset_ms: Optional[int] = None
    content_rating: Optional[str] = None
    studio: Optional[str] = None
    genres: Sequence[str] = ()
    directors: Sequence[str] = ()
    cast: Sequence[str] = ()
    added_at: Optional[datetime] = None
    last_viewed_at: Optional[datetime] = None
    released: Optional[datetime] = None

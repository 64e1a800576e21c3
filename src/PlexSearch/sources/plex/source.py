"""Plex source adapter."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from PlexSearch.core.filters import CanonicalFilter, CompiledQuery, LibrarySection
from PlexSearch.core.models import MediaRecord
from PlexSearch.sources.plex.client import PlexApiClient
from PlexSearch.sources.plex.parser import parse_media_items, parse_sections
from PlexSearch.sources.plex.query import compile_plex_query
from PlexSearch.utils.log import log


@dataclass(slots=True)
class PlexSource:
    """Plex-backed source adapter that returns normalized media records."""

    client: PlexApiClient
    clock: Callable[[], datetime] | None = None
    name: str = "plex"

    def sections(self) -> list[LibrarySection]:
        """List library sections from the server."""
        return parse_sections(self.client.fetch_sections())

    def compile(self, filters: CanonicalFilter) -> CompiledQuery:
        """Compile a resolved filter, listing sections only when none is given."""
        sections = () if filters.section_id else self.sections()
        now = self.clock() if self.clock else None
        return compile_plex_query(filters, sections=sections, now=now)

    def search(self, filters: CanonicalFilter) -> list[MediaRecord]:
        """Compile and run one page of a search.

        Args:
            filters: Resolved filter.

        Returns:
            Records in backend order.

        Raises:
            SectionResolutionError: If no section matches the media type.
        """
        compiled = self.compile(filters)
        items = self.client.search(compiled)
        log.debug("Plex returned %d items for section=%s", len(items), compiled.section_id)
        return parse_media_items(items)

    def close(self) -> None:
        """Close resources held by the Plex source adapter."""
        self.client.close()

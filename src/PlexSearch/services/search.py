"""Search service layer: free-text and structured search over one media source."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, Sequence

from PlexSearch.core.filters import DEFAULT_LIMIT, CanonicalFilter, CompiledQuery, LibrarySection
from PlexSearch.core.models import MediaRecord
from PlexSearch.parsing.resolver import resolve_filter
from PlexSearch.parsing.signals import extract_filters
from PlexSearch.parsing.structured import parse_structured_filter
from PlexSearch.utils.log import log


class MediaSource(Protocol):
    """Protocol for an external media library backend."""

    name: str

    def sections(self) -> Sequence[LibrarySection]:
        """List library sections."""
        raise NotImplementedError

    def compile(self, filters: CanonicalFilter) -> CompiledQuery:
        """Compile a resolved filter into a backend request."""
        raise NotImplementedError

    def search(self, filters: CanonicalFilter) -> Sequence[MediaRecord]:
        """Search the library with a resolved filter."""
        raise NotImplementedError

    def close(self) -> None:
        """Close resources held by source."""
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class SearchOutcome:
    """Result of one search call.

    Attributes:
        message: Human-readable summary line.
        query: Original free text, None for structured searches.
        extracted: Fields detected in the free text (before defaults).
        filters: Resolved filter that was compiled.
        records: Records returned by the source.
    """

    message: str
    query: str | None
    extracted: CanonicalFilter | None
    filters: CanonicalFilter
    records: Sequence[MediaRecord] = field(default_factory=tuple)


@dataclass(slots=True)
class MediaSearchService:
    """Application service running the extract -> resolve -> compile pipeline."""

    source: MediaSource
    default_limit: int = DEFAULT_LIMIT

    def smart_search(self, text: str, *, limit: int | None = None) -> SearchOutcome:
        """Search with a natural-language query.

        Args:
            text: Free text, e.g. "top rated comedy shows".
            limit: Page size; falls back to the configured default.

        Returns:
            SearchOutcome with the extracted filter and records.
        """
        extracted = extract_filters(text)
        resolved = resolve_filter(extracted, limit=limit if limit is not None else self.default_limit)
        log.info("Smart search %r -> %s", text, resolved.set_fields())

        records = list(self.source.search(resolved))
        if records:
            message = f'Found {len(records)} result(s) for: "{text}"'
        else:
            message = f'No results found for: "{text}"'
        return SearchOutcome(message=message, query=text, extracted=extracted, filters=resolved, records=records)

    def advanced_search(self, raw_filter: Mapping[str, Any]) -> SearchOutcome:
        """Search with a structured filter mapping.

        Args:
            raw_filter: camelCase filter mapping; ``type`` is required.

        Returns:
            SearchOutcome with the resolved filter and records.

        Raises:
            TypeError: If a field has the wrong type.
            ValueError: If the filter is invalid.
        """
        explicit = parse_structured_filter(raw_filter)
        resolved = resolve_filter(explicit=explicit, limit=self.default_limit)
        log.info("Advanced search -> %s", resolved.set_fields())

        records = list(self.source.search(resolved))
        message = f"Found {len(records)} result(s)" if records else "No results found matching your criteria"
        return SearchOutcome(message=message, query=None, extracted=None, filters=resolved, records=records)

    def resolve_text(self, text: str, *, section_id: str | None = None, limit: int | None = None) -> CanonicalFilter:
        """Extract and resolve free text without touching the source."""
        extracted = extract_filters(text)
        explicit = CanonicalFilter(section_id=section_id) if section_id else None
        return resolve_filter(extracted, explicit, limit=limit if limit is not None else self.default_limit)

    def compile_filter(self, filters: CanonicalFilter) -> CompiledQuery:
        """Compile a resolved filter without running the search."""
        return self.source.compile(filters)

    def compile_text(self, text: str, *, section_id: str | None = None, limit: int | None = None) -> CompiledQuery:
        """Compile free text without running the search."""
        return self.compile_filter(self.resolve_text(text, section_id=section_id, limit=limit))

    def list_sections(self) -> list[LibrarySection]:
        """Return the library sections of the source."""
        return list(self.source.sections())

    def close(self) -> None:
        """Close the underlying source."""
        self.source.close()

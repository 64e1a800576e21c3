"""Filter resolver: merge extracted and explicit filters, then apply defaults."""

from __future__ import annotations

from dataclasses import replace

from PlexSearch.core.filters import (
    DEFAULT_LIMIT,
    DEFAULT_SORT,
    DEFAULT_SORT_ORDER,
    DEFAULT_TYPE,
    CanonicalFilter,
)


def resolve_filter(
    extracted: CanonicalFilter | None = None,
    explicit: CanonicalFilter | None = None,
    *,
    limit: int | None = None,
) -> CanonicalFilter:
    """Produce one canonical filter with defaults filled in.

    No clamping or cross-field validation happens here: contradictory flags
    such as ``watched`` and ``unwatched`` both set pass through unchanged.

    Args:
        extracted: Partial filter from the free-text extractor.
        explicit: Caller-supplied structured filter. Its set fields win.
        limit: Page size requested by the caller, used when neither filter sets one.

    Returns:
        Resolved filter with type, sort, sort_order and limit always set.
    """
    merged = extracted or CanonicalFilter()
    if explicit is not None:
        merged = merged.overlay(explicit)

    return replace(
        merged,
        type=merged.type or DEFAULT_TYPE,
        sort=merged.sort or DEFAULT_SORT,
        sort_order="desc" if merged.sort_order == "desc" else DEFAULT_SORT_ORDER,
        limit=merged.limit if merged.limit is not None else (limit if limit is not None else DEFAULT_LIMIT),
    )

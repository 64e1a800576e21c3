"""Search domain configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from PlexSearch.config.common import expect_int, get_optional_value, get_section
from PlexSearch.core.filters import DEFAULT_LIMIT


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Store validated search defaults."""

    limit: int


def load_search(raw: Mapping[str, Any]) -> SearchConfig:
    """Load the ``search`` section.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "search", required=False)
    return SearchConfig(limit=expect_int(get_optional_value(section, "limit", DEFAULT_LIMIT), "search.limit"))


def check_search(config: SearchConfig) -> None:
    """Validate search domain constraints.

    Raises:
        ValueError: If values violate search constraints.
    """
    if config.limit <= 0:
        raise ValueError("search.limit must be positive")

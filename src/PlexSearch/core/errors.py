"""Errors raised by the filter compiler."""

from __future__ import annotations

SECTION_RESOLUTION_MESSAGE = "could not determine library section for search"


class SectionResolutionError(ValueError):
    """No explicit section was given and no section matches the media type."""

    def __init__(self, message: str = SECTION_RESOLUTION_MESSAGE) -> None:
        super().__init__(message)

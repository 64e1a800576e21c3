"""Console text output renderers."""

from __future__ import annotations

from typing import Iterable

from PlexSearch.core.models import MediaRecord
from PlexSearch.renderers.base import OutputWriter
from PlexSearch.renderers.json import format_record
from PlexSearch.services.search import SearchOutcome
from PlexSearch.utils.log import log

_DETAIL_LABELS = (
    ("show", "Show"),
    ("season", "Season"),
    ("episode", "Episode"),
    ("rating", "Rating"),
    ("duration", "Duration"),
    ("contentRating", "Content rating"),
    ("progress", "Progress"),
    ("viewCount", "Views"),
    ("genres", "Genres"),
    ("directors", "Directors"),
    ("starring", "Starring"),
    ("studio", "Studio"),
    ("summary", "Summary"),
)


def render_text(records: Iterable[MediaRecord]) -> str:
    """Render records into a human-readable text block.

    Args:
        records: Iterable of media records.

    Returns:
        A formatted string ready to be printed.
    """
    lines: list[str] = []
    for idx, record in enumerate(records, start=1):
        shown = format_record(record)
        year = f" ({record.year})" if record.year else ""
        lines.append(f"{idx}. {record.title}{year} [{record.type}]")
        for key, label in _DETAIL_LABELS:
            if key in shown:
                lines.append(f"   {label}: {shown[key]}")
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


class ConsoleOutputWriter(OutputWriter):
    """Write results to console via logging."""

    def write_outcome(self, outcome: SearchOutcome) -> None:
        log.info(outcome.message)
        if not outcome.records:
            return
        for line in render_text(outcome.records).splitlines():
            log.info(line)

    def finalize(self, action: str) -> None:
        """No-op for console output."""

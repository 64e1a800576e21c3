"""JSON output renderers.

Renders `MediaRecord` objects into the compact dicts shown to users and
provides JsonFileWriter for command output.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

from PlexSearch.core.models import MediaRecord
from PlexSearch.renderers.base import OutputWriter
from PlexSearch.services.search import SearchOutcome
from PlexSearch.utils.log import log

SUMMARY_MAX_CHARS = 150
MAX_CAST = 3


def format_duration(ms: int) -> str:
    """Format milliseconds as "1h 52m", or "45m 3s" below one hour."""
    seconds = ms // 1000
    minutes = seconds // 60
    hours = minutes // 60
    if hours > 0:
        return f"{hours}h {minutes % 60}m"
    return f"{minutes}m {seconds % 60}s"


def format_record(record: MediaRecord) -> dict[str, Any]:
    """Render one record, keeping only the fields that carry a value."""
    out: dict[str, Any] = {
        "ratingKey": record.id,
        "title": record.title,
        "type": record.type,
        "year": record.year,
    }
    if record.rating:
        out["rating"] = record.rating
    if record.duration_ms:
        out["duration"] = format_duration(record.duration_ms)
    if record.summary:
        if len(record.summary) > SUMMARY_MAX_CHARS:
            out["summary"] = record.summary[:SUMMARY_MAX_CHARS] + "..."
        else:
            out["summary"] = record.summary
    if record.show:
        out["show"] = record.show
    if record.season:
        out["season"] = record.season
    if record.episode is not None:
        out["episode"] = record.episode
    if record.view_count:
        out["viewCount"] = record.view_count
    if record.view_offset_ms and record.duration_ms:
        out["progress"] = f"{round(record.view_offset_ms / record.duration_ms * 100)}%"
    if record.content_rating:
        out["contentRating"] = record.content_rating
    if record.studio:
        out["studio"] = record.studio
    if record.genres:
        out["genres"] = ", ".join(record.genres)
    if record.directors:
        out["directors"] = ", ".join(record.directors)
    if record.cast:
        out["starring"] = ", ".join(record.cast[:MAX_CAST])
    return out


def render_json(records: Iterable[MediaRecord]) -> list[dict[str, Any]]:
    """Render records into JSON-serializable Python objects."""
    return [format_record(record) for record in records]


def outcome_payload(outcome: SearchOutcome) -> dict[str, Any]:
    """Build the JSON payload for one search call."""
    payload: dict[str, Any] = {"message": outcome.message}
    if outcome.query is not None:
        payload["query"] = outcome.query
    if outcome.extracted is not None:
        payload["parsedFilters"] = outcome.extracted.set_fields()
    payload["filters"] = outcome.filters.set_fields()
    payload["results"] = render_json(outcome.records)
    return payload


class JsonFileWriter(OutputWriter):
    """Accumulate results and write to JSON file on finalize."""

    def __init__(self, base_dir: str) -> None:
        """Initialize JSON writer.

        Args:
            base_dir: Base output directory.
        """
        self.output_dir = Path(base_dir) / "json"
        self.all_results: list[dict[str, Any]] = []

    def write_outcome(self, outcome: SearchOutcome) -> None:
        self.all_results.append(outcome_payload(outcome))

    def finalize(self, action: str) -> None:
        """Write accumulated results to ``<base_dir>/json/<action>_<timestamp>.json``."""
        payload = json.dumps(self.all_results, ensure_ascii=False, indent=2)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = self.output_dir / f"{action}_{timestamp}.json"
        output_path.write_text(payload, encoding="utf-8")
        log.info("JSON saved to %s", output_path)

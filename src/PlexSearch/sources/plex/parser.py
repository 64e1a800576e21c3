"""Plex payload parser."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from dateutil import parser as dt_parser

from PlexSearch.core.filters import LibrarySection
from PlexSearch.core.models import MediaRecord


def parse_sections(entries: Sequence[Mapping[str, Any]]) -> list[LibrarySection]:
    """Parse ``/library/sections`` directory entries, skipping ones without a key."""
    sections: list[LibrarySection] = []
    for entry in entries:
        key = _safe_str(entry.get("key"))
        if not key:
            continue
        sections.append(
            LibrarySection(
                id=key,
                type=_safe_str(entry.get("type")),
                title=_safe_str(entry.get("title")),
            )
        )
    return sections


def parse_media_items(items: Sequence[Mapping[str, Any]]) -> list[MediaRecord]:
    """Parse Plex metadata entries into ``MediaRecord`` objects."""
    records: list[MediaRecord] = []
    for item in items:
        records.append(
            MediaRecord(
                id=_safe_str(item.get("ratingKey")),
                title=_safe_str(item.get("title")) or "Untitled",
                type=_safe_str(item.get("type")),
                year=_safe_int(item.get("year")),
                rating=_safe_float(item.get("rating")),
                duration_ms=_safe_int(item.get("duration")),
                summary=_safe_str(item.get("summary")) or None,
                show=_safe_str(item.get("grandparentTitle")) or None,
                season=_safe_str(item.get("parentTitle")) or None,
                episode=_safe_int(item.get("index")),
                view_count=_safe_int(item.get("viewCount")),
                view_offset_ms=_safe_int(item.get("viewOffset")),
                content_rating=_safe_str(item.get("contentRating")) or None,
                studio=_safe_str(item.get("studio")) or None,
                genres=_tags(item.get("Genre")),
                directors=_tags(item.get("Director")),
                cast=_tags(item.get("Role")),
                added_at=_from_unix(item.get("addedAt")),
                last_viewed_at=_from_unix(item.get("lastViewedAt")),
                released=_parse_date(item.get("originallyAvailableAt")),
            )
        )
    return records


def _tags(raw: Any) -> tuple[str, ...]:
    """Collect ``tag`` values from a Plex tag list (Genre/Director/Role)."""
    if not isinstance(raw, list):
        return ()
    out: list[str] = []
    for entry in raw:
        if isinstance(entry, Mapping):
            tag = _safe_str(entry.get("tag"))
            if tag:
                out.append(tag)
    return tuple(out)


def _from_unix(value: Any) -> datetime | None:
    seconds = _safe_int(value)
    if seconds is None:
        return None
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def _parse_date(value: Any) -> datetime | None:
    text = _safe_str(value)
    if not text:
        return None
    try:
        return dt_parser.isoparse(text)
    except (ValueError, OverflowError):
        return None


def _safe_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _safe_int(value: Any) -> int | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _safe_float(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None

"""Command implementations for the PlexSearch CLI.

Each command holds its inputs and the injected service/writer, separated
from click parameter handling.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from PlexSearch.core.filters import CompiledQuery
from PlexSearch.renderers import OutputWriter
from PlexSearch.services.search import MediaSearchService
from PlexSearch.utils.log import log


@dataclass(slots=True)
class SmartSearchCommand:
    """Run one free-text search and hand the outcome to the writer."""

    service: MediaSearchService
    output_writer: OutputWriter
    query: str
    limit: int | None = None

    def execute(self) -> None:
        outcome = self.service.smart_search(self.query, limit=self.limit)
        log.info("Fetched %d records", len(outcome.records))
        self.output_writer.write_outcome(outcome)


@dataclass(slots=True)
class AdvancedSearchCommand:
    """Run one structured search and hand the outcome to the writer."""

    service: MediaSearchService
    output_writer: OutputWriter
    raw_filter: Mapping[str, Any] = field(default_factory=dict)

    def execute(self) -> None:
        outcome = self.service.advanced_search(self.raw_filter)
        log.info("Fetched %d records", len(outcome.records))
        self.output_writer.write_outcome(outcome)


@dataclass(slots=True)
class CompileCommand:
    """Print the compiled query for a free-text search without running it."""

    service: MediaSearchService
    query: str
    section_id: str | None = None
    limit: int | None = None
    echo: Callable[[str], None] = print

    def execute(self) -> None:
        resolved = self.service.resolve_text(self.query, section_id=self.section_id, limit=self.limit)
        compiled = self.service.compile_filter(resolved)
        payload = {"filters": resolved.set_fields(), "compiled": compiled_payload(compiled)}
        self.echo(json.dumps(payload, ensure_ascii=False, indent=2))


@dataclass(slots=True)
class SectionsCommand:
    """List library sections."""

    service: MediaSearchService

    def execute(self) -> None:
        sections = self.service.list_sections()
        log.info("Found %d section(s)", len(sections))
        for section in sections:
            log.info("%s. %s [%s]", section.id, section.title, section.type)


def compiled_payload(compiled: CompiledQuery) -> dict[str, Any]:
    """Convert a compiled query to a JSON-serializable mapping."""
    return {
        "sectionId": compiled.section_id,
        "parameters": dict(compiled.parameters),
        "sort": compiled.sort,
        "window": {"start": compiled.window.start, "size": compiled.window.size},
    }

"""Output renderers for search results.

Exports the OutputWriter base class, the console and JSON implementations,
and a factory selecting writers from configuration.
"""

from __future__ import annotations

from PlexSearch.config import AppConfig
from PlexSearch.renderers.base import MultiOutputWriter, OutputWriter
from PlexSearch.renderers.console import ConsoleOutputWriter, render_text
from PlexSearch.renderers.json import JsonFileWriter, format_duration, format_record, render_json


def create_output_writer(config: AppConfig) -> OutputWriter:
    """Create output writer based on config.

    Args:
        config: Application configuration.

    Returns:
        Writer delegating to every configured format.
    """
    writers: list[OutputWriter] = []
    if "console" in config.output.formats:
        writers.append(ConsoleOutputWriter())
    if "json" in config.output.formats:
        writers.append(JsonFileWriter(config.output.base_dir))

    if not writers:
        raise ValueError("No output writers configured")
    return MultiOutputWriter(writers)


__all__ = [
    "OutputWriter",
    "ConsoleOutputWriter",
    "JsonFileWriter",
    "MultiOutputWriter",
    "format_duration",
    "format_record",
    "render_json",
    "render_text",
    "create_output_writer",
]

"""Command runner for coordinating CLI execution.

Manages logging configuration, component creation, resource cleanup and
error handling for command execution.
"""

from __future__ import annotations

from typing import Callable, Protocol

import click

from PlexSearch.config import AppConfig
from PlexSearch.renderers import OutputWriter, create_output_writer
from PlexSearch.services import create_search_service
from PlexSearch.services.search import MediaSearchService
from PlexSearch.utils.log import configure_logging, log


class Command(Protocol):
    def execute(self) -> None: ...


CommandBuilder = Callable[[MediaSearchService, OutputWriter], Command]


class CommandRunner:
    """Orchestrates command execution with proper resource management."""

    def __init__(
        self,
        config: AppConfig,
        *,
        service_factory: Callable[[AppConfig], MediaSearchService] = create_search_service,
    ) -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
            service_factory: Builds the search service; replaced in tests.
        """
        self.config = config
        self.service_factory = service_factory

    def run(self, action: str, build: CommandBuilder) -> None:
        """Execute a command with logging, cleanup and error handling.

        Args:
            action: The CLI command name (e.g., 'smart').
            build: Creates the command from the service and output writer.

        Raises:
            click.Abort: When the command fails.
        """
        log_path = configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        if log_path:
            log.debug("Logging to %s", log_path)

        service: MediaSearchService | None = None
        try:
            service = self.service_factory(self.config)
            output_writer = create_output_writer(self.config)
            build(service, output_writer).execute()
            output_writer.finalize(action)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Search failed: %s", e)
            raise click.Abort from e
        finally:
            if service is not None:
                service.close()

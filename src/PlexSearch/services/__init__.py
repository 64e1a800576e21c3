"""Search service layer for PlexSearch.

Provides the search service and a factory wiring it to the configured
Plex server.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from PlexSearch.services.search import MediaSearchService, MediaSource, SearchOutcome

if TYPE_CHECKING:
    from PlexSearch.config import AppConfig


def create_search_service(config: AppConfig) -> MediaSearchService:
    """Create a search service bound to the configured Plex server.

    Args:
        config: Application configuration containing server settings.

    Returns:
        Configured MediaSearchService instance.

    Raises:
        ValueError: If the Plex token environment variable is not set.
    """
    from PlexSearch.config import check_server
    from PlexSearch.sources.plex.client import PlexApiClient
    from PlexSearch.sources.plex.source import PlexSource

    check_server(config.server)
    client = PlexApiClient(
        base_url=config.server.url,
        token=config.server.token,
        timeout=config.server.timeout,
    )
    return MediaSearchService(source=PlexSource(client=client), default_limit=config.search.limit)


__all__ = [
    "MediaSearchService",
    "MediaSource",
    "SearchOutcome",
    "create_search_service",
]

"""Plex Media Server HTTP client."""

from __future__ import annotations

import random
import time
from typing import Any, Mapping

import requests

from PlexSearch.core.filters import CompiledQuery
from PlexSearch.utils.log import log

DEFAULT_URL = "http://localhost:32400"
DEFAULT_TIMEOUT = 30.0
MAX_ATTEMPTS = 4
BASE_PAUSE = 0.8
MAX_SLEEP = 8.0
RETRYABLE_STATUS = {429, 500, 502, 503, 504}

HEADERS = {
    "Accept": "application/json",
    "X-Plex-Client-Identifier": "plex-search",
    "X-Plex-Product": "Plex Search",
    "X-Plex-Version": "0.1.0",
    "X-Plex-Platform": "Python",
}


class PlexApiClient:
    """Low-level HTTP client for the Plex library endpoints.

    Returns raw ``MediaContainer`` entries; mapping to domain objects is done
    by the parser module.
    """

    def __init__(self, *, base_url: str = DEFAULT_URL, token: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        """Initialize the client with a reusable HTTP session.

        Args:
            base_url: Server URL, e.g. http://localhost:32400.
            token: X-Plex-Token value.
            timeout: Request timeout in seconds.
        """
        if not token:
            raise ValueError("Plex token is required")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update(HEADERS)
        self._session.headers["X-Plex-Token"] = token

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def __enter__(self) -> PlexApiClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def fetch_sections(self) -> list[dict[str, Any]]:
        """Fetch library section directory entries."""
        container = self._get_container("/library/sections")
        return _entries(container, "Directory")

    def search(self, query: CompiledQuery) -> list[dict[str, Any]]:
        """Run a compiled query against its section.

        Args:
            query: Compiled query; its window becomes the container start/size.

        Returns:
            List of raw metadata mappings.
        """
        params: dict[str, Any] = dict(query.parameters)
        params["X-Plex-Container-Start"] = query.window.start
        params["X-Plex-Container-Size"] = query.window.size
        container = self._get_container(f"/library/sections/{query.section_id}/all", params=params)
        return _entries(container, "Metadata")

    def _get_container(self, path: str, *, params: Mapping[str, Any] | None = None) -> Mapping[str, Any]:
        response = self._get_with_retry(path, params=params)
        payload = response.json()
        container = payload.get("MediaContainer", {}) if isinstance(payload, dict) else {}
        return container if isinstance(container, dict) else {}

    def _get_with_retry(self, path: str, *, params: Mapping[str, Any] | None) -> requests.Response:
        """Issue GET with retries for transient failures.

        Raises:
            RuntimeError: On HTTP errors, refused connections and exhausted retries.
        """
        url = f"{self.base_url}{path}"
        last_error: Exception | None = None
        for attempt in range(1, MAX_ATTEMPTS + 1):
            try:
                response = self._session.get(url, params=params, timeout=self.timeout)
                if response.status_code in RETRYABLE_STATUS and attempt < MAX_ATTEMPTS:
                    raise requests.HTTPError(f"HTTP {response.status_code}", response=response)
                if response.status_code >= 400:
                    raise RuntimeError(f"Plex API error: {response.status_code} - {response.reason}")
                return response
            except requests.ConnectionError as error:
                raise RuntimeError(f"Cannot connect to Plex server at {self.base_url}. Is Plex running?") from error
            except (requests.Timeout, requests.HTTPError) as error:
                last_error = error
                if attempt < MAX_ATTEMPTS:
                    delay = min(BASE_PAUSE * (2 ** (attempt - 1)) + random.uniform(0, 0.3), MAX_SLEEP)
                    log.debug("Plex retry attempt=%d/%d delay=%.2fs error=%s", attempt, MAX_ATTEMPTS, delay, error)
                    time.sleep(delay)

        assert last_error is not None
        raise RuntimeError(f"Network error: {last_error}") from last_error


def _entries(container: Mapping[str, Any], key: str) -> list[dict[str, Any]]:
    items = container.get(key) or []
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]

"""Tests for the Plex HTTP client using a mocked session."""

import sys
import unittest
from pathlib import Path
from unittest import mock

import requests

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from PlexSearch.core.filters import CompiledQuery, PageWindow
from PlexSearch.sources.plex.client import PlexApiClient


def _response(status: int = 200, payload=None, reason: str = "OK") -> mock.Mock:
    response = mock.Mock()
    response.status_code = status
    response.reason = reason
    response.json.return_value = payload if payload is not None else {}
    return response


class TestPlexApiClient(unittest.TestCase):
    def setUp(self) -> None:
        self.client = PlexApiClient(base_url="http://plex.local:32400/", token="secret", timeout=5.0)
        self.addCleanup(self.client.close)

    def test_requires_token(self) -> None:
        with self.assertRaises(ValueError):
            PlexApiClient(token="")

    def test_session_headers(self) -> None:
        headers = self.client._session.headers
        self.assertEqual(headers["X-Plex-Token"], "secret")
        self.assertEqual(headers["Accept"], "application/json")

    def test_fetch_sections(self) -> None:
        payload = {"MediaContainer": {"Directory": [{"key": "1", "type": "movie"}, "junk"]}}
        with mock.patch.object(self.client._session, "get", return_value=_response(payload=payload)) as get:
            entries = self.client.fetch_sections()
        self.assertEqual(entries, [{"key": "1", "type": "movie"}])
        get.assert_called_once_with("http://plex.local:32400/library/sections", params=None, timeout=5.0)

    def test_search_sends_parameters_and_window(self) -> None:
        compiled = CompiledQuery(
            section_id="2",
            parameters={"type": 2, "genre": "comedy", "sort": "rating:desc"},
            sort="rating:desc",
            window=PageWindow(start=0, size=25),
        )
        payload = {"MediaContainer": {"Metadata": [{"ratingKey": "10", "title": "Community"}]}}
        with mock.patch.object(self.client._session, "get", return_value=_response(payload=payload)) as get:
            items = self.client.search(compiled)

        self.assertEqual(items, [{"ratingKey": "10", "title": "Community"}])
        url = get.call_args.args[0]
        params = get.call_args.kwargs["params"]
        self.assertEqual(url, "http://plex.local:32400/library/sections/2/all")
        self.assertEqual(params["type"], 2)
        self.assertEqual(params["sort"], "rating:desc")
        self.assertEqual(params["X-Plex-Container-Start"], 0)
        self.assertEqual(params["X-Plex-Container-Size"], 25)

    def test_missing_container_yields_empty_list(self) -> None:
        with mock.patch.object(self.client._session, "get", return_value=_response(payload={})):
            self.assertEqual(self.client.fetch_sections(), [])

    def test_http_error(self) -> None:
        with mock.patch.object(self.client._session, "get", return_value=_response(401, reason="Unauthorized")):
            with self.assertRaisesRegex(RuntimeError, "Plex API error: 401 - Unauthorized"):
                self.client.fetch_sections()

    def test_connection_refused(self) -> None:
        with mock.patch.object(self.client._session, "get", side_effect=requests.ConnectionError("refused")):
            with self.assertRaisesRegex(RuntimeError, "Cannot connect to Plex server at http://plex.local:32400"):
                self.client.fetch_sections()

    @mock.patch("PlexSearch.sources.plex.client.time.sleep")
    def test_retries_transient_status(self, sleep: mock.Mock) -> None:
        responses = [_response(503, reason="Unavailable"), _response(payload={"MediaContainer": {"Directory": []}})]
        with mock.patch.object(self.client._session, "get", side_effect=responses) as get:
            self.assertEqual(self.client.fetch_sections(), [])
        self.assertEqual(get.call_count, 2)
        sleep.assert_called_once()

    @mock.patch("PlexSearch.sources.plex.client.time.sleep")
    def test_gives_up_after_repeated_timeouts(self, sleep: mock.Mock) -> None:
        with mock.patch.object(self.client._session, "get", side_effect=requests.Timeout("slow")) as get:
            with self.assertRaisesRegex(RuntimeError, "Network error"):
                self.client.fetch_sections()
        self.assertEqual(get.call_count, 4)
        self.assertEqual(sleep.call_count, 3)


if __name__ == "__main__":
    unittest.main()

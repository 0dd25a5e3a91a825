"""Unit tests for OMDb ratings lookup."""

from __future__ import annotations

import unittest
from unittest.mock import MagicMock, patch

import requests

from core.config import Settings
from core.models import RatingsResult
from core.ratings import ratings_from_payload, resolve_ratings

_SETTINGS = Settings(omdb_api_key="omdb-key", retry_base_delay_seconds=0.0)

_FOUND = {
    "Response": "True",
    "Title": "Amélie",
    "imdbRating": "8.3",
    "Metascore": "69",
    "Ratings": [
        {"Source": "Internet Movie Database", "Value": "8.3/10"},
        {"Source": "Rotten Tomatoes", "Value": "89%"},
    ],
}
_NOT_FOUND = {"Response": "False", "Error": "Movie not found!"}


def _response(payload: object, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = payload
    return response


class ResolveRatingsTests(unittest.TestCase):
    def test_found_returns_all_three_scores(self) -> None:
        with patch("core.http_fetch.requests.get", return_value=_response(_FOUND)) as get_mock:
            ratings = resolve_ratings("Amélie", "2001", settings=_SETTINGS)
        self.assertEqual(
            ratings,
            RatingsResult(imdb="8.3", rotten_tomatoes="89%", metacritic="69"),
        )
        params = get_mock.call_args.kwargs["params"]
        self.assertEqual(params, {"apikey": "omdb-key", "t": "Amélie", "y": "2001"})

    def test_not_found_with_year_retries_by_title_only(self) -> None:
        with patch(
            "core.http_fetch.requests.get",
            side_effect=[_response(_NOT_FOUND), _response(_FOUND)],
        ) as get_mock:
            ratings = resolve_ratings("Amélie", "2002", settings=_SETTINGS)
        self.assertIsNotNone(ratings)
        self.assertEqual(get_mock.call_count, 2)
        self.assertNotIn("y", get_mock.call_args_list[1].kwargs["params"])

    def test_unknown_title_returns_none(self) -> None:
        with patch(
            "core.http_fetch.requests.get",
            return_value=_response(_NOT_FOUND),
        ) as get_mock:
            ratings = resolve_ratings("Nonexistent Movie Title", settings=_SETTINGS)
        self.assertIsNone(ratings)
        get_mock.assert_called_once()

    def test_fields_are_independent(self) -> None:
        payload = {
            "Response": "True",
            "imdbRating": "N/A",
            "Metascore": "55",
            "Ratings": [],
        }
        self.assertEqual(
            ratings_from_payload(payload),
            RatingsResult(imdb=None, rotten_tomatoes=None, metacritic="55"),
        )

    def test_to_dict_uses_wire_keys(self) -> None:
        ratings = ratings_from_payload(_FOUND)
        self.assertEqual(
            ratings.to_dict(),
            {"imdb": "8.3", "rottenTomatoes": "89%", "metacritic": "69"},
        )

    def test_missing_key_returns_none_without_network(self) -> None:
        with patch("core.http_fetch.requests.get") as get_mock:
            self.assertIsNone(resolve_ratings("Amélie", settings=Settings()))
        get_mock.assert_not_called()

    def test_network_failure_returns_none(self) -> None:
        with patch(
            "core.http_fetch.requests.get",
            side_effect=requests.Timeout("slow"),
        ):
            self.assertIsNone(resolve_ratings("Amélie", "2001", settings=_SETTINGS))

    def test_invalid_json_returns_none(self) -> None:
        broken = _response(None)
        broken.json.side_effect = ValueError("bad")
        with patch("core.http_fetch.requests.get", return_value=broken):
            self.assertIsNone(resolve_ratings("Amélie", settings=_SETTINGS))


if __name__ == "__main__":
    unittest.main()

"""Unit tests for the Gemini multi-model adapter."""

from __future__ import annotations

import json
import unittest
from unittest.mock import MagicMock, patch

import requests

from core.config import Settings
from core.errors import GeminiError
from core.gemini import GeminiAdapter, GeminiRequestError, is_rate_limit_error

_SETTINGS = Settings(
    gemini_api_key="gemini-key",
    gemini_model="model-a",
    gemini_fallback_models=("model-b", "model-a", "model-c"),
    gemini_rate_limit_pause_seconds=1.5,
    target_count=2,
)


def _movies_text(*titles: str) -> str:
    return json.dumps(
        [
            {
                "title": title,
                "year": "1999",
                "vibe_match": "fits",
                "tmdb_search_query": title,
            }
            for title in titles
        ]
    )


def _reply(text: str, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = {"candidates": [{"content": {"parts": [{"text": text}]}}]}
    return response


def _error(status_code: int, message: str = "boom") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = {"error": {"status": "ERR", "message": message}}
    return response


class GeminiAdapterTests(unittest.TestCase):
    def _adapter(self, settings: Settings = _SETTINGS):
        sleeps = []
        events = []
        adapter = GeminiAdapter(settings, sleep=sleeps.append, observer=events.append)
        return adapter, sleeps, events

    def test_models_are_deduplicated_in_order(self) -> None:
        adapter, _, _ = self._adapter()
        self.assertEqual(list(adapter.models), ["model-a", "model-b", "model-c"])

    def test_first_model_success(self) -> None:
        adapter, sleeps, events = self._adapter()
        with patch(
            "core.gemini.requests.post",
            return_value=_reply("```json\n" + _movies_text("Heat", "Drive") + "\n```"),
        ) as post_mock:
            result = adapter.generate("neon night", ["Collateral"])

        self.assertEqual(result.provider, "gemini:model-a")
        self.assertEqual([movie.title for movie in result.movies], ["Heat", "Drive"])
        post_mock.assert_called_once()
        self.assertIn("model-a:generateContent", post_mock.call_args.args[0])
        self.assertEqual(post_mock.call_args.kwargs["headers"], {"x-goog-api-key": "gemini-key"})
        prompt = post_mock.call_args.kwargs["json"]["contents"][0]["parts"][0]["text"]
        self.assertIn("Collateral", prompt)
        self.assertIn('User Input: "neon night"', prompt)
        self.assertEqual(sleeps, [])
        self.assertEqual([event.outcome for event in events], ["success"])

    def test_falls_through_models_and_pauses_only_on_rate_limit(self) -> None:
        adapter, sleeps, events = self._adapter()
        with patch(
            "core.gemini.requests.post",
            side_effect=[
                _error(429, "RESOURCE_EXHAUSTED"),
                _error(500, "internal"),
                _reply(_movies_text("Heat", "Drive")),
            ],
        ) as post_mock:
            result = adapter.generate("neon night")

        self.assertEqual(result.provider, "gemini:model-c")
        self.assertEqual(post_mock.call_count, 3)
        self.assertEqual(sleeps, [1.5])
        self.assertEqual(
            [(event.model, event.outcome) for event in events],
            [("model-a", "failure"), ("model-b", "failure"), ("model-c", "success")],
        )

    def test_malformed_reply_moves_to_next_model(self) -> None:
        adapter, sleeps, _ = self._adapter()
        with patch(
            "core.gemini.requests.post",
            side_effect=[
                _reply("I think you would enjoy Heat."),
                _reply(_movies_text("Heat", "Drive")),
            ],
        ):
            result = adapter.generate("neon night")
        self.assertEqual(result.provider, "gemini:model-b")
        self.assertEqual(sleeps, [])

    def test_network_error_then_exhaustion_raises(self) -> None:
        adapter, _, _ = self._adapter()
        with patch(
            "core.gemini.requests.post",
            side_effect=requests.ConnectionError("offline"),
        ) as post_mock:
            with self.assertRaises(GeminiError) as ctx:
                adapter.generate("neon night")
        self.assertEqual(post_mock.call_count, 3)
        self.assertIn("offline", str(ctx.exception))

    def test_blocked_prompt_is_a_model_failure(self) -> None:
        adapter, _, _ = self._adapter(Settings(gemini_api_key="k", gemini_fallback_models=()))
        blocked = MagicMock()
        blocked.status_code = 200
        blocked.json.return_value = {"promptFeedback": {"blockReason": "SAFETY"}}
        with patch("core.gemini.requests.post", return_value=blocked):
            with self.assertRaises(GeminiError) as ctx:
                adapter.generate("neon night")
        self.assertIn("SAFETY", str(ctx.exception))

    def test_missing_key_raises_without_request(self) -> None:
        adapter, _, _ = self._adapter(Settings())
        self.assertFalse(adapter.is_configured())
        with patch("core.gemini.requests.post") as post_mock:
            with self.assertRaises(GeminiError):
                adapter.generate("neon night")
        post_mock.assert_not_called()

    def test_rate_limit_on_last_model_does_not_pause(self) -> None:
        adapter, sleeps, events = self._adapter(
            Settings(gemini_api_key="k", gemini_model="only", gemini_fallback_models=())
        )
        with patch("core.gemini.requests.post", return_value=_error(429, "quota")):
            with self.assertRaises(GeminiError):
                adapter.generate("neon night")
        self.assertEqual(sleeps, [])
        self.assertEqual([event.outcome for event in events], ["failure"])

    def test_resource_exhausted_status_pauses_before_next_model(self) -> None:
        adapter, sleeps, _ = self._adapter()
        exhausted = MagicMock()
        exhausted.status_code = 403
        exhausted.json.return_value = {
            "error": {"status": "RESOURCE_EXHAUSTED", "message": "Quota exceeded"}
        }
        with patch(
            "core.gemini.requests.post",
            side_effect=[exhausted, _reply(_movies_text("Heat", "Drive"))],
        ):
            result = adapter.generate("neon night")
        self.assertEqual(result.provider, "gemini:model-b")
        self.assertEqual(sleeps, [1.5])

    def test_rate_limit_detection(self) -> None:
        self.assertTrue(is_rate_limit_error(GeminiRequestError("busy", status_code=429)))
        self.assertTrue(
            is_rate_limit_error(
                GeminiRequestError("busy", status_code=403, api_status="RESOURCE_EXHAUSTED")
            )
        )
        self.assertFalse(is_rate_limit_error(GeminiError("Expecting value: line 1 column 429")))
        self.assertFalse(
            is_rate_limit_error(GeminiRequestError("ConnectionError: localhost:4290 refused"))
        )
        self.assertFalse(is_rate_limit_error(GeminiRequestError("boom", status_code=500)))


if __name__ == "__main__":
    unittest.main()

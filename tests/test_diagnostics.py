"""Unit tests for startup diagnostics, /diag text and the runtime monitor."""

from __future__ import annotations

import io
import unittest
from contextlib import redirect_stdout

from bot.handlers_base import build_diag_text
from core.config import Settings
from core.diagnostics import print_startup_diagnostics, provider_chain_summary
from core.models import ProviderEvent
from core.runtime_monitor import (
    clear_runtime_monitor,
    get_recent_errors,
    get_recent_events,
    record_error,
    record_event,
)


class DiagnosticsTests(unittest.TestCase):
    def setUp(self) -> None:
        clear_runtime_monitor()

    def tearDown(self) -> None:
        clear_runtime_monitor()

    def test_chain_lists_only_configured_providers(self) -> None:
        self.assertEqual(provider_chain_summary(Settings()), [])
        self.assertEqual(
            provider_chain_summary(Settings(gemini_api_key="g", deepseek_api_key="d")),
            ["gemini", "deepseek"],
        )

    def test_startup_output_reports_missing_keys(self) -> None:
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            print_startup_diagnostics(Settings(groq_api_key="q"))
        output = buffer.getvalue()
        self.assertIn("GROQ_API_KEY: set", output)
        self.assertIn("GEMINI_API_KEY: missing", output)
        self.assertIn("Generation chain: groq", output)

    def test_record_event_keeps_newest_first_and_logs_failures(self) -> None:
        record_event(ProviderEvent(provider="gemini", outcome="failure", error="quota"))
        record_event(ProviderEvent(provider="groq", outcome="success", model="llama-3.3-70b"))

        events = get_recent_events()
        self.assertEqual([event.provider for event in events], ["groq", "gemini"])
        errors = get_recent_errors()
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].source, "gemini")
        self.assertEqual(errors[0].message, "quota")

    def test_diag_text_escapes_errors(self) -> None:
        record_event(ProviderEvent(provider="gemini", outcome="failure", error="<html> 502"))
        text = build_diag_text(Settings(gemini_api_key="g", tmdb_api_key="t"))
        self.assertIn("Chain: gemini", text)
        self.assertIn("TMDB → Wikipedia", text)
        self.assertIn("&lt;html&gt; 502", text)

    def test_diag_text_without_events(self) -> None:
        text = build_diag_text(Settings())
        self.assertIn("none configured", text)
        self.assertIn("No attempts yet.", text)
        self.assertIn("No errors recorded.", text)

    def test_diag_text_lists_lookup_errors(self) -> None:
        record_error("tmdb", RuntimeError("<search> timed out"))
        text = build_diag_text(Settings())
        self.assertIn("Recent errors:", text)
        self.assertIn("tmdb: RuntimeError &lt;search&gt; timed out", text)
        self.assertNotIn("No errors recorded.", text)


if __name__ == "__main__":
    unittest.main()

"""Unit tests for shared UI text constants."""

from __future__ import annotations

import unittest

from bot.commands import COMMAND_DIAG, COMMAND_VIBE, slash
from bot.interface import get_vibe_keyboard
from bot.callback_ids import NEW_VIBE, ROLL_AGAIN
from bot.ui_texts import (
    BUTTON_NEW_VIBE,
    BUTTON_ROLL_AGAIN,
    HELP_TEXT,
    VIBE_MSG_FEWER_RESULTS,
    VIBE_MSG_NOT_CONFIGURED,
    VIBE_USAGE_TEXT,
)


class UiTextsTests(unittest.TestCase):
    def test_usage_mentions_vibe_command(self) -> None:
        self.assertIn(slash(COMMAND_VIBE), VIBE_USAGE_TEXT)

    def test_help_lists_declared_commands(self) -> None:
        self.assertIn(slash(COMMAND_VIBE), HELP_TEXT)
        self.assertIn(slash(COMMAND_DIAG), HELP_TEXT)

    def test_not_configured_names_every_key(self) -> None:
        for key in ("GEMINI_API_KEY", "GROQ_API_KEY", "DEEPSEEK_API_KEY"):
            self.assertIn(key, VIBE_MSG_NOT_CONFIGURED)

    def test_fewer_results_template(self) -> None:
        self.assertIn("2", VIBE_MSG_FEWER_RESULTS.format(count=2))

    def test_vibe_keyboard_buttons(self) -> None:
        markup = get_vibe_keyboard()
        (row,) = markup.inline_keyboard
        self.assertEqual([button.text for button in row], [BUTTON_ROLL_AGAIN, BUTTON_NEW_VIBE])
        self.assertEqual([button.callback_data for button in row], [ROLL_AGAIN, NEW_VIBE])


if __name__ == "__main__":
    unittest.main()

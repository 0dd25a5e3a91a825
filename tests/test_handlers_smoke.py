"""Smoke tests for handler modules and bot wiring."""

from __future__ import annotations

import importlib
import unittest

from telegram.ext import CallbackQueryHandler

from core.config import Settings


class HandlersSmokeTests(unittest.TestCase):
    def test_handler_modules_resolve_all_exports(self) -> None:
        for module_name in ("bot.handlers_base", "bot.handlers_vibe", "bot.handlers_transport"):
            module = importlib.import_module(module_name)
            for name in module.__all__:
                getattr(module, name)

    def test_create_bot_registers_expected_handlers(self) -> None:
        setup_bot = importlib.import_module("bot.setup_bot")
        settings = Settings(telegram_token="123456:TEST_TOKEN")
        app = setup_bot.create_bot(settings)

        self.assertIs(app.bot_data["settings"], settings)
        handlers = app.handlers.get(0, [])
        callback_names = []
        for handler in handlers:
            callback = getattr(handler, "callback", None)
            if callback is not None:
                callback_names.append(callback.__name__)

        for name in (
            "start_command",
            "help_command",
            "vibe_command",
            "diag_command",
            "roll_again_callback",
            "new_vibe_callback",
            "handle_message",
        ):
            self.assertIn(name, callback_names)
        self.assertEqual(
            sum(isinstance(handler, CallbackQueryHandler) for handler in handlers),
            2,
        )

    def test_create_bot_requires_token(self) -> None:
        setup_bot = importlib.import_module("bot.setup_bot")
        with self.assertRaises(RuntimeError):
            setup_bot.create_bot(Settings())


if __name__ == "__main__":
    unittest.main()

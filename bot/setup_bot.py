"""Bot setup helpers."""

from typing import Optional

from telegram.ext import (
    Application,
    ApplicationBuilder,
    CallbackQueryHandler,
    CommandHandler,
    MessageHandler,
    filters,
)

from bot.callback_ids import PATTERN_NEW_VIBE, PATTERN_ROLL_AGAIN
from bot.commands import (
    COMMAND_DIAG,
    COMMAND_HELP,
    COMMAND_START,
    COMMAND_VIBE,
    REGISTRY_ORDER,
)
from bot.handlers_base import diag_command, help_command, start_command
from bot.handlers_vibe import (
    handle_message,
    new_vibe_callback,
    roll_again_callback,
    vibe_command,
)
from core.config import Settings, load_settings

COMMAND_HANDLERS = {
    COMMAND_START: start_command,
    COMMAND_HELP: help_command,
    COMMAND_VIBE: vibe_command,
    COMMAND_DIAG: diag_command,
}


def create_bot(settings: Optional[Settings] = None) -> Application:
    settings = settings or load_settings()
    if not settings.telegram_token:
        raise RuntimeError("TELEGRAM_TOKEN is not configured.")

    app = ApplicationBuilder().token(settings.telegram_token).build()
    app.bot_data["settings"] = settings

    for command in REGISTRY_ORDER:
        app.add_handler(CommandHandler(command, COMMAND_HANDLERS[command]))
    app.add_handler(CallbackQueryHandler(roll_again_callback, pattern=PATTERN_ROLL_AGAIN))
    app.add_handler(CallbackQueryHandler(new_vibe_callback, pattern=PATTERN_NEW_VIBE))
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_message))

    return app

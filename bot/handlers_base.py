"""Base UI handlers."""

from __future__ import annotations

import html

from telegram import Update
from telegram.constants import ParseMode
from telegram.ext import ContextTypes

from bot.handlers_transport import _send
from bot.ui_texts import (
    DIAG_ERRORS_HEADER,
    DIAG_EVENTS_HEADER,
    DIAG_HEADER,
    DIAG_NO_ERRORS,
    DIAG_NO_EVENTS,
    HELP_TEXT,
    START_TEXT,
    VIBE_USAGE_TEXT,
)
from core.config import Settings, load_settings
from core.diagnostics import provider_chain_summary
from core.logging_setup import redact_secrets
from core.runtime_monitor import get_recent_errors, get_recent_events


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await _send(update, START_TEXT)
    await _send(update, VIBE_USAGE_TEXT)


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await _send(update, HELP_TEXT)


def build_diag_text(settings: Settings, *, limit: int = 10) -> str:
    chain = provider_chain_summary(settings)
    lines = [
        DIAG_HEADER,
        "Chain: " + (" → ".join(chain) if chain else "none configured"),
        "Gemini models: " + ", ".join(settings.gemini_models),
        "Posters: " + ("TMDB → Wikipedia" if settings.tmdb_api_key else "Wikipedia"),
        "Ratings: " + ("OMDb" if settings.omdb_api_key else "disabled"),
        "",
        DIAG_EVENTS_HEADER,
    ]
    events = get_recent_events(limit)
    if not events:
        lines.append(DIAG_NO_EVENTS)
    for event in events:
        label = f"{event.provider}:{event.model}" if event.model else event.provider
        line = f"• {html.escape(label)} {event.outcome} ({event.latency_seconds:.1f}s)"
        if event.error:
            line += f" - {html.escape(redact_secrets(event.error)[:120])}"
        lines.append(line)

    # Poster and ratings lookups only report here; their misses never reach the user.
    lines.extend(["", DIAG_ERRORS_HEADER])
    errors = get_recent_errors(limit)
    if not errors:
        lines.append(DIAG_NO_ERRORS)
    for error in errors:
        lines.append(
            f"• {error.timestamp_utc} {html.escape(error.source)}: "
            f"{html.escape(error.error_type)} {html.escape(error.message[:120])}"
        )
    return "\n".join(lines)


async def diag_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    settings = context.bot_data.get("settings") if context.bot_data is not None else None
    if not isinstance(settings, Settings):
        settings = load_settings()
    await _send(update, build_diag_text(settings), parse_mode=ParseMode.HTML)


__all__ = [
    "start_command",
    "help_command",
    "build_diag_text",
    "diag_command",
]

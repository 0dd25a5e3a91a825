"""User-facing texts for the Telegram front end."""

from __future__ import annotations

from bot.commands import (
    COMMAND_VIBE,
    HELP_COMMAND_ORDER,
    HELP_COMMAND_SPECS,
    slash,
)

BUTTON_ROLL_AGAIN = "🎲 Roll again"
BUTTON_NEW_VIBE = "✨ New vibe"

START_TEXT = (
    "🎬 The Vibe Reel\n"
    "Forget genres. Describe a feeling, a moment, or a dream "
    "and I'll find the movies that match."
)
VIBE_USAGE_TEXT = f"Describe a mood: {slash(COMMAND_VIBE, ' <rainy night, neon, loneliness>')}"
NEW_VIBE_PROMPT_TEXT = "Send me a new vibe as a message."
ROLL_AGAIN_EXPIRED_TEXT = "That vibe has expired. Send a new one."

VIBE_MSG_NOT_CONFIGURED = (
    "⚠️ No AI provider is configured. "
    "Set GEMINI_API_KEY, GROQ_API_KEY or DEEPSEEK_API_KEY and restart."
)
VIBE_MSG_OVERWHELMED = "😵 The cinematic oracle is overwhelmed. Try again in a moment."
VIBE_MSG_NOTHING_NEW = (
    "🤷 Nothing new this time: every suggestion was already shown. Try another vibe."
)
VIBE_MSG_FEWER_RESULTS = "Only {count} new films this time."

CARD_TEMPLATE = "<b>{title}</b> ({year})\n\n<i>{vibe_match}</i>\n\n{ratings}"
RATINGS_TEMPLATE = "⭐ IMDb: {imdb} | 🍅 RT: {rotten_tomatoes} | Ⓜ️ Metacritic: {metacritic}"
VALUE_NOT_AVAILABLE = "n/a"

DIAG_HEADER = "🔎 Providers"
DIAG_EVENTS_HEADER = "Recent attempts:"
DIAG_NO_EVENTS = "No attempts yet."
DIAG_ERRORS_HEADER = "Recent errors:"
DIAG_NO_ERRORS = "No errors recorded."


def build_help_text() -> str:
    lines = [START_TEXT, ""]
    for command in HELP_COMMAND_ORDER:
        suffix, description = HELP_COMMAND_SPECS[command]
        lines.append(f"{slash(command, suffix)} - {description}")
    lines.append("")
    lines.append("A plain text message works as a vibe too.")
    return "\n".join(lines)


HELP_TEXT = build_help_text()

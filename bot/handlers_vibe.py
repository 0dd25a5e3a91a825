"""Vibe recommendation handlers and the roll-again flow."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Sequence

from telegram import Update
from telegram.constants import ChatAction
from telegram.ext import ContextTypes

from bot.cards import MovieCard
from bot.handlers_transport import _answer_callback, _chat_action, _send, _send_card
from bot.interface import get_vibe_keyboard
from bot.session import current_vibe, remember_titles, shown_titles, start_session
from bot.ui_texts import (
    NEW_VIBE_PROMPT_TEXT,
    ROLL_AGAIN_EXPIRED_TEXT,
    VIBE_MSG_FEWER_RESULTS,
    VIBE_MSG_NOTHING_NEW,
    VIBE_MSG_NOT_CONFIGURED,
    VIBE_MSG_OVERWHELMED,
    VIBE_USAGE_TEXT,
)
from core import api
from core.config import Settings, load_settings

logger = logging.getLogger(__name__)


def _settings(context: ContextTypes.DEFAULT_TYPE) -> Settings:
    settings = context.bot_data.get("settings") if context.bot_data is not None else None
    if isinstance(settings, Settings):
        return settings
    return load_settings()


async def _enrich_movie(movie: Dict[str, str], settings: Settings) -> MovieCard:
    poster_payload = {
        "title": movie.get("title"),
        "year": movie.get("year"),
        "tmdb_search_query": movie.get("tmdb_search_query"),
    }
    ratings_payload = {"title": movie.get("title"), "year": movie.get("year")}
    (poster_body, _), (ratings_body, _) = await asyncio.gather(
        asyncio.to_thread(api.resolve_poster, poster_payload, settings=settings),
        asyncio.to_thread(api.resolve_ratings, ratings_payload, settings=settings),
    )
    return MovieCard(
        movie=movie,
        poster_url=poster_body.get("posterUrl"),
        ratings=ratings_body.get("ratings"),
    )


async def enrich_movies(
    movies: Sequence[Dict[str, str]],
    settings: Settings,
) -> List[MovieCard]:
    """Resolve posters and ratings for every movie concurrently."""

    return list(await asyncio.gather(*(_enrich_movie(movie, settings) for movie in movies)))


def _error_text(status: int) -> str:
    if status == 400:
        return VIBE_USAGE_TEXT
    if status == 500:
        return VIBE_MSG_NOT_CONFIGURED
    return VIBE_MSG_OVERWHELMED


async def _run_vibe(
    update: Update,
    context: ContextTypes.DEFAULT_TYPE,
    vibe: str,
    exclude: Sequence[str],
) -> None:
    settings = _settings(context)
    payload: Dict[str, Any] = {"vibe": vibe, "exclude": list(exclude)}

    async with _chat_action(update, context, ChatAction.TYPING):
        body, status = await asyncio.to_thread(api.generate, payload, settings=settings)
    if status != 200:
        logger.error("VIBE ERROR (%s): %s", status, body.get("error"))
        await _send(update, _error_text(status))
        return

    movies: List[Dict[str, str]] = body.get("movies") or []
    logger.info("Vibe served by %s: %s movies", body.get("provider"), len(movies))
    if not movies:
        await _send(update, VIBE_MSG_NOTHING_NEW, reply_markup=get_vibe_keyboard())
        return

    remember_titles(context.chat_data, [movie["title"] for movie in movies])
    async with _chat_action(update, context, ChatAction.UPLOAD_PHOTO):
        cards = await enrich_movies(movies, settings)

    if len(cards) < settings.target_count:
        await _send(update, VIBE_MSG_FEWER_RESULTS.format(count=len(cards)))
    for index, card in enumerate(cards):
        is_last = index == len(cards) - 1
        await _send_card(update, card, reply_markup=get_vibe_keyboard() if is_last else None)


async def vibe_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    vibe = " ".join(context.args).strip() if context.args else ""
    if not vibe:
        await _send(update, VIBE_USAGE_TEXT)
        return
    start_session(context.chat_data, vibe)
    await _run_vibe(update, context, vibe, ())


async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    vibe = (update.message.text or "").strip() if update.message else ""
    if not vibe:
        await _send(update, VIBE_USAGE_TEXT)
        return
    start_session(context.chat_data, vibe)
    await _run_vibe(update, context, vibe, ())


async def roll_again_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    vibe = current_vibe(context.chat_data)
    if not vibe:
        await _send(update, ROLL_AGAIN_EXPIRED_TEXT)
        return
    await _answer_callback(update)
    await _run_vibe(update, context, vibe, shown_titles(context.chat_data))


async def new_vibe_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await _send(update, NEW_VIBE_PROMPT_TEXT)


__all__ = [
    "enrich_movies",
    "vibe_command",
    "handle_message",
    "roll_again_callback",
    "new_vibe_callback",
]

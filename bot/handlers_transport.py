"""Telegram transport helpers shared by handlers."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from typing import Optional

from telegram import InlineKeyboardMarkup, Message, Update
from telegram.constants import ChatAction, ParseMode
from telegram.error import BadRequest, TelegramError

from bot.cards import MovieCard, build_card_caption

logger = logging.getLogger(__name__)


async def _answer_callback(update: Update) -> None:
    if not update.callback_query:
        return
    try:
        await update.callback_query.answer()
    except BadRequest as exc:
        message = str(exc).lower()
        # Callback can expire while we build recommendations; ignore only that case.
        if "query is too old" not in message and "query id is invalid" not in message:
            raise


def _target_message(update: Update) -> Optional[Message]:
    if update.callback_query and update.callback_query.message:
        return update.callback_query.message
    return update.message


async def _send(
    update: Update,
    text: str,
    *,
    reply_markup: Optional[InlineKeyboardMarkup] = None,
    parse_mode: Optional[str] = None,
) -> Optional[Message]:
    await _answer_callback(update)
    message = _target_message(update)
    if message is None:
        return None
    return await message.reply_text(
        text=text,
        reply_markup=reply_markup,
        parse_mode=parse_mode,
    )


async def _send_card(
    update: Update,
    card: MovieCard,
    *,
    reply_markup: Optional[InlineKeyboardMarkup] = None,
) -> Optional[Message]:
    """Send a poster with caption; fall back to text when there is no usable image."""

    message = _target_message(update)
    if message is None:
        return None
    caption = build_card_caption(card)
    if card.poster_url:
        try:
            return await message.reply_photo(
                photo=card.poster_url,
                caption=caption,
                parse_mode=ParseMode.HTML,
                reply_markup=reply_markup,
            )
        except BadRequest as exc:
            logger.warning("Poster rejected by Telegram (%s): %s", card.poster_url, exc)
    return await message.reply_text(
        text=caption,
        parse_mode=ParseMode.HTML,
        reply_markup=reply_markup,
    )


@asynccontextmanager
async def _chat_action(
    update: Update,
    context,
    action: str = ChatAction.TYPING,
    *,
    refresh_seconds: float = 4.5,
):
    """Keep ``action`` visible in the chat until the block exits.

    Telegram drops a chat action after about five seconds, so it is re-sent on
    a timer while generation or enrichment is still running.
    """

    chat = update.effective_chat
    if chat is None:
        yield
        return

    async def _refresh() -> None:
        while True:
            try:
                await context.bot.send_chat_action(chat_id=chat.id, action=action)
            except TelegramError as exc:
                logger.debug("Chat action %s not delivered: %s", action, exc)
            await asyncio.sleep(refresh_seconds)

    task = asyncio.create_task(_refresh())
    try:
        yield
    finally:
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task


__all__ = [
    "_answer_callback",
    "_send",
    "_send_card",
    "_chat_action",
]

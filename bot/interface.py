from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from bot.callback_ids import NEW_VIBE, ROLL_AGAIN
from bot.ui_texts import BUTTON_NEW_VIBE, BUTTON_ROLL_AGAIN


def get_vibe_keyboard() -> InlineKeyboardMarkup:
    keyboard = [
        [
            InlineKeyboardButton(BUTTON_ROLL_AGAIN, callback_data=ROLL_AGAIN),
            InlineKeyboardButton(BUTTON_NEW_VIBE, callback_data=NEW_VIBE),
        ]
    ]
    return InlineKeyboardMarkup(keyboard)

"""Render one recommendation card (caption + optional poster)."""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Any, Dict, Optional

from bot.ui_texts import CARD_TEMPLATE, RATINGS_TEMPLATE, VALUE_NOT_AVAILABLE

_CAPTION_LIMIT = 1024


@dataclass
class MovieCard:
    movie: Dict[str, str]
    poster_url: Optional[str] = None
    ratings: Optional[Dict[str, Optional[str]]] = None


def _value(ratings: Optional[Dict[str, Any]], key: str) -> str:
    if not ratings:
        return VALUE_NOT_AVAILABLE
    value = ratings.get(key)
    return str(value) if value else VALUE_NOT_AVAILABLE


def format_ratings_line(ratings: Optional[Dict[str, Optional[str]]]) -> str:
    return RATINGS_TEMPLATE.format(
        imdb=html.escape(_value(ratings, "imdb")),
        rotten_tomatoes=html.escape(_value(ratings, "rottenTomatoes")),
        metacritic=html.escape(_value(ratings, "metacritic")),
    )


def _render(movie: Dict[str, str], vibe_match: str, ratings_line: str) -> str:
    return CARD_TEMPLATE.format(
        title=html.escape(movie.get("title", "")),
        year=html.escape(movie.get("year", "") or VALUE_NOT_AVAILABLE),
        vibe_match=html.escape(vibe_match),
        ratings=ratings_line,
    )


def build_card_caption(card: MovieCard) -> str:
    ratings_line = format_ratings_line(card.ratings)
    vibe_match = card.movie.get("vibe_match", "")
    caption = _render(card.movie, vibe_match, ratings_line)
    # Photo captions are capped; only the rationale is shortened.
    while len(caption) > _CAPTION_LIMIT and vibe_match:
        overflow = len(caption) - _CAPTION_LIMIT + 3
        vibe_match = vibe_match[: max(len(vibe_match) - overflow, 0)].rstrip()
        caption = _render(card.movie, vibe_match + "...", ratings_line)
    return caption


__all__ = [
    "MovieCard",
    "format_ratings_line",
    "build_card_caption",
]

"""Unit tests for card rendering and the per-chat vibe session."""

from __future__ import annotations

import unittest

from bot.cards import MovieCard, build_card_caption, format_ratings_line
from bot.session import current_vibe, remember_titles, shown_titles, start_session

_MOVIE = {
    "title": "Amélie",
    "year": "2001",
    "vibe_match": "Whimsy & small kindnesses in Montmartre.",
    "tmdb_search_query": "Amelie",
}


class CardTests(unittest.TestCase):
    def test_caption_escapes_html(self) -> None:
        caption = build_card_caption(MovieCard(movie=_MOVIE))
        self.assertIn("<b>Amélie</b> (2001)", caption)
        self.assertIn("Whimsy &amp; small kindnesses", caption)

    def test_missing_ratings_show_placeholder(self) -> None:
        line = format_ratings_line({"imdb": "8.3", "rottenTomatoes": None, "metacritic": None})
        self.assertIn("IMDb: 8.3", line)
        self.assertIn("RT: n/a", line)
        self.assertIn("Metacritic: n/a", line)
        self.assertEqual(format_ratings_line(None).count("n/a"), 3)

    def test_long_rationale_is_shortened_to_caption_limit(self) -> None:
        movie = dict(_MOVIE, vibe_match="a" * 2000)
        caption = build_card_caption(MovieCard(movie=movie, ratings=None))
        self.assertLessEqual(len(caption), 1024)
        self.assertIn("...", caption)
        self.assertIn("<b>Amélie</b>", caption)


class SessionTests(unittest.TestCase):
    def test_session_lifecycle(self) -> None:
        chat_data = {}
        self.assertIsNone(current_vibe(chat_data))
        start_session(chat_data, "rainy neon")
        self.assertEqual(current_vibe(chat_data), "rainy neon")
        self.assertEqual(shown_titles(chat_data), [])

    def test_remember_titles_dedupes_case_insensitively(self) -> None:
        chat_data = {}
        start_session(chat_data, "rainy neon")
        remember_titles(chat_data, ["Heat", "Drive"])
        remember_titles(chat_data, ["HEAT", "Thief"])
        self.assertEqual(shown_titles(chat_data), ["Heat", "Drive", "Thief"])

    def test_new_session_resets_shown_titles(self) -> None:
        chat_data = {}
        start_session(chat_data, "rainy neon")
        remember_titles(chat_data, ["Heat"])
        start_session(chat_data, "sunny road trip")
        self.assertEqual(shown_titles(chat_data), [])

    def test_remember_without_session_is_noop(self) -> None:
        chat_data = {}
        remember_titles(chat_data, ["Heat"])
        self.assertEqual(chat_data, {})


if __name__ == "__main__":
    unittest.main()

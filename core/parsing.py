"""Turn raw provider replies into :class:`Movie` tuples."""

from __future__ import annotations

import json
import re
from typing import Any, List, Tuple

from core.errors import MovieParseError
from core.models import Movie

_FENCE_RE = re.compile(r"```(?:json|JSON)?")


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text or "").strip()


def _movie_list(parsed: Any) -> List[Any]:
    if isinstance(parsed, list):
        return parsed
    if isinstance(parsed, dict):
        movies = parsed.get("movies")
        if isinstance(movies, list):
            return movies
    raise MovieParseError("Reply is neither a movie list nor an object with 'movies'.")


def parse_movies(text: str, *, min_count: int = 1) -> Tuple[Movie, ...]:
    """Parse a reply; fewer than ``min_count`` distinct titles is a failure."""

    cleaned = strip_code_fences(text)
    if not cleaned:
        raise MovieParseError("Reply is empty.")
    try:
        parsed = json.loads(cleaned)
    except ValueError as exc:
        raise MovieParseError(f"Reply is not valid JSON: {exc}") from exc

    items = _movie_list(parsed)
    if not items:
        raise MovieParseError("Reply contains no movies.")
    movies = tuple(Movie.from_payload(item) for item in items)
    distinct = {movie.dedupe_key for movie in movies}
    if len(distinct) < min_count:
        raise MovieParseError(
            f"Reply contains {len(distinct)} distinct movies, expected {min_count}."
        )
    return movies


__all__ = [
    "strip_code_fences",
    "parse_movies",
]

"""Value objects passed between the UI layer and the core."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Tuple

from core.errors import MovieParseError

MOVIE_FIELDS = ("title", "year", "vibe_match", "tmdb_search_query")


def normalize_title(title: str) -> str:
    """Case-insensitive comparison key for exclusion and dedupe."""

    normalized = (title or "").strip().casefold()
    normalized = re.sub(r"\s+", " ", normalized)
    return normalized


def _clean_titles(values: Iterable[Any]) -> Tuple[str, ...]:
    titles = []
    for value in values or ():
        if value is None:
            continue
        text = str(value).strip()
        if text:
            titles.append(text)
    return tuple(titles)


@dataclass(frozen=True)
class VibeRequest:
    text: str
    exclude: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        text = (self.text or "").strip() if isinstance(self.text, str) else ""
        if not text:
            raise ValueError("Vibe text cannot be empty.")
        object.__setattr__(self, "text", text)
        object.__setattr__(self, "exclude", _clean_titles(self.exclude))


@dataclass(frozen=True)
class Movie:
    title: str
    year: str
    vibe_match: str
    tmdb_search_query: str

    @property
    def dedupe_key(self) -> str:
        return normalize_title(self.title)

    @classmethod
    def from_payload(cls, payload: Any) -> "Movie":
        if not isinstance(payload, dict):
            raise MovieParseError(f"Movie entry is not an object: {type(payload).__name__}")
        values: Dict[str, str] = {}
        for name in MOVIE_FIELDS:
            raw = payload.get(name)
            if isinstance(raw, bool) or raw is None:
                raise MovieParseError(f"Movie entry is missing '{name}'.")
            text = str(raw).strip() if isinstance(raw, (str, int)) else ""
            if not text:
                raise MovieParseError(f"Movie entry is missing '{name}'.")
            values[name] = text
        return cls(**values)

    def to_dict(self) -> Dict[str, str]:
        return {
            "title": self.title,
            "year": self.year,
            "vibe_match": self.vibe_match,
            "tmdb_search_query": self.tmdb_search_query,
        }


@dataclass(frozen=True)
class GenerationResult:
    movies: Tuple[Movie, ...]
    provider: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "movies": [movie.to_dict() for movie in self.movies],
            "provider": self.provider,
        }


@dataclass(frozen=True)
class RatingsResult:
    imdb: Optional[str] = None
    rotten_tomatoes: Optional[str] = None
    metacritic: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "imdb": self.imdb,
            "rottenTomatoes": self.rotten_tomatoes,
            "metacritic": self.metacritic,
        }


@dataclass(frozen=True)
class ProviderEvent:
    """One generation attempt as seen by the orchestrator or an adapter."""

    provider: str
    outcome: str
    model: str = ""
    latency_seconds: float = 0.0
    error: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)


__all__ = [
    "MOVIE_FIELDS",
    "normalize_title",
    "VibeRequest",
    "Movie",
    "GenerationResult",
    "RatingsResult",
    "ProviderEvent",
]

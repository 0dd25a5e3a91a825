"""Vibe recommendations: generate, drop already-shown titles, truncate."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, Set

from core.config import Settings, load_settings
from core.generation import (
    GenerationAdapter,
    default_adapters,
    generate_movies_with_fallback,
)
from core.models import GenerationResult, Movie, VibeRequest, normalize_title
from core.runtime_monitor import EventObserver, record_event

logger = logging.getLogger(__name__)


def build_exclusion_lookup(exclude: Iterable[str]) -> Set[str]:
    return {key for key in (normalize_title(title) for title in exclude) if key}


def filter_excluded(movies: Sequence[Movie], exclude: Iterable[str]) -> List[Movie]:
    """Drop excluded titles and repeated titles within the same reply."""

    seen = build_exclusion_lookup(exclude)
    kept: List[Movie] = []
    for movie in movies:
        key = movie.dedupe_key
        if key in seen:
            logger.info("Dropping repeated recommendation: %s", movie.title)
            continue
        seen.add(key)
        kept.append(movie)
    return kept


def get_recommendations(
    vibe_text: str,
    exclude: Sequence[str] = (),
    *,
    target_count: Optional[int] = None,
    adapters: Optional[Sequence[GenerationAdapter]] = None,
    settings: Optional[Settings] = None,
    observer: Optional[EventObserver] = record_event,
) -> GenerationResult:
    """Recommend up to ``target_count`` movies for a vibe, skipping ``exclude``.

    Default adapters are built from ``settings`` with the same count, so the
    prompt and the reply check ask for exactly the number that is returned.
    """

    request = VibeRequest(text=vibe_text, exclude=tuple(exclude or ()))
    settings = settings or load_settings()
    if target_count is None:
        target_count = settings.target_count
    limit = max(int(target_count), 1)
    if adapters is None:
        adapters = default_adapters(
            replace(settings, target_count=limit),
            observer=observer,
        )

    result = generate_movies_with_fallback(
        request.text,
        request.exclude,
        adapters=adapters,
        observer=observer,
    )
    movies = filter_excluded(result.movies, request.exclude)
    if len(movies) < limit:
        logger.info(
            "Provider %s returned %s usable movies (wanted %s)",
            result.provider,
            len(movies),
            limit,
        )
    return GenerationResult(movies=tuple(movies[:limit]), provider=result.provider)


__all__ = [
    "build_exclusion_lookup",
    "filter_excluded",
    "get_recommendations",
]

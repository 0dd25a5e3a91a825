"""Request/response contract consumed by the UI layer.

Each handler takes a decoded JSON payload and returns ``(body, status)``.
Only an empty vibe, a missing title and total generation failure produce
non-2xx statuses; enrichment misses come back as ``null`` values.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from core.config import Settings
from core.errors import ConfigurationError, GenerationFailedError
from core.generation import GenerationAdapter
from core.posters import resolve_poster as _resolve_poster
from core.ratings import resolve_ratings as _resolve_ratings
from core.recommendations import get_recommendations

logger = logging.getLogger(__name__)

ApiResponse = Tuple[Dict[str, Any], int]


def _text(payload: Dict[str, Any], *keys: str) -> str:
    for key in keys:
        value = payload.get(key)
        if isinstance(value, (str, int)) and not isinstance(value, bool):
            text = str(value).strip()
            if text:
                return text
    return ""


def _titles(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item).strip() for item in value if isinstance(item, str) and item.strip()]


def generate(
    payload: Dict[str, Any],
    *,
    adapters: Optional[Sequence[GenerationAdapter]] = None,
    target_count: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> ApiResponse:
    payload = payload if isinstance(payload, dict) else {}
    vibe = _text(payload, "vibe", "userVibe")
    if not vibe:
        return {"error": "Missing vibe"}, 400

    exclude = _titles(payload.get("exclude"))
    logger.info("Vibe request received: %r (exclude=%s)", vibe, len(exclude))
    try:
        result = get_recommendations(
            vibe,
            exclude,
            target_count=target_count,
            adapters=adapters,
            settings=settings,
        )
    except ConfigurationError as exc:
        return {"error": str(exc)}, 500
    except GenerationFailedError as exc:
        return {"error": str(exc)}, 503
    return result.to_dict(), 200


def resolve_poster(
    payload: Dict[str, Any],
    *,
    settings: Optional[Settings] = None,
) -> ApiResponse:
    payload = payload if isinstance(payload, dict) else {}
    title = _text(payload, "title")
    search_query = _text(payload, "tmdb_search_query", "searchQuery")
    if not title and not search_query:
        return {"error": "Missing title or search query"}, 400

    year = _text(payload, "year") or None
    poster_url = _resolve_poster(title, year, search_query or None, settings=settings)
    return {"posterUrl": poster_url}, 200


def resolve_ratings(
    payload: Dict[str, Any],
    *,
    settings: Optional[Settings] = None,
) -> ApiResponse:
    payload = payload if isinstance(payload, dict) else {}
    title = _text(payload, "title")
    if not title:
        return {"error": "Missing title"}, 400

    year = _text(payload, "year") or None
    ratings = _resolve_ratings(title, year, settings=settings)
    return {"ratings": ratings.to_dict() if ratings else None}, 200


__all__ = [
    "ApiResponse",
    "generate",
    "resolve_poster",
    "resolve_ratings",
]

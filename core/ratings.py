"""OMDb ratings lookup (IMDb, Rotten Tomatoes, Metacritic)."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from core.config import Settings, load_settings
from core.errors import MaxRetriesExceeded
from core.http_fetch import fetch_with_retry
from core.models import RatingsResult
from core.runtime_monitor import record_error

_NOT_AVAILABLE = "n/a"
_ROTTEN_TOMATOES_SOURCE = "Rotten Tomatoes"

logger = logging.getLogger(__name__)


def _available(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text or text.lower() == _NOT_AVAILABLE:
        return None
    return text


def _rotten_tomatoes(payload: Dict[str, Any]) -> Optional[str]:
    ratings = payload.get("Ratings")
    if not isinstance(ratings, list):
        return None
    for item in ratings:
        if isinstance(item, dict) and item.get("Source") == _ROTTEN_TOMATOES_SOURCE:
            return _available(item.get("Value"))
    return None


def ratings_from_payload(payload: Dict[str, Any]) -> RatingsResult:
    return RatingsResult(
        imdb=_available(payload.get("imdbRating")),
        rotten_tomatoes=_rotten_tomatoes(payload),
        metacritic=_available(payload.get("Metascore")),
    )


def _omdb_lookup(
    title: str,
    year: Optional[str],
    settings: Settings,
) -> Optional[Dict[str, Any]]:
    params: Dict[str, object] = {"apikey": settings.omdb_api_key, "t": title}
    if year:
        params["y"] = year
    response = fetch_with_retry(
        settings.omdb_base_url,
        params=params,
        max_attempts=settings.max_retries,
        base_delay=settings.retry_base_delay_seconds,
        timeout_seconds=settings.omdb_timeout_seconds,
    )
    try:
        payload = response.json()
    except ValueError:
        logger.warning("OMDb returned invalid JSON (HTTP %s)", response.status_code)
        return None
    if isinstance(payload, dict) and payload.get("Response") == "True":
        return payload
    return None


def resolve_ratings(
    title: str,
    year: Optional[str] = None,
    *,
    settings: Optional[Settings] = None,
) -> Optional[RatingsResult]:
    """Return ratings for ``title`` or ``None``; never raises."""

    settings = settings or load_settings()
    if not settings.omdb_api_key:
        logger.warning("OMDb API key is missing")
        return None
    title = (title or "").strip()
    year = (str(year).strip() if year is not None else "") or None
    if not title:
        return None

    try:
        payload = _omdb_lookup(title, year, settings)
        if payload is None and year:
            logger.info("OMDb miss for %s (%s), retrying by title only", title, year)
            payload = _omdb_lookup(title, None, settings)
    except (MaxRetriesExceeded, requests.RequestException) as exc:
        logger.error("OMDB ERROR: %s %s", type(exc).__name__, exc)
        record_error("omdb", exc)
        return None

    if payload is None:
        logger.info("No OMDb entry for %s", title)
        return None
    return ratings_from_payload(payload)


__all__ = [
    "ratings_from_payload",
    "resolve_ratings",
]

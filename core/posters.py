"""Poster lookup: TMDB search first, Wikipedia page image as fallback."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional

import requests

from core.config import Settings, load_settings
from core.errors import MaxRetriesExceeded
from core.http_fetch import fetch_with_retry
from core.runtime_monitor import record_error

TMDB_SEARCH_URL = "https://api.themoviedb.org/3/search/movie"
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w780"
WIKIPEDIA_API_URL = "https://en.wikipedia.org/w/api.php"
_TRAILING_YEAR_RE = re.compile(r"\s+\d{4}$")

logger = logging.getLogger(__name__)


def strip_trailing_year(title: str) -> str:
    return _TRAILING_YEAR_RE.sub("", (title or "").strip()).strip()


def _json_or_none(response: requests.Response) -> Optional[Dict[str, Any]]:
    try:
        payload = response.json()
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


def _tmdb_search(query: str, year: Optional[str], settings: Settings) -> Optional[str]:
    params: Dict[str, object] = {
        "api_key": settings.tmdb_api_key,
        "query": query,
        "language": "en-US",
        "page": 1,
        "include_adult": "false",
    }
    if year:
        params["year"] = year

    logger.info("Searching TMDB: %s (%s)", query, year or "any year")
    response = fetch_with_retry(
        TMDB_SEARCH_URL,
        params=params,
        max_attempts=settings.max_retries,
        base_delay=settings.retry_base_delay_seconds,
        timeout_seconds=settings.tmdb_timeout_seconds,
    )
    if not response.ok:
        logger.warning("TMDB API error: HTTP %s", response.status_code)
        return None

    data = _json_or_none(response)
    results = data.get("results") if data else None
    if not isinstance(results, list) or not results:
        return None
    top = results[0]
    path = top.get("poster_path") if isinstance(top, dict) else None
    if isinstance(path, str) and path.strip():
        return f"{TMDB_IMAGE_BASE_URL}{path.strip()}"
    return None


def fetch_tmdb_poster(
    query: str,
    year: Optional[str] = None,
    *,
    settings: Optional[Settings] = None,
) -> Optional[str]:
    """TMDB search with one yearless retry when the year-scoped search misses."""

    settings = settings or load_settings()
    if not settings.tmdb_api_key:
        return None

    url = _tmdb_search(query, year, settings)
    if url:
        return url
    if year:
        yearless_query = strip_trailing_year(query)
        logger.info(
            'No TMDB poster for %s (%s). Retrying as "%s" without year filter...',
            query,
            year,
            yearless_query,
        )
        return _tmdb_search(yearless_query, None, settings)
    return None


def fetch_wikipedia_poster(
    title: str,
    *,
    settings: Optional[Settings] = None,
) -> Optional[str]:
    settings = settings or load_settings()
    params: Dict[str, object] = {
        "action": "query",
        "generator": "search",
        "gsrsearch": f"{title} film",
        "gsrlimit": 1,
        "prop": "pageimages",
        "pithumbsize": 600,
        "format": "json",
    }
    logger.info("Falling back to Wikipedia for %s", title)
    response = fetch_with_retry(
        WIKIPEDIA_API_URL,
        params=params,
        max_attempts=settings.max_retries,
        base_delay=settings.retry_base_delay_seconds,
        timeout_seconds=settings.wikipedia_timeout_seconds,
    )
    if not response.ok:
        logger.warning("Wikipedia API error: HTTP %s", response.status_code)
        return None

    data = _json_or_none(response)
    query = data.get("query") if data else None
    pages = query.get("pages") if isinstance(query, dict) else None
    if not isinstance(pages, dict) or not pages:
        return None
    best_page = next(iter(pages.values()))
    thumbnail = best_page.get("thumbnail") if isinstance(best_page, dict) else None
    source = thumbnail.get("source") if isinstance(thumbnail, dict) else None
    if isinstance(source, str) and source.strip():
        return source.strip()
    return None


def resolve_poster(
    title: str,
    year: Optional[str] = None,
    search_query: Optional[str] = None,
    *,
    settings: Optional[Settings] = None,
) -> Optional[str]:
    """Return a poster URL for the movie or ``None``; never raises."""

    settings = settings or load_settings()
    title = (title or "").strip()
    query = (search_query or "").strip() or title
    year = (str(year).strip() if year is not None else "") or None
    if not query:
        return None

    try:
        url = fetch_tmdb_poster(query, year, settings=settings)
    except (MaxRetriesExceeded, requests.RequestException) as exc:
        logger.error("TMDB poster lookup failed for %s: %s", query, exc)
        record_error("tmdb", exc)
        url = None
    if url:
        logger.info("Found poster for: %s", query)
        return url

    try:
        url = fetch_wikipedia_poster(title or query, settings=settings)
    except (MaxRetriesExceeded, requests.RequestException) as exc:
        logger.error("Wikipedia poster lookup failed for %s: %s", title or query, exc)
        record_error("wikipedia", exc)
        url = None
    if not url:
        logger.info("No poster found for: %s", title or query)
    return url


__all__ = [
    "TMDB_SEARCH_URL",
    "TMDB_IMAGE_BASE_URL",
    "WIKIPEDIA_API_URL",
    "strip_trailing_year",
    "fetch_tmdb_poster",
    "fetch_wikipedia_poster",
    "resolve_poster",
]

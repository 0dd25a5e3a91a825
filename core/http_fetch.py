"""Retrying GET helper for metadata providers."""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, Optional

import requests

from core.errors import MaxRetriesExceeded

logger = logging.getLogger(__name__)

_DEFAULT_HEADERS = {
    "User-Agent": "VibeReel/1.0",
    "Accept": "application/json",
}


def is_retryable_status(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


def retry_delay_seconds(base_delay: float, attempt: int) -> float:
    return max(base_delay, 0.0) * max(attempt, 1)


def fetch_with_retry(
    url: str,
    *,
    params: Optional[Dict[str, object]] = None,
    headers: Optional[Dict[str, str]] = None,
    max_attempts: int = 3,
    base_delay: float = 1.0,
    timeout_seconds: float = 10.0,
    sleep: Callable[[float], None] = time.sleep,
) -> requests.Response:
    """GET ``url`` retrying on 429, 5xx and network errors.

    Any other status (including 4xx) is returned to the caller untouched.
    Raises :class:`MaxRetriesExceeded` once ``max_attempts`` are used up.
    """

    merged_headers = dict(_DEFAULT_HEADERS)
    if headers:
        merged_headers.update(headers)

    attempts = max(max_attempts, 1)
    last_error: Optional[Exception] = None
    last_status: Optional[int] = None

    for attempt in range(1, attempts + 1):
        try:
            response = requests.get(
                url,
                params=params,
                headers=merged_headers,
                timeout=timeout_seconds,
            )
        except requests.RequestException as exc:
            last_error = exc
            logger.warning(
                "Attempt %s/%s failed: %s %s", attempt, attempts, type(exc).__name__, exc
            )
        else:
            if not is_retryable_status(response.status_code):
                return response
            last_error = None
            last_status = response.status_code
            logger.warning(
                "Attempt %s/%s failed: HTTP %s", attempt, attempts, response.status_code
            )

        if attempt < attempts:
            sleep(retry_delay_seconds(base_delay, attempt))

    if last_error is not None:
        raise MaxRetriesExceeded(
            f"Max retries reached ({attempts}): {type(last_error).__name__}: {last_error}"
        ) from last_error
    raise MaxRetriesExceeded(f"Max retries reached ({attempts}): HTTP {last_status}")


__all__ = [
    "fetch_with_retry",
    "is_retryable_status",
    "retry_delay_seconds",
]

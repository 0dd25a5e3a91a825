"""Gemini generation adapter with multi-model fallback."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import requests

from core.config import Settings
from core.errors import GeminiError, ProviderError
from core.models import GenerationResult, ProviderEvent
from core.parsing import parse_movies
from core.prompts import build_single_prompt
from core.runtime_monitor import EventObserver

_API_URL_TEMPLATE = (
    "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
)
_RATE_LIMIT_STATUS = "RESOURCE_EXHAUSTED"

logger = logging.getLogger(__name__)


class GeminiRequestError(GeminiError):
    """Failure of a single Gemini model call."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        api_status: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.api_status = api_status


def _extract_text(payload: Dict[str, Any]) -> str:
    candidates = payload.get("candidates")
    if not isinstance(candidates, list):
        return ""

    for candidate in candidates:
        if not isinstance(candidate, dict):
            continue
        content = candidate.get("content")
        if not isinstance(content, dict):
            continue
        parts: List[Any] = content.get("parts", [])
        if not isinstance(parts, list):
            continue
        texts: List[str] = []
        for part in parts:
            if isinstance(part, dict):
                text = part.get("text")
                if isinstance(text, str) and text.strip():
                    texts.append(text.strip())
        if texts:
            return "\n".join(texts)
    return ""


def _extract_block_reason(payload: Dict[str, Any]) -> Optional[str]:
    prompt_feedback = payload.get("promptFeedback")
    if isinstance(prompt_feedback, dict):
        block_reason = prompt_feedback.get("blockReason")
        if isinstance(block_reason, str) and block_reason:
            return block_reason
    return None


def _extract_error_details(response: requests.Response) -> Tuple[str, str]:
    """Return ``(api_status, details)`` from a Gemini error body."""

    try:
        payload = response.json()
    except ValueError:
        return "", response.text[:250]
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict):
            status = str(error.get("status") or "")
            message = str(error.get("message") or "")
            return status, " ".join(part for part in (status, message) if part)
        if error:
            return "", str(error)
    return "", ""


def is_rate_limit_error(exc: BaseException) -> bool:
    if getattr(exc, "status_code", None) == 429:
        return True
    return getattr(exc, "api_status", None) == _RATE_LIMIT_STATUS


class GeminiAdapter:
    """Try each configured Gemini model in order until one returns movies."""

    name = "gemini"

    def __init__(
        self,
        settings: Settings,
        *,
        sleep: Callable[[float], None] = time.sleep,
        observer: Optional[EventObserver] = None,
    ) -> None:
        self._settings = settings
        self._sleep = sleep
        self._observer = observer

    @property
    def models(self) -> Sequence[str]:
        return self._settings.gemini_models

    def is_configured(self) -> bool:
        return bool(self._settings.gemini_api_key)

    def _emit(self, event: ProviderEvent) -> None:
        if self._observer is not None:
            self._observer(event)

    def _request(self, model: str, prompt: str) -> str:
        payload: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": 0.8},
        }
        try:
            response = requests.post(
                _API_URL_TEMPLATE.format(model=model),
                headers={"x-goog-api-key": self._settings.gemini_api_key},
                json=payload,
                timeout=self._settings.gemini_timeout_seconds,
            )
        except requests.RequestException as exc:
            raise GeminiRequestError(f"{type(exc).__name__}: {exc}") from exc

        if response.status_code >= 400:
            api_status, details = _extract_error_details(response)
            raise GeminiRequestError(
                f"Gemini API error (model={model}, status={response.status_code})"
                + (f": {details}" if details else ""),
                status_code=response.status_code,
                api_status=api_status,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise GeminiRequestError("Gemini returned invalid JSON.") from exc
        if not isinstance(data, dict):
            raise GeminiRequestError("Gemini returned unexpected response payload.")

        block_reason = _extract_block_reason(data)
        if block_reason:
            raise GeminiRequestError(f"Gemini blocked the request: {block_reason}")

        text = _extract_text(data)
        if not text:
            raise GeminiRequestError(f"Empty response from model={model}")
        return text

    def generate(self, vibe_text: str, exclude: Sequence[str] = ()) -> GenerationResult:
        if not self.is_configured():
            raise GeminiError("GEMINI_API_KEY is not configured.")

        prompt = build_single_prompt(vibe_text, exclude, count=self._settings.target_count)
        last_error: Optional[ProviderError] = None

        models = list(self.models)
        for index, model in enumerate(models):
            logger.info("[Gemini] Trying %s...", model)
            started = time.monotonic()
            try:
                movies = parse_movies(
                    self._request(model, prompt),
                    min_count=self._settings.target_count,
                )
            except ProviderError as exc:
                latency = time.monotonic() - started
                logger.warning("[Gemini] %s failed: %s", model, exc)
                self._emit(
                    ProviderEvent(
                        provider=self.name,
                        model=model,
                        outcome="failure",
                        latency_seconds=latency,
                        error=str(exc),
                    )
                )
                last_error = exc
                # Pause only when another model is still to be tried.
                if is_rate_limit_error(exc) and index < len(models) - 1:
                    self._sleep(self._settings.gemini_rate_limit_pause_seconds)
                continue

            latency = time.monotonic() - started
            logger.info("[Gemini] Success with %s", model)
            self._emit(
                ProviderEvent(
                    provider=self.name,
                    model=model,
                    outcome="success",
                    latency_seconds=latency,
                )
            )
            return GenerationResult(movies=movies, provider=f"{self.name}:{model}")

        raise GeminiError(
            "All Gemini models failed. "
            f"Last error: {last_error or 'no models configured'}"
        )


__all__ = [
    "GeminiAdapter",
    "GeminiRequestError",
    "is_rate_limit_error",
]

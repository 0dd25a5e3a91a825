"""Provider fallback chain: Gemini, then Groq, then DeepSeek."""

from __future__ import annotations

import logging
import time
from typing import List, Optional, Protocol, Sequence

from core.chat_completions import deepseek_adapter, groq_adapter
from core.config import Settings, load_settings
from core.errors import ConfigurationError, GenerationFailedError, ProviderError
from core.gemini import GeminiAdapter
from core.models import GenerationResult, ProviderEvent
from core.runtime_monitor import EventObserver, record_event

logger = logging.getLogger(__name__)


class GenerationAdapter(Protocol):
    name: str

    def is_configured(self) -> bool:
        ...

    def generate(self, vibe_text: str, exclude: Sequence[str] = ()) -> GenerationResult:
        ...


def default_adapters(
    settings: Optional[Settings] = None,
    *,
    observer: Optional[EventObserver] = None,
) -> List[GenerationAdapter]:
    """Adapters in priority order."""

    settings = settings or load_settings()
    return [
        GeminiAdapter(settings, observer=observer),
        groq_adapter(settings),
        deepseek_adapter(settings),
    ]


def generate_movies_with_fallback(
    vibe_text: str,
    exclude: Sequence[str] = (),
    *,
    adapters: Optional[Sequence[GenerationAdapter]] = None,
    observer: Optional[EventObserver] = record_event,
) -> GenerationResult:
    if adapters is None:
        adapters = default_adapters(observer=observer)

    def _emit(event: ProviderEvent) -> None:
        if observer is not None:
            observer(event)

    errors: List[str] = []
    configured = 0

    for adapter in adapters:
        if not adapter.is_configured():
            logger.info("[Fallback] Skipping %s: no API key configured", adapter.name)
            _emit(ProviderEvent(provider=adapter.name, outcome="skipped"))
            continue

        configured += 1
        started = time.monotonic()
        try:
            result = adapter.generate(vibe_text, exclude)
        except ProviderError as exc:
            latency = time.monotonic() - started
            logger.warning("[Fallback] %s failed: %s", adapter.name, exc)
            errors.append(f"{adapter.name}: {exc}")
            _emit(
                ProviderEvent(
                    provider=adapter.name,
                    outcome="failure",
                    latency_seconds=latency,
                    error=str(exc),
                )
            )
            continue

        _emit(
            ProviderEvent(
                provider=adapter.name,
                model=result.provider.split(":", 1)[-1],
                outcome="success",
                latency_seconds=time.monotonic() - started,
            )
        )
        return result

    if configured == 0:
        logger.error("[Fallback] No generation provider is configured.")
        raise ConfigurationError()

    logger.error("[Fallback] All providers failed: %s", " | ".join(errors))
    raise GenerationFailedError(errors)


__all__ = [
    "GenerationAdapter",
    "default_adapters",
    "generate_movies_with_fallback",
]

"""Exception hierarchy shared by generation and enrichment code."""

from __future__ import annotations

from typing import Sequence

NOT_CONFIGURED_MESSAGE = (
    "No AI providers configured. "
    "Please set GEMINI_API_KEY, GROQ_API_KEY, or DEEPSEEK_API_KEY."
)
OVERWHELMED_MESSAGE = "The cinematic oracle is overwhelmed. Please try again in a moment."


class VibeReelError(RuntimeError):
    """Base class for errors raised by the recommendation core."""


class ConfigurationError(VibeReelError):
    """Raised when no generation provider has a credential."""

    def __init__(self, message: str = NOT_CONFIGURED_MESSAGE) -> None:
        super().__init__(message)


class ProviderError(VibeReelError):
    """Raised when a single generation provider (or model) fails."""


class MovieParseError(ProviderError):
    """Raised when a provider reply cannot be turned into movies."""


class GeminiError(ProviderError):
    """Raised when Gemini returns an unusable response."""


class ChatCompletionsError(ProviderError):
    """Raised when an OpenAI-compatible chat endpoint fails."""


class GenerationFailedError(VibeReelError):
    """Raised when every configured provider failed.

    The message stays generic; per-provider details are kept on ``errors``
    for logs only.
    """

    def __init__(self, errors: Sequence[str] = ()) -> None:
        super().__init__(OVERWHELMED_MESSAGE)
        self.errors = list(errors)


class MaxRetriesExceeded(VibeReelError):
    """Raised by the fetch helper once every attempt has failed."""


__all__ = [
    "NOT_CONFIGURED_MESSAGE",
    "OVERWHELMED_MESSAGE",
    "VibeReelError",
    "ConfigurationError",
    "ProviderError",
    "MovieParseError",
    "GeminiError",
    "ChatCompletionsError",
    "GenerationFailedError",
    "MaxRetriesExceeded",
]

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()


def _env_str(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_list(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


TELEGRAM_TOKEN = os.getenv("TELEGRAM_TOKEN")

GEMINI_API_KEY = _env_str("GEMINI_API_KEY")
GEMINI_MODEL = _env_str("GEMINI_MODEL", "gemini-2.0-flash")
GEMINI_FALLBACK_MODELS = _env_list(
    "GEMINI_FALLBACK_MODELS",
    ("gemini-1.5-flash", "gemini-1.5-pro"),
)
GEMINI_TIMEOUT_SECONDS = _env_float("GEMINI_TIMEOUT_SECONDS", 30.0)
GEMINI_RATE_LIMIT_PAUSE_SECONDS = _env_float("GEMINI_RATE_LIMIT_PAUSE_SECONDS", 1.0)

GROQ_API_KEY = _env_str("GROQ_API_KEY")
GROQ_BASE_URL = _env_str("GROQ_BASE_URL", "https://api.groq.com/openai/v1")
GROQ_MODEL = _env_str("GROQ_MODEL", "llama-3.3-70b-versatile")

DEEPSEEK_API_KEY = _env_str("DEEPSEEK_API_KEY")
DEEPSEEK_BASE_URL = _env_str("DEEPSEEK_BASE_URL", "https://api.deepseek.com")
DEEPSEEK_MODEL = _env_str("DEEPSEEK_MODEL", "deepseek-chat")

LLM_TIMEOUT_SECONDS = _env_float("LLM_TIMEOUT_SECONDS", 30.0)

TMDB_API_KEY = _env_str("TMDB_API_KEY")
TMDB_TIMEOUT_SECONDS = _env_float("TMDB_TIMEOUT_SECONDS", 10.0)

OMDB_API_KEY = _env_str("OMDB_API_KEY")
OMDB_BASE_URL = _env_str("OMDB_BASE_URL", "https://www.omdbapi.com/")
OMDB_TIMEOUT_SECONDS = _env_float("OMDB_TIMEOUT_SECONDS", 10.0)

WIKIPEDIA_TIMEOUT_SECONDS = _env_float("WIKIPEDIA_TIMEOUT_SECONDS", 10.0)

EXTERNAL_API_MAX_RETRIES = _env_int("EXTERNAL_API_MAX_RETRIES", 3)
EXTERNAL_API_RETRY_BASE_DELAY_SECONDS = _env_float(
    "EXTERNAL_API_RETRY_BASE_DELAY_SECONDS", 1.0
)

RECOMMENDATION_COUNT = _env_int("RECOMMENDATION_COUNT", 4)


@dataclass(frozen=True)
class Settings:
    """Credentials and tunables handed to adapters and resolvers."""

    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    gemini_fallback_models: Tuple[str, ...] = ("gemini-1.5-flash", "gemini-1.5-pro")
    gemini_timeout_seconds: float = 30.0
    gemini_rate_limit_pause_seconds: float = 1.0
    groq_api_key: str = ""
    groq_base_url: str = "https://api.groq.com/openai/v1"
    groq_model: str = "llama-3.3-70b-versatile"
    deepseek_api_key: str = ""
    deepseek_base_url: str = "https://api.deepseek.com"
    deepseek_model: str = "deepseek-chat"
    llm_timeout_seconds: float = 30.0
    tmdb_api_key: str = ""
    tmdb_timeout_seconds: float = 10.0
    omdb_api_key: str = ""
    omdb_base_url: str = "https://www.omdbapi.com/"
    omdb_timeout_seconds: float = 10.0
    wikipedia_timeout_seconds: float = 10.0
    max_retries: int = 3
    retry_base_delay_seconds: float = 1.0
    target_count: int = 4
    telegram_token: Optional[str] = field(default=None, repr=False)

    @property
    def gemini_models(self) -> Tuple[str, ...]:
        models = [self.gemini_model, *self.gemini_fallback_models]
        unique_models = []
        seen = set()
        for model in models:
            normalized = (model or "").strip()
            if not normalized or normalized in seen:
                continue
            seen.add(normalized)
            unique_models.append(normalized)
        return tuple(unique_models)


def load_settings() -> Settings:
    """Build :class:`Settings` from the module-level environment values."""

    return Settings(
        gemini_api_key=GEMINI_API_KEY,
        gemini_model=GEMINI_MODEL,
        gemini_fallback_models=GEMINI_FALLBACK_MODELS,
        gemini_timeout_seconds=GEMINI_TIMEOUT_SECONDS,
        gemini_rate_limit_pause_seconds=GEMINI_RATE_LIMIT_PAUSE_SECONDS,
        groq_api_key=GROQ_API_KEY,
        groq_base_url=GROQ_BASE_URL,
        groq_model=GROQ_MODEL,
        deepseek_api_key=DEEPSEEK_API_KEY,
        deepseek_base_url=DEEPSEEK_BASE_URL,
        deepseek_model=DEEPSEEK_MODEL,
        llm_timeout_seconds=LLM_TIMEOUT_SECONDS,
        tmdb_api_key=TMDB_API_KEY,
        tmdb_timeout_seconds=TMDB_TIMEOUT_SECONDS,
        omdb_api_key=OMDB_API_KEY,
        omdb_base_url=OMDB_BASE_URL,
        omdb_timeout_seconds=OMDB_TIMEOUT_SECONDS,
        wikipedia_timeout_seconds=WIKIPEDIA_TIMEOUT_SECONDS,
        max_retries=max(EXTERNAL_API_MAX_RETRIES, 1),
        retry_base_delay_seconds=max(EXTERNAL_API_RETRY_BASE_DELAY_SECONDS, 0.0),
        target_count=max(RECOMMENDATION_COUNT, 1),
        telegram_token=TELEGRAM_TOKEN,
    )

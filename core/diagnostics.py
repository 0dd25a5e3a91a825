"""Startup diagnostics for Vibe Reel."""

from __future__ import annotations

from typing import List, Optional

from core.config import Settings, load_settings
from core.generation import default_adapters


def _format_status(ok: bool) -> str:
    return "✅" if ok else "⚠️"


def provider_chain_summary(settings: Settings) -> List[str]:
    """Names of generation providers that will actually be tried, in order."""

    return [adapter.name for adapter in default_adapters(settings) if adapter.is_configured()]


def print_startup_diagnostics(settings: Optional[Settings] = None) -> None:
    """Print startup diagnostics before the bot starts."""

    settings = settings or load_settings()
    print("🔎 Startup environment check:")

    token_ok = bool(settings.telegram_token)
    print(f"{_format_status(token_ok)} TELEGRAM_TOKEN: {'set' if token_ok else 'missing'}")

    for key_name, value in (
        ("GEMINI_API_KEY", settings.gemini_api_key),
        ("GROQ_API_KEY", settings.groq_api_key),
        ("DEEPSEEK_API_KEY", settings.deepseek_api_key),
        ("TMDB_API_KEY", settings.tmdb_api_key),
        ("OMDB_API_KEY", settings.omdb_api_key),
    ):
        print(f"{_format_status(bool(value))} {key_name}: {'set' if value else 'missing'}")

    print(f"{_format_status(True)} Gemini models: {', '.join(settings.gemini_models)}")

    chain = provider_chain_summary(settings)
    if chain:
        print(f"{_format_status(True)} Generation chain: {' -> '.join(chain)}")
    else:
        print(f"{_format_status(False)} Generation chain: no provider configured")

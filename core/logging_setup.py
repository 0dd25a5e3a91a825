"""Application-wide logging configuration.

TMDB and OMDb take their keys as query parameters and the Telegram token is
part of every Bot API URL, so request errors carry secrets in their text.
Every handler installed here runs records through :class:`SecretRedactingFilter`.
"""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

_LOGGING_INITIALIZED = False
_NOISY_LOGGERS = ("httpx", "urllib3", "telegram.ext")
_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_REDACTED = "***"

_QUERY_SECRET_RE = re.compile(r"(?i)\b((?:api_?key|key)=)[^&\s'\"]+")
_BOT_TOKEN_RE = re.compile(r"\bbot\d+:[\w-]+")


def redact_secrets(text: str) -> str:
    text = _QUERY_SECRET_RE.sub(r"\1" + _REDACTED, text)
    return _BOT_TOKEN_RE.sub("bot" + _REDACTED, text)


class SecretRedactingFilter(logging.Filter):
    """Rewrite the rendered message with API keys and bot tokens masked."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_secrets(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def default_log_path() -> Path:
    return Path(__file__).resolve().parents[1] / "data" / "logs" / "vibereel.log"


def resolve_log_path(log_path: Optional[Path] = None) -> Optional[Path]:
    """``LOG_FILE`` overrides the default path; empty or ``-`` means console only."""

    if log_path is not None:
        return log_path
    raw = os.getenv("LOG_FILE")
    if raw is None:
        return default_log_path()
    raw = raw.strip()
    if raw in ("", "-"):
        return None
    return Path(raw).expanduser()


def build_handlers(log_path: Optional[Path]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                filename=log_path,
                maxBytes=2 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
        )
    redactor = SecretRedactingFilter()
    for handler in handlers:
        handler.addFilter(redactor)
    return handlers


def setup_logging(log_path: Optional[Path] = None) -> None:
    """Configure root logging once for the console and an optional log file."""

    global _LOGGING_INITIALIZED
    if _LOGGING_INITIALIZED:
        return

    level_name = (os.getenv("LOG_LEVEL") or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=level,
        format=_LOG_FORMAT,
        handlers=build_handlers(resolve_log_path(log_path)),
    )
    # Polling requests are logged by these at INFO on every update.
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    _LOGGING_INITIALIZED = True


__all__ = [
    "SecretRedactingFilter",
    "build_handlers",
    "default_log_path",
    "redact_secrets",
    "resolve_log_path",
    "setup_logging",
]

"""Command identifiers and registration order."""

from __future__ import annotations

from typing import Dict, Tuple

COMMAND_START = "start"
COMMAND_HELP = "help"
COMMAND_VIBE = "vibe"
COMMAND_DIAG = "diag"

REGISTRY_ORDER = (
    COMMAND_START,
    COMMAND_HELP,
    COMMAND_VIBE,
    COMMAND_DIAG,
)

HELP_COMMAND_ORDER = (
    COMMAND_VIBE,
    COMMAND_DIAG,
    COMMAND_HELP,
)

HELP_COMMAND_SPECS: Dict[str, Tuple[str, str]] = {
    COMMAND_VIBE: (" <mood>", "find films matching a mood"),
    COMMAND_DIAG: ("", "provider status and recent attempts"),
    COMMAND_HELP: ("", "this help"),
}


def slash(command: str, suffix: str = "") -> str:
    return f"/{command}{suffix}"


__all__ = [
    "COMMAND_START",
    "COMMAND_HELP",
    "COMMAND_VIBE",
    "COMMAND_DIAG",
    "REGISTRY_ORDER",
    "HELP_COMMAND_ORDER",
    "HELP_COMMAND_SPECS",
    "slash",
]

"""Callback-data identifiers."""

from __future__ import annotations

ROLL_AGAIN = "vibe:roll"
NEW_VIBE = "vibe:new"

PATTERN_ROLL_AGAIN = r"^vibe:roll$"
PATTERN_NEW_VIBE = r"^vibe:new$"

__all__ = [
    "ROLL_AGAIN",
    "NEW_VIBE",
    "PATTERN_ROLL_AGAIN",
    "PATTERN_NEW_VIBE",
]

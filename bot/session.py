"""Per-chat vibe session kept in ``context.chat_data``."""

from __future__ import annotations

from typing import Any, List, MutableMapping, Optional, Sequence, Set

from core.models import normalize_title

_SESSION_KEY = "vibe_session"
_MAX_SHOWN_TITLES = 200


def start_session(chat_data: MutableMapping[str, Any], vibe: str) -> None:
    chat_data[_SESSION_KEY] = {"vibe": vibe, "shown": []}


def current_vibe(chat_data: MutableMapping[str, Any]) -> Optional[str]:
    session = chat_data.get(_SESSION_KEY)
    if not isinstance(session, dict):
        return None
    vibe = session.get("vibe")
    return vibe if isinstance(vibe, str) and vibe else None


def shown_titles(chat_data: MutableMapping[str, Any]) -> List[str]:
    session = chat_data.get(_SESSION_KEY)
    if not isinstance(session, dict):
        return []
    return list(session.get("shown") or [])


def remember_titles(chat_data: MutableMapping[str, Any], titles: Sequence[str]) -> None:
    session = chat_data.get(_SESSION_KEY)
    if not isinstance(session, dict) or not titles:
        return
    merged = list(session.get("shown") or []) + list(titles)
    deduped: List[str] = []
    seen: Set[str] = set()
    for title in merged:
        norm = normalize_title(title)
        if not norm or norm in seen:
            continue
        seen.add(norm)
        deduped.append(title)
    session["shown"] = deduped[-_MAX_SHOWN_TITLES:]


__all__ = [
    "start_session",
    "current_vibe",
    "shown_titles",
    "remember_titles",
]

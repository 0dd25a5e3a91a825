"""Prompt builders shared by every generation provider."""

from __future__ import annotations

from typing import Sequence

VIBE_SYSTEM_PROMPT_TEMPLATE = (
    "You are the 'Vibe Reel' engine, a cinematic curator. Your goal is to map abstract "
    "human emotions, sensory descriptions, and natural language scenarios to cinematic "
    "masterpieces.\n"
    "- Analyze the Aesthetic, Emotional Frequency, and Narrative Tension of the user's input.\n"
    "- Requirement: Return exactly {count} movies in a valid JSON array.\n"
    "- Requirement: Each movie object must include: 'title', 'year', 'vibe_match' "
    "(a poetic, evocative explanation of why it fits the vibe), and 'tmdb_search_query' "
    "(the movie title ONLY, without year or extra text).\n"
    "- Diversity: Provide a mix of world cinema, classics, and modern hits. Avoid the most "
    "obvious choices unless they are a perfect fit.\n\n"
    "Output strictly valid JSON. No markdown formatting."
)
JSON_OBJECT_HINT = (
    'When a JSON object is required, wrap the array as {"movies": [...]}.'
)
EXCLUDE_PREFIX = (
    "IMPORTANT: Do NOT recommend any of these movies "
    "(the user has already seen them): "
)


def build_exclusion_clause(exclude: Sequence[str]) -> str:
    titles = [title.strip() for title in exclude if title and title.strip()]
    if not titles:
        return ""
    return EXCLUDE_PREFIX + ", ".join(titles) + "."


def build_system_prompt(
    exclude: Sequence[str] = (),
    *,
    count: int = 4,
    json_object: bool = False,
) -> str:
    """System instructions; ``json_object`` adds the wrapper hint for JSON mode."""

    prompt = VIBE_SYSTEM_PROMPT_TEMPLATE.format(count=count)
    if json_object:
        prompt += "\n" + JSON_OBJECT_HINT
    clause = build_exclusion_clause(exclude)
    if clause:
        prompt += "\n\n" + clause
    return prompt


def build_single_prompt(
    vibe_text: str,
    exclude: Sequence[str] = (),
    *,
    count: int = 4,
) -> str:
    """System instructions and user vibe folded into one text prompt."""

    return build_system_prompt(exclude, count=count) + f'\n\nUser Input: "{vibe_text}"'


__all__ = [
    "VIBE_SYSTEM_PROMPT_TEMPLATE",
    "JSON_OBJECT_HINT",
    "EXCLUDE_PREFIX",
    "build_exclusion_clause",
    "build_system_prompt",
    "build_single_prompt",
]

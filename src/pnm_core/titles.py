from __future__ import annotations

from .protocol import TITLE_FALLBACK, TITLE_LIMIT


def title_from_prompt(prompt: str | None, limit: int = TITLE_LIMIT, fallback: str = TITLE_FALLBACK) -> str:
    """Short title for a prompt: first `limit` chars, cut at the first comma."""
    if not prompt:
        return fallback
    short = prompt[:limit].split(",")[0].strip()
    return short or fallback

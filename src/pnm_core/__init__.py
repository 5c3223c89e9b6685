"""PromptNano Core - Shared constants, identity and title helpers."""
from .ids import canonicalize, record_id, source_id
from .titles import title_from_prompt

__all__ = ["canonicalize", "record_id", "source_id", "title_from_prompt"]

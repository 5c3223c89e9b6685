"""PromptNano - Deterministic identity functions."""
from __future__ import annotations

import base64
import hashlib
import unicodedata


def canonicalize(text: str | None) -> str:
    """Canonicalize text: NFKC, casefold, whitespace normalize."""
    if not text:
        return ""
    t = unicodedata.normalize("NFKC", text).casefold()
    return " ".join(t.split())


def _hash(b: bytes, prefix: str) -> str:
    """Compute truncated SHA-256 hash with base32 encoding."""
    h = hashlib.sha256(b).digest()[:15]
    return prefix + base64.b32encode(h).decode("ascii").lower().rstrip("=")


def source_id(data: bytes) -> str:
    """Generate deterministic ID for a raw image buffer."""
    return _hash(bytes(data), "f_")


def record_id(kind: str, prompt: str, negative_prompt: str | None = None) -> str:
    """Generate deterministic ID for an extracted record.

    Records that differ only in case or whitespace share an ID.
    """
    payload = f"{canonicalize(kind)}\x00{canonicalize(prompt)}\x00{canonicalize(negative_prompt)}"
    return _hash(payload.encode("utf-8"), "m_")

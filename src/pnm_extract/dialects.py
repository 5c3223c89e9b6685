"""Metadata dialect normalizer.

Two embedding conventions are recognized:

- ``parameters``: a flat text block, prompt first, then an optional
  ``Negative prompt:`` section, then a ``Steps: ...`` settings line.
- ``prompt``: a single value used verbatim as the prompt.

Each dialect keeps its own first-seen result. ``parameters`` wins over
``prompt`` regardless of which chunk came first.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Iterable

from pnm_core.protocol import KEY_PARAMETERS, KEY_PROMPT, NEGATIVE_PREFIX, STOP_PREFIXES

from .text import TextRecord


class MetadataKind(str, Enum):
    PARAMETERS = KEY_PARAMETERS
    PROMPT = KEY_PROMPT

    @classmethod
    def for_keyword(cls, keyword: str) -> "MetadataKind | None":
        try:
            return cls(keyword)
        except ValueError:
            return None


# Highest precedence first.
PRECEDENCE = (MetadataKind.PARAMETERS, MetadataKind.PROMPT)


@dataclass(frozen=True)
class CanonicalMetadata:
    prompt: str
    negative_prompt: str | None = None
    kind: MetadataKind = MetadataKind.PROMPT
    parameters: str | None = None  # raw block, parameters dialect only

    def to_dict(self) -> dict:
        d = asdict(self)
        d["kind"] = self.kind.value
        return d


def parse_parameters(text: str) -> tuple[str, str | None]:
    """Split a parameters block into (prompt, negative_prompt).

    negative_prompt is None when no ``Negative prompt:`` line is present
    or its section is empty.
    """
    prompt_lines: list[str] = []
    negative_lines: list[str] = []
    target = prompt_lines
    seen_negative = False

    for line in text.split("\n"):
        if line.startswith(NEGATIVE_PREFIX):
            seen_negative = True
            target = negative_lines
            target.append(line[len(NEGATIVE_PREFIX):])
        elif line.startswith(STOP_PREFIXES):
            break
        else:
            target.append(line)

    prompt = "\n".join(prompt_lines).strip()
    negative = "\n".join(negative_lines).strip() if seen_negative else ""
    return prompt, negative or None


def _from_parameters(value: str) -> CanonicalMetadata:
    prompt, negative = parse_parameters(value)
    return CanonicalMetadata(prompt, negative, MetadataKind.PARAMETERS, value)


def _from_prompt(value: str) -> CanonicalMetadata:
    return CanonicalMetadata(value, None, MetadataKind.PROMPT)


PARSERS = {
    MetadataKind.PARAMETERS: _from_parameters,
    MetadataKind.PROMPT: _from_prompt,
}


def normalize(records: Iterable[TextRecord]) -> CanonicalMetadata | None:
    """Reduce a file's text records to at most one canonical record."""
    found: dict[MetadataKind, CanonicalMetadata] = {}
    for rec in records:
        kind = MetadataKind.for_keyword(rec.keyword)
        if kind is None or kind in found:
            continue
        found[kind] = PARSERS[kind](rec.value)

    for kind in PRECEDENCE:
        if kind in found:
            return found[kind]
    return None

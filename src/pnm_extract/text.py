"""Keyword/value decoding for tEXt and iTXt payloads."""
from __future__ import annotations

from typing import Iterable, Iterator, NamedTuple

from pnm_core.protocol import ITXT_FLAGS_LEN, TAG_ITEXT, TAG_TEXT, TEXT_TAGS

from .chunks import Chunk


class UndecodableText(ValueError):
    """Payload is not a well-formed keyword/value record."""


class TextRecord(NamedTuple):
    keyword: str
    value: str
    chunk_type: str = TAG_TEXT


def decode_field(b: bytes) -> str:
    """UTF-8 first, Latin-1 if that fails."""
    try:
        return b.decode("utf-8")
    except UnicodeDecodeError:
        return b.decode("latin-1")


def _split_nul(b: bytes, what: str) -> tuple[bytes, bytes]:
    i = b.find(b"\x00")
    if i == -1:
        raise UndecodableText(f"No NUL after {what}")
    return b[:i], b[i + 1:]


def decode_text_record(chunk_type: str, payload: bytes) -> TextRecord:
    """Decode one text-bearing payload into a TextRecord."""
    keyword, rest = _split_nul(payload, "keyword")

    if chunk_type == TAG_TEXT:
        return TextRecord(decode_field(keyword), decode_field(rest), chunk_type)

    if chunk_type == TAG_ITEXT:
        if len(rest) < ITXT_FLAGS_LEN:
            raise UndecodableText("iTXt payload missing compression fields")
        # Compressed text is not inflated; skip it rather than return deflate bytes.
        if rest[0] != 0:
            raise UndecodableText("iTXt value is compressed")
        rest = rest[ITXT_FLAGS_LEN:]
        _language, rest = _split_nul(rest, "language tag")
        _translated, value = _split_nul(rest, "translated keyword")
        return TextRecord(decode_field(keyword), decode_field(value), chunk_type)

    raise UndecodableText(f"Chunk type {chunk_type!r} is not text-bearing")


def iter_text_records(chunks: Iterable[Chunk], stats: dict | None = None) -> Iterator[TextRecord]:
    """Decode every text-bearing chunk, skipping malformed ones."""
    for c in chunks:
        if c.type not in TEXT_TAGS:
            continue
        try:
            rec = decode_text_record(c.type, c.payload)
        except UndecodableText as e:
            if stats is not None:
                stats["undecodable"] = stats.get("undecodable", 0) + 1
                stats.setdefault("undecodable_at", []).append({"offset": c.offset, "detail": str(e)})
            continue
        yield rec

"""PNG chunk walker: disk layout is truth.

Chunks are reached only by offset math over the previous chunk's declared
length. Every read is bounds-checked by ByteCursor.
"""
from __future__ import annotations

import struct
from typing import Iterator, NamedTuple

from pnm_core.protocol import (
    PNG_SIGNATURE,
    SIGNATURE_LEN,
    CHUNK_HEADER_FMT,
    CHUNK_HEADER_LEN,
    CHUNK_TRAILER_LEN,
    TAG_END,
    TEXT_TAGS,
)


class FormatMismatch(ValueError):
    """Buffer does not start with the PNG signature."""


class TruncatedInput(ValueError):
    """A read would run past the end of the buffer."""


class Chunk(NamedTuple):
    type: str
    payload: bytes
    offset: int  # offset of the length field
    length: int


class ByteCursor:
    """Forward-only reader over an immutable buffer."""

    def __init__(self, data: bytes, pos: int = 0):
        self.data = bytes(data)
        self.pos = pos

    def remaining(self) -> int:
        return max(0, len(self.data) - self.pos)

    def read(self, n: int) -> bytes:
        if n < 0 or n > self.remaining():
            raise TruncatedInput(f"read of {n} bytes at offset {self.pos} exceeds buffer of {len(self.data)}")
        out = self.data[self.pos:self.pos + n]
        self.pos += n
        return out

    def read_header(self) -> tuple[int, str]:
        length, tag = struct.unpack(CHUNK_HEADER_FMT, self.read(CHUNK_HEADER_LEN))
        return int(length), tag.decode("ascii", errors="replace")

    def skip(self, n: int) -> None:
        if n < 0 or n > self.remaining():
            raise TruncatedInput(f"skip of {n} bytes at offset {self.pos} exceeds buffer of {len(self.data)}")
        self.pos += n


def has_signature(data: bytes) -> bool:
    return len(data) >= SIGNATURE_LEN and bytes(data[:SIGNATURE_LEN]) == PNG_SIGNATURE


def new_scan_stats() -> dict:
    return {
        "chunks": 0,
        "text_chunks": 0,
        "truncated": False,
        "truncated_at": None,
        "truncated_type": None,
        "terminated": False,
        "undecodable": 0,
        "undecodable_at": [],
    }


def _mark_truncated(stats: dict | None, offset: int, tag: str) -> None:
    if stats is not None:
        stats["truncated"] = True
        stats["truncated_at"] = offset
        stats["truncated_type"] = tag


def walk_chunks(data: bytes, stats: dict | None = None) -> Iterator[Chunk]:
    """Yield chunks in file order until IEND or end of buffer.

    Raises FormatMismatch before yielding anything if the signature is wrong.
    A chunk whose payload or trailer would run past the buffer ends the walk
    and is recorded in ``stats``; nothing is raised or warned mid-walk.
    """
    if not has_signature(data):
        raise FormatMismatch("Buffer does not start with the PNG signature")

    cur = ByteCursor(data, SIGNATURE_LEN)
    while cur.remaining() >= CHUNK_HEADER_LEN:
        start_off = cur.pos
        length, tag = cur.read_header()

        try:
            payload = cur.read(length)
        except TruncatedInput:
            _mark_truncated(stats, start_off, tag)
            return

        if stats is not None:
            stats["chunks"] += 1
            if tag in TEXT_TAGS:
                stats["text_chunks"] += 1

        yield Chunk(tag, payload, start_off, length)

        if tag == TAG_END:
            if stats is not None:
                stats["terminated"] = True
            return

        try:
            cur.skip(CHUNK_TRAILER_LEN)
        except TruncatedInput:
            _mark_truncated(stats, start_off, tag)
            return


class ChunkWalker:
    """Single-pass walk over one buffer, keeping scan statistics."""

    def __init__(self, data: bytes):
        self.data = data
        self.scan_stats = new_scan_stats()
        self._started = False

    def __iter__(self) -> Iterator[Chunk]:
        if self._started:
            raise RuntimeError("ChunkWalker is single-pass")
        self._started = True
        return walk_chunks(self.data, self.scan_stats)

    def text_chunks(self) -> Iterator[Chunk]:
        return (c for c in self if c.type in TEXT_TAGS)

    def get_scan_stats(self) -> dict:
        return dict(self.scan_stats)

"""Synthetic PNG builder for fixtures and round-trip checks."""
from __future__ import annotations

import struct
import zlib

from pnm_core.protocol import (
    PNG_SIGNATURE,
    CHUNK_HEADER_FMT,
    TAG_HEADER,
    TAG_DATA,
    TAG_TEXT,
    TAG_ITEXT,
    TAG_END,
)


def chunk(tag: str, payload: bytes = b"") -> bytes:
    """Frame one chunk, CRC over type + payload."""
    t = tag.encode("ascii")
    crc = zlib.crc32(t + payload) & 0xFFFFFFFF
    return struct.pack(CHUNK_HEADER_FMT, len(payload), t) + payload + struct.pack(">I", crc)


def text_chunk(keyword: str, value: str, encoding: str = "utf-8") -> bytes:
    return chunk(TAG_TEXT, keyword.encode(encoding) + b"\x00" + value.encode(encoding))


def itxt_chunk(keyword: str, value: str, language: str = "", translated: str = "", compressed: bool = False) -> bytes:
    text = value.encode("utf-8")
    if compressed:
        text = zlib.compress(text)
    payload = (
        keyword.encode("utf-8") + b"\x00"
        + bytes([1 if compressed else 0, 0])  # flag, method 0 (deflate)
        + language.encode("ascii") + b"\x00"
        + translated.encode("utf-8") + b"\x00"
        + text
    )
    return chunk(TAG_ITEXT, payload)


def _ihdr(width: int = 1, height: int = 1) -> bytes:
    # 8-bit greyscale, no interlace
    return chunk(TAG_HEADER, struct.pack(">IIBBBBB", width, height, 8, 0, 0, 0, 0))


def _idat() -> bytes:
    # One scanline: filter byte + one pixel
    return chunk(TAG_DATA, zlib.compress(b"\x00\x00"))


def build_png(chunks: list[bytes], terminate: bool = True) -> bytes:
    """Signature followed by pre-framed chunks, optionally closed by IEND."""
    out = PNG_SIGNATURE + b"".join(chunks)
    if terminate:
        out += chunk(TAG_END)
    return out


def minimal_png(*text_chunks: bytes) -> bytes:
    """A valid 1x1 PNG with the given chunks between IHDR and IDAT."""
    return build_png([_ihdr(), *text_chunks, _idat()])

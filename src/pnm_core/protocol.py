"""PromptNano metadata protocol constants.

Single source of truth for the PNG container layout and the text keys the
extractor recognizes. Walker, encoder and report must stay in sync with it.
"""

# File signature: 137 80 78 71 13 10 26 10
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
SIGNATURE_LEN = 8

# Chunk: [Length(4, big-endian) | Type(4) | Payload(Length) | CRC(4)]
CHUNK_HEADER_FMT = ">I4s"
CHUNK_HEADER_LEN = 8
CHUNK_TRAILER_LEN = 4

# Chunk tags
TAG_HEADER = "IHDR"
TAG_DATA = "IDAT"
TAG_TEXT = "tEXt"  # keyword NUL value
TAG_ITEXT = "iTXt"  # keyword NUL flag method language NUL translated NUL value
TAG_END = "IEND"  # terminator

TEXT_TAGS = frozenset({TAG_TEXT, TAG_ITEXT})

# iTXt compression flag + compression method
ITXT_FLAGS_LEN = 2

# Dialect keywords
KEY_PARAMETERS = "parameters"  # flat text block (A1111 style)
KEY_PROMPT = "prompt"  # single prompt value (ComfyUI style)

# Parameter block line prefixes
NEGATIVE_PREFIX = "Negative prompt:"
STOP_PREFIXES = ("Steps:", "Size:")

# Caller-side title derivation
TITLE_LIMIT = 30
TITLE_FALLBACK = "AI Generated"

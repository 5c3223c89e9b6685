"""PromptNano Extract - PNG chunk walking and metadata normalization."""
from .chunks import Chunk, ChunkWalker, FormatMismatch, TruncatedInput, walk_chunks
from .dialects import CanonicalMetadata, MetadataKind, normalize, parse_parameters
from .engine import extract_metadata, inspect_image
from .text import TextRecord, UndecodableText, decode_text_record, iter_text_records

__all__ = [
    "Chunk",
    "ChunkWalker",
    "FormatMismatch",
    "TruncatedInput",
    "walk_chunks",
    "CanonicalMetadata",
    "MetadataKind",
    "normalize",
    "parse_parameters",
    "extract_metadata",
    "inspect_image",
    "TextRecord",
    "UndecodableText",
    "decode_text_record",
    "iter_text_records",
]

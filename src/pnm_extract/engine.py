from __future__ import annotations

from .chunks import ChunkWalker, FormatMismatch, new_scan_stats
from .const import ERRORS
from .dialects import CanonicalMetadata, normalize
from .text import iter_text_records


def _walk(data: bytes) -> tuple[CanonicalMetadata | None, dict]:
    walker = ChunkWalker(data)
    stats = walker.scan_stats
    meta = normalize(iter_text_records(walker.text_chunks(), stats))
    return meta, stats


def extract_metadata(data: bytes) -> CanonicalMetadata | None:
    """Canonical metadata embedded in a PNG buffer, or None.

    Never raises on malformed input: wrong signature, truncated chunks and
    undecodable text all degrade to whatever was recovered, possibly None.
    """
    try:
        meta, _ = _walk(data)
    except FormatMismatch:
        return None
    return meta


def inspect_image(data: bytes) -> dict:
    """Extraction result plus the issues met along the way."""
    issues = []
    try:
        meta, stats = _walk(data)
    except FormatMismatch:
        issues.append({"code": "E_FORMAT_MISMATCH", "message": ERRORS["E_FORMAT_MISMATCH"]})
        return {"status": "NONE", "metadata": None, "issue_count": len(issues), "issues": issues, "scan_stats": new_scan_stats()}

    if stats["truncated"]:
        issues.append({"code": "E_TRUNCATED", "message": ERRORS["E_TRUNCATED"], "offset": stats["truncated_at"], "type": stats["truncated_type"]})
    for bad in stats["undecodable_at"]:
        issues.append({"code": "E_UNDECODABLE_TEXT", "message": ERRORS["E_UNDECODABLE_TEXT"], **bad})
    if meta is None:
        issues.append({"code": "E_NO_METADATA", "message": ERRORS["E_NO_METADATA"]})

    return {
        "status": "FOUND" if meta is not None else "NONE",
        "metadata": meta.to_dict() if meta is not None else None,
        "issue_count": len(issues),
        "issues": issues,
        "scan_stats": dict(stats),
    }

from __future__ import annotations

import hashlib
from pathlib import Path
from warnings import warn

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from pnm_core.ids import record_id, source_id
from pnm_core.titles import title_from_prompt

from .chunks import ChunkWalker, FormatMismatch
from .dialects import normalize
from .text import iter_text_records

CHUNK_SCHEMA = pa.schema(
    [
        ("file", pa.string()),
        ("offset", pa.int64()),
        ("length", pa.int64()),
        ("type", pa.string()),
        ("status", pa.string()),
        ("content_hash", pa.string()),
    ]
)

METADATA_SCHEMA = pa.schema(
    [
        ("file", pa.string()),
        ("source_id", pa.string()),
        ("record_id", pa.string()),
        ("kind", pa.string()),
        ("title", pa.string()),
        ("prompt", pa.string()),
        ("negative_prompt", pa.string()),
    ]
)


def scan_file(path: Path, rel: str) -> tuple[list[dict], dict | None]:
    """Walk one file, returning its chunk rows and its metadata row (if any)."""
    data = Path(path).read_bytes()
    walker = ChunkWalker(data)
    rows: list[dict] = []

    def tap():
        for c in walker:
            rows.append(
                {
                    "file": rel,
                    "offset": int(c.offset),
                    "length": int(c.length),
                    "type": c.type,
                    "status": "WALKED",
                    "content_hash": hashlib.sha256(c.payload).hexdigest(),
                }
            )
            yield c

    try:
        meta = normalize(iter_text_records(tap(), walker.scan_stats))
    except FormatMismatch:
        return [], None

    stats = walker.scan_stats
    if stats["truncated"]:
        warn(f"Truncated {stats['truncated_type']!r} chunk at offset {stats['truncated_at']} in {rel}")
        rows.append(
            {
                "file": rel,
                "offset": int(stats["truncated_at"]),
                "length": 0,
                "type": stats["truncated_type"],
                "status": "TRUNCATED",
                "content_hash": "",
            }
        )
    for bad in stats["undecodable_at"]:
        for r in rows:
            if r["offset"] == bad["offset"]:
                r["status"] = "UNDECODABLE"

    if meta is None:
        return rows, None

    return rows, {
        "file": rel,
        "source_id": source_id(data),
        "record_id": record_id(meta.kind.value, meta.prompt, meta.negative_prompt),
        "kind": meta.kind.value,
        "title": title_from_prompt(meta.prompt),
        "prompt": meta.prompt,
        "negative_prompt": meta.negative_prompt,
    }


def _write(rows: list[dict], schema: pa.Schema, path: Path, sort_keys: list[str]) -> None:
    df = pd.DataFrame(rows)
    if df.empty:
        return
    df = df.sort_values(sort_keys)
    table = pa.Table.from_pandas(df, schema=schema, preserve_index=False)
    pq.write_table(table, path)


def compile_report(image_dir: Path, out_path: Path, pattern: str = "*.png") -> dict:
    """Build evidence/chunks.parquet and metadata.parquet for a directory of images."""
    image_dir = Path(image_dir)
    out_path = Path(out_path)

    chunk_rows: list[dict] = []
    meta_rows: list[dict] = []
    files = sorted(p for p in image_dir.rglob(pattern) if p.is_file())
    for p in files:
        rel = p.relative_to(image_dir).as_posix()
        rows, meta = scan_file(p, rel)
        chunk_rows.extend(rows)
        if meta is not None:
            meta_rows.append(meta)

    (out_path / "evidence").mkdir(parents=True, exist_ok=True)
    _write(chunk_rows, CHUNK_SCHEMA, out_path / "evidence/chunks.parquet", ["file", "offset"])
    _write(meta_rows, METADATA_SCHEMA, out_path / "metadata.parquet", ["file"])

    return {
        "files": len(files),
        "chunks": len(chunk_rows),
        "records": len(meta_rows),
        "unique_records": len({m["record_id"] for m in meta_rows}),
    }

"""PromptNano - Embedded prompt metadata extractor."""
from __future__ import annotations

import json
from pathlib import Path

import click

from pnm_core.protocol import TITLE_LIMIT
from pnm_core.titles import title_from_prompt

from .engine import extract_metadata, inspect_image
from .report import compile_report

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}


@click.group()
def main() -> None:
    pass


@main.command("show")
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
def show_cmd(files: tuple[Path, ...]) -> None:
    """Print one JSON inspection line per file."""
    for p in files:
        result = inspect_image(p.read_bytes())
        result["file"] = str(p)
        click.echo(json.dumps(result, **CANONICAL_JSON_KW))


@main.command("title")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--limit", default=TITLE_LIMIT, show_default=True, help="Maximum title length before the comma cut")
def title_cmd(file: Path, limit: int) -> None:
    """Print the title derived from a file's prompt."""
    meta = extract_metadata(file.read_bytes())
    click.echo(title_from_prompt(meta.prompt if meta else None, limit=limit))


@main.command("report")
@click.argument("images", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("out", type=click.Path(path_type=Path))
@click.option("--pattern", default="*.png", show_default=True, help="Glob for image files")
def report_cmd(images: Path, out: Path, pattern: str) -> None:
    """Write chunk evidence and extracted records as parquet."""
    try:
        summary = compile_report(images, out, pattern=pattern)
    except Exception as e:
        # Fail closed, with a single-line reason.
        click.echo(f"FATAL: {e}")
        raise SystemExit(1)

    click.echo(f"PASS: Report generated at {out}")
    click.echo(f"  Files: {summary['files']}")
    click.echo(f"  Chunks: {summary['chunks']}")
    click.echo(f"  Records: {summary['records']} ({summary['unique_records']} unique)")


if __name__ == "__main__":
    main()

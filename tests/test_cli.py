import json
import subprocess
import sys
from pathlib import Path

import pyarrow.parquet as pq
import pytest

from pnm_extract.encode import minimal_png, text_chunk
from pnm_extract.report import scan_file

REPO = Path(__file__).resolve().parents[1]


def run(args, cwd=REPO):
    return subprocess.run([sys.executable, *args], cwd=cwd, check=False, capture_output=True, text=True)


def make_samples(out: Path) -> None:
    r = run(["tools/make_samples.py", str(out)])
    assert r.returncode == 0, r.stderr + r.stdout


def test_show_and_title(tmp_path):
    samples = tmp_path / "samples"
    make_samples(samples)

    r = run(["-m", "pnm_extract.cli", "show", str(samples / "a1111.png"), str(samples / "not_png.png")])
    assert r.returncode == 0, r.stderr + r.stdout
    lines = [json.loads(x) for x in r.stdout.splitlines()]
    assert lines[0]["status"] == "FOUND"
    assert lines[0]["metadata"]["negative_prompt"] == "blurry, lowres"
    assert lines[1]["status"] == "NONE"
    assert lines[1]["issues"][0]["code"] == "E_FORMAT_MISMATCH"

    r = run(["-m", "pnm_extract.cli", "title", str(samples / "a1111.png")])
    assert r.returncode == 0, r.stderr + r.stdout
    assert r.stdout.strip() == "masterpiece"

    r = run(["-m", "pnm_extract.cli", "title", str(samples / "plain.png")])
    assert r.stdout.strip() == "AI Generated"


def test_report(tmp_path):
    samples = tmp_path / "samples"
    out = tmp_path / "report"
    make_samples(samples)

    r = run(["-m", "pnm_extract.cli", "report", str(samples), str(out)])
    assert r.returncode == 0, r.stderr + r.stdout
    assert "Records: 5 (3 unique)" in r.stdout

    meta = pq.read_table(out / "metadata.parquet").to_pandas()
    assert sorted(meta["file"]) == ["a1111.png", "a1111_itxt.png", "both.png", "comfy.png", "no_iend.png"]
    both = meta[meta["file"] == "both.png"].iloc[0]
    assert both["kind"] == "parameters"
    assert both["title"] == "masterpiece"

    chunks = pq.read_table(out / "evidence" / "chunks.parquet").to_pandas()
    assert "not_png.png" not in set(chunks["file"])
    assert set(chunks[chunks["file"] == "no_text.png"]["type"]) == {"IHDR", "IDAT", "IEND"}


def test_report_marks_truncated_files(tmp_path):
    samples = tmp_path / "samples"
    out = tmp_path / "report"
    make_samples(samples)

    r = run(["scripts/truncate_png.py", str(samples / "comfy.png")])
    assert r.returncode == 0, r.stderr + r.stdout

    r = run(["-m", "pnm_extract.cli", "report", str(samples), str(out)])
    assert r.returncode == 0, r.stderr + r.stdout

    chunks = pq.read_table(out / "evidence" / "chunks.parquet").to_pandas()
    comfy = chunks[chunks["file"] == "comfy.png"]
    truncated = comfy[comfy["status"] == "TRUNCATED"].iloc[0]
    assert truncated["type"] == "IDAT"


def test_scan_file_warns_after_walk(tmp_path):
    data = minimal_png(text_chunk("prompt", "A dog"), text_chunk("parameters", "A cat\nSteps: 20"))
    p = tmp_path / "cut.png"
    p.write_bytes(data[: data.index(b"parameters") + 5])

    with pytest.warns(UserWarning, match="Truncated 'tEXt'"):
        rows, meta = scan_file(p, "cut.png")

    assert meta["prompt"] == "A dog"
    assert rows[-1]["status"] == "TRUNCATED"
    assert rows[-1]["type"] == "tEXt"

"""Write sample PNGs covering each metadata dialect and failure mode."""
import sys
from pathlib import Path

from pnm_extract.encode import build_png, chunk, itxt_chunk, minimal_png, text_chunk

A1111_BLOCK = (
    "masterpiece, a cat sitting on a windowsill, golden hour\n"
    "Negative prompt: blurry, lowres\n"
    "Steps: 20, Sampler: Euler a, CFG scale: 7, Seed: 1234, Size: 512x512"
)
COMFY_PROMPT = '{"3": {"class_type": "KSampler", "inputs": {"seed": 1234}}}'


def generate_samples(out_dir) -> list[Path]:
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    samples = {
        "a1111.png": minimal_png(text_chunk("parameters", A1111_BLOCK)),
        "a1111_itxt.png": minimal_png(itxt_chunk("parameters", A1111_BLOCK, language="en")),
        "comfy.png": minimal_png(text_chunk("prompt", COMFY_PROMPT), text_chunk("workflow", "{}")),
        # prompt first, parameters later: parameters still wins
        "both.png": minimal_png(text_chunk("prompt", COMFY_PROMPT), text_chunk("parameters", A1111_BLOCK)),
        "plain.png": minimal_png(text_chunk("Software", "sample generator")),
        "no_text.png": minimal_png(),
        "no_iend.png": build_png([chunk("IHDR", b"\x00" * 13), text_chunk("prompt", "a lighthouse")], terminate=False),
        "not_png.png": b"\xff\xd8\xff\xe0" + b"\x00" * 32,
    }

    written = []
    for name, data in samples.items():
        p = out / name
        p.write_bytes(data)
        written.append(p)
        print(f"GENERATED: {p}")
    return written


if __name__ == "__main__":
    generate_samples(sys.argv[1] if len(sys.argv) > 1 else "samples")

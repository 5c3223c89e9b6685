import struct
import sys
from pathlib import Path

SIGNATURE_LEN = 8


def main():
    if len(sys.argv) != 2:
        print("Usage: truncate_png.py <file>")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    b = p.read_bytes()
    if len(b) < SIGNATURE_LEN + 8:
        print("File too small to truncate safely.")
        raise SystemExit(2)

    # Cut the last chunk that carries a payload in half, so its length
    # field claims more bytes than remain.
    off = SIGNATURE_LEN
    cut = None
    while off + 8 <= len(b):
        (length,) = struct.unpack(">I", b[off:off + 4])
        if length > 1 and off + 8 + length <= len(b):
            cut = off + 8 + length // 2
        off += 8 + length + 4

    if cut is None:
        print("No chunk with a payload to truncate.")
        raise SystemExit(2)

    p.write_bytes(b[:cut])
    print(f"Truncated {p} at offset {cut}")


if __name__ == "__main__":
    main()

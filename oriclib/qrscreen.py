"""Show a packed QR bitmap on a 40x28 Oric text screen."""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Sequence

from oriclib.qrdata import EncodeError, ErrorLevel
from oriclib.qrmatrix import encode_data

COLUMNS = 40
ROWS = 28
STATUS_ROW = 27
DISPLAY_WIDTH = 8
DARK = 0xA0
LIGHT = 0x20
MAX_WIDTH = STATUS_ROW - 1
TIMER_COLUMN = 20
TIMER_WIDTH = 14
UNIT_COLUMN = 34

DEFAULT_TEXT = "http://Defence-Force.org"


def bin_fill(value: int) -> bytes:
    """Return 8 screen bytes showing the bits of ``value``: inverse space for 1."""
    if not 0 <= value <= 0xFF:
        raise ValueError(f"value must fit in one byte: {value!r}")
    return bytes(
        DARK if value & (1 << (DISPLAY_WIDTH - 1 - position)) else LIGHT
        for position in range(DISPLAY_WIDTH)
    )


def render(packed: bytes | bytearray, width: int) -> bytes:
    """Return the 40x28 screen with the symbol from row 1 and a status line."""
    if not 1 <= width <= MAX_WIDTH:
        raise ValueError(f"a {width}-module symbol does not fit on the screen")
    cells = width * width
    size = (cells + 7) // 8
    if len(packed) < size:
        raise ValueError(f"bitmap holds {len(packed)} bytes, {size} needed")

    pattern = b"".join(bin_fill(byte) for byte in packed[:size])
    screen = bytearray([LIGHT]) * (COLUMNS * ROWS)
    for row in range(width):
        start = (row + 1) * COLUMNS
        screen[start:start + width] = pattern[row * width:(row + 1) * width]

    status = f"qr:{width}x{width}, {size} bytes      ".encode("ascii")
    offset = STATUS_ROW * COLUMNS
    screen[offset:offset + len(status)] = status
    return bytes(screen)


def _screen_lines(screen: bytes) -> list[str]:
    return [
        "".join("\u2588" if byte == DARK else chr(byte) for byte in screen[row:row + COLUMNS])
        for row in range(0, len(screen), COLUMNS)
    ]


def main(argv: Sequence[str] | None = None) -> int:
    """Encode a text as a QR code and print the resulting text screen."""
    parser = argparse.ArgumentParser(description="Show a QR code on a 40x28 text screen.")
    parser.add_argument("text", nargs="?", default=DEFAULT_TEXT, help="text to encode")
    args = parser.parse_args(argv)

    start = time.perf_counter()
    try:
        width, packed = encode_data(ErrorLevel.L, 0, args.text)
    except EncodeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    elapsed_ms = (time.perf_counter() - start) * 1000

    try:
        screen = bytearray(render(packed, width))
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    offset = STATUS_ROW * COLUMNS
    timer = f"{elapsed_ms:>{TIMER_WIDTH}.3f}"[-TIMER_WIDTH:].encode("ascii")
    screen[offset + TIMER_COLUMN:offset + TIMER_COLUMN + TIMER_WIDTH] = timer
    unit = b" msec"
    screen[offset + UNIT_COLUMN:offset + UNIT_COLUMN + len(unit)] = unit

    for line in _screen_lines(bytes(screen)):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
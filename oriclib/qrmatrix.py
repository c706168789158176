"""QR module matrix: function patterns, data placement, masking and bit packing."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from oriclib.qrdata import EncodeError, ErrorLevel, build_codewords
from oriclib.qrtables import VersionInfo, version_info

MAX_BITDATA = 301
MASK_COUNT = 8

_FUNCTION = 0x20
_LIGHT = 0x20
_DARK = 0x30
_DATA_DARK = 0x02
_DARK_BITS = 0x11

_FINDER = (0x7F, 0x41, 0x5D, 0x5D, 0x5D, 0x41, 0x7F)
_ALIGNMENT = (0x1F, 0x11, 0x15, 0x11, 0x1F)

_FORMAT_LEVEL_BITS = {
    ErrorLevel.M: 0x00,
    ErrorLevel.L: 0x08,
    ErrorLevel.Q: 0x18,
    ErrorLevel.H: 0x10,
}
_FORMAT_GENERATOR = 0x0537
_FORMAT_XOR = 0x5412
_VERSION_GENERATOR = 0x1F25

_MASKS: tuple[Callable[[int, int], bool], ...] = (
    lambda i, j: (i + j) % 2 == 0,
    lambda i, j: i % 2 == 0,
    lambda i, j: j % 3 == 0,
    lambda i, j: (i + j) % 3 == 0,
    lambda i, j: ((i // 2) + (j // 3)) % 2 == 0,
    lambda i, j: ((i * j) % 2) + ((i * j) % 3) == 0,
    lambda i, j: (((i * j) % 2) + ((i * j) % 3)) % 2 == 0,
    lambda i, j: (((i * j) % 3) + ((i + j) % 2)) % 2 == 0,
)

Grid = list[list[int]]


@dataclass(frozen=True)
class QRCode:
    """A finished QR symbol; ``modules[y][x]`` is True for a dark module."""

    version: int
    level: ErrorLevel
    mask: int
    modules: tuple[tuple[bool, ...], ...]

    @property
    def size(self) -> int:
        return len(self.modules)

    def packed(self) -> bytes:
        """Return the modules packed row by row, most significant bit first."""
        return pack_bits(self.modules)


def _module(flag: bool) -> int:
    return _DARK if flag else _LIGHT


def _place_pattern(grid: Grid, x: int, y: int, pattern: Sequence[int]) -> None:
    width = len(pattern)
    for row, bits in enumerate(pattern):
        for col in range(width):
            grid[x + col][y + row] = _module(bool(bits & (1 << (width - 1 - col))))


def _place_alignment(grid: Grid, x: int, y: int) -> None:
    if grid[x][y] & _FUNCTION:
        return
    _place_pattern(grid, x - 2, y - 2, _ALIGNMENT)


def _place_version(grid: Grid, version: int) -> None:
    if version <= 6:
        return
    size = len(grid)
    data = version << 12
    for i in range(6):
        if data & (1 << (17 - i)):
            data ^= _VERSION_GENERATOR << (5 - i)
    data += version << 12
    for i in range(6):
        for j in range(3):
            value = _module(bool(data & (1 << (i * 3 + j))))
            grid[size - 11 + j][i] = value
            grid[i][size - 11 + j] = value


def _place_function_patterns(grid: Grid, info: VersionInfo) -> None:
    size = len(grid)
    _place_pattern(grid, 0, 0, _FINDER)
    _place_pattern(grid, size - 7, 0, _FINDER)
    _place_pattern(grid, 0, size - 7, _FINDER)

    for i in range(8):
        grid[i][7] = grid[7][i] = _LIGHT
        grid[size - 8][i] = grid[size - 8 + i][7] = _LIGHT
        grid[i][size - 8] = grid[7][size - 8 + i] = _LIGHT

    for i in range(9):
        grid[i][8] = grid[8][i] = _LIGHT
    for i in range(8):
        grid[size - 8 + i][8] = grid[8][size - 8 + i] = _LIGHT

    _place_version(grid, info.version)

    for a in info.align_points:
        _place_alignment(grid, a, 6)
        _place_alignment(grid, 6, a)
        for b in info.align_points:
            _place_alignment(grid, a, b)

    for i in range(8, size - 8):
        grid[i][6] = _module(i % 2 == 0)
        grid[6][i] = _module(i % 2 == 0)


def _place_codewords(grid: Grid, codewords: bytes) -> None:
    size = len(grid)
    x, y = size, size - 1
    dx, dy = 1, 1
    for byte in codewords:
        for bit in range(7, -1, -1):
            while True:
                x += dx
                dx = -dx
                if dx < 0:
                    y += dy
                    if y < 0 or y == size:
                        y = 0 if y < 0 else size - 1
                        dy = -dy
                        x -= 2
                        if x == 6:
                            x -= 1
                if not grid[x][y] & _FUNCTION:
                    break
            grid[x][y] = _DATA_DARK if (byte >> bit) & 1 else 0


def _apply_mask(grid: Grid, mask: int) -> None:
    condition = _MASKS[mask]
    size = len(grid)
    for y in range(size):
        for x in range(size):
            cell = grid[x][y]
            if not cell & _FUNCTION:
                grid[x][y] = (cell & 0xFE) | (((cell >> 1) & 1) ^ condition(y, x))


def _place_format(grid: Grid, level: ErrorLevel, mask: int) -> None:
    size = len(grid)
    info = _FORMAT_LEVEL_BITS[level] + mask
    data = info << 10
    for i in range(5):
        if data & (1 << (14 - i)):
            data ^= _FORMAT_GENERATOR << (4 - i)
    data += info << 10
    data ^= _FORMAT_XOR

    def bit(index: int) -> int:
        return _module(bool(data & (1 << index)))

    for i in range(6):
        grid[8][i] = bit(i)
    grid[8][7] = bit(6)
    grid[8][8] = bit(7)
    grid[7][8] = bit(8)
    for i in range(9, 15):
        grid[14 - i][8] = bit(i)

    for i in range(8):
        grid[size - 1 - i][8] = bit(i)

    grid[8][size - 8] = _DARK
    for i in range(8, 15):
        grid[8][size - 15 + i] = bit(i)


def _dark_rows(grid: Grid) -> tuple[tuple[bool, ...], ...]:
    size = len(grid)
    return tuple(
        tuple(bool(grid[x][y] & _DARK_BITS) for x in range(size)) for y in range(size)
    )


def _run_penalty(line: Sequence[bool]) -> int:
    size = len(line)
    score = 0
    j = 0
    while j < size - 4:
        count = 1
        k = j + 1
        while k < size and line[k] == line[j]:
            count += 1
            k += 1
        if count >= 5:
            score += 3 + (count - 5)
        j = k
    return score


def _finder_penalty(line: Sequence[bool]) -> int:
    size = len(line)
    score = 0
    for j in range(size - 6):
        if not (
            (j == 0 or not line[j - 1])
            and line[j]
            and not line[j + 1]
            and line[j + 2]
            and line[j + 3]
            and line[j + 4]
            and not line[j + 5]
            and line[j + 6]
            and (j == size - 7 or not line[j + 7])
        ):
            continue
        before = (
            (j < 2 or not line[j - 2])
            and (j < 3 or not line[j - 3])
            and (j < 4 or not line[j - 4])
        )
        after = (
            (j >= size - 8 or not line[j + 8])
            and (j >= size - 9 or not line[j + 9])
            and (j >= size - 10 or not line[j + 10])
        )
        if before or after:
            score += 40
    return score


def penalty(matrix: Sequence[Sequence[object]]) -> int:
    """Return the mask penalty score of a square matrix of dark (truthy) modules."""
    rows = [[bool(cell) for cell in row] for row in matrix]
    size = len(rows)
    if size == 0 or any(len(row) != size for row in rows):
        raise ValueError("matrix must be square and not empty")
    columns = [list(column) for column in zip(*rows)]

    score = sum(_run_penalty(line) + _finder_penalty(line) for line in (*columns, *rows))

    for upper, lower in zip(rows, rows[1:]):
        for k in range(size - 1):
            if upper[k] == upper[k + 1] == lower[k] == lower[k + 1]:
                score += 3

    light = sum(not cell for row in rows for cell in row)
    score += (abs(50 - (light * 100) // (size * size)) // 5) * 10
    return score


def build_matrix(
    codewords: bytes | bytearray,
    version: int,
    level: int = ErrorLevel.L,
    mask: int | None = None,
) -> QRCode:
    """Lay out ``codewords`` as a QR symbol; a ``mask`` of None picks the best one."""
    level = ErrorLevel(level)
    info = version_info(version)
    codewords = bytes(codewords)
    if len(codewords) != info.total_codewords:
        raise ValueError(
            f"version {version} needs {info.total_codewords} codewords, got {len(codewords)}"
        )
    if mask is not None and mask not in range(MASK_COUNT):
        raise ValueError(f"mask pattern must be between 0 and 7: {mask!r}")

    size = version * 4 + 17
    grid: Grid = [[0] * size for _ in range(size)]
    _place_function_patterns(grid, info)
    _place_codewords(grid, codewords)

    if mask is None:
        best_score: int | None = None
        for candidate in range(MASK_COUNT):
            _apply_mask(grid, candidate)
            _place_format(grid, level, candidate)
            score = penalty(_dark_rows(grid))
            if best_score is None or score < best_score:
                best_score = score
                mask = candidate
        assert mask is not None

    _apply_mask(grid, mask)
    _place_format(grid, level, mask)
    return QRCode(version, level, mask, _dark_rows(grid))


def encode(
    data: bytes | bytearray | memoryview | str,
    level: int = ErrorLevel.L,
    version: int | None = None,
    mask: int | None = None,
) -> QRCode:
    """Encode ``data`` in byte mode as a QR symbol of version 1 to 8."""
    used_version, codewords = build_codewords(data, level, version)
    return build_matrix(codewords, used_version, level, mask)


def pack_bits(matrix: Iterable[Iterable[object]]) -> bytes:
    """Pack modules row by row into bytes, most significant bit first, zero-padded."""
    value = 0
    count = 0
    for row in matrix:
        for cell in row:
            value = (value << 1) | (1 if cell else 0)
            count += 1
    length = (count + 7) // 8
    return (value << (length * 8 - count)).to_bytes(length, "big")


def encode_data(
    level: int, version: int, data: bytes | bytearray | memoryview | str
) -> tuple[int, bytes]:
    """Encode ``data`` and return the symbol width and a 301-byte packed bitmap.

    A ``version`` of 0 picks the smallest version that fits.
    Raises :class:`EncodeError` when the data cannot be encoded.
    """
    code = encode(data, level, version or None)
    packed = pack_bits(code.modules)
    if len(packed) > MAX_BITDATA:
        raise EncodeError("symbol does not fit the bitmap buffer")
    return code.size, packed.ljust(MAX_BITDATA, b"\x00")
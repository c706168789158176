"""Data encoding for QR codes: byte-mode bit stream, version choice and RS codewords."""

from __future__ import annotations

from enum import IntEnum
from itertools import cycle, islice, zip_longest

from oriclib.qrtables import (
    MAX_VERSION,
    MIN_VERSION,
    gf_exp,
    gf_log,
    rs_generator,
    version_info,
)

MAX_DATA_CODEWORDS = 256
MAX_DATA_BITS = MAX_DATA_CODEWORDS * 8

MODE_8BIT_INDICATOR = 0b0100
MODE_INDICATOR_BITS = 4
LENGTH_INDICATOR_BITS = (8, 16, 16)
PADDING_CODEWORDS = (0xEC, 0x11)
TERMINATOR_BITS = 4


class ErrorLevel(IntEnum):
    """QR error correction level."""

    L = 0
    M = 1
    Q = 2
    H = 3


class EncodeError(ValueError):
    """The data cannot be encoded in the requested or any supported QR version."""


class BitWriter:
    """Append-only big-endian bit stream with a fixed capacity."""

    def __init__(self, capacity: int = MAX_DATA_BITS) -> None:
        self.capacity = capacity
        self._value = 0
        self._length = 0

    @property
    def bit_length(self) -> int:
        return self._length

    def __len__(self) -> int:
        return self._length

    def write(self, value: int, count: int) -> BitWriter:
        """Append the low ``count`` bits of ``value``, most significant first."""
        if count < 0:
            raise ValueError(f"bit count must not be negative: {count!r}")
        if self._length + count > self.capacity:
            raise EncodeError(
                f"bit stream overflow: {self._length + count} > {self.capacity} bits"
            )
        self._value = (self._value << count) | (value & ((1 << count) - 1))
        self._length += count
        return self

    def to_bytes(self, length: int | None = None) -> bytes:
        """Return the stream as bytes, zero-padded at the end to ``length`` bytes."""
        needed = (self._length + 7) // 8
        if length is None:
            length = needed
        if length < needed:
            raise ValueError(f"{length} bytes cannot hold {self._length} bits")
        return (self._value << (length * 8 - self._length)).to_bytes(length, "big")


def _as_bytes(data: bytes | bytearray | memoryview | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def encode_source(data: bytes | bytearray | memoryview | str, version_group: int) -> BitWriter:
    """Encode ``data`` as a single 8-bit-mode segment for the given version group."""
    if not 0 <= version_group < len(LENGTH_INDICATOR_BITS):
        raise ValueError(f"unknown version group: {version_group!r}")
    raw = _as_bytes(data)
    writer = BitWriter()
    writer.write(MODE_8BIT_INDICATOR, MODE_INDICATOR_BITS)
    writer.write(len(raw), LENGTH_INDICATOR_BITS[version_group])
    for byte in raw:
        writer.write(byte, 8)
    return writer


def choose_version(data: bytes | bytearray | memoryview | str, level: int) -> int:
    """Return the smallest QR version that holds ``data`` at the given error level."""
    level = ErrorLevel(level)
    needed = (encode_source(data, 0).bit_length + 7) // 8
    for version in range(MIN_VERSION, MAX_VERSION + 1):
        if needed <= version_info(version).data_codewords[level]:
            return version
    raise EncodeError(f"data needs {needed} codewords, more than any supported version holds")


def rs_codewords(data: bytes | bytearray, ec_count: int) -> bytes:
    """Return the ``ec_count`` Reed-Solomon error correction codewords for ``data``."""
    generator = rs_generator(ec_count)
    remainder = [0] * ec_count
    for byte in data:
        factor = byte ^ remainder[0]
        remainder = remainder[1:] + [0]
        if factor:
            log_factor = gf_log(factor)
            for position, exponent in enumerate(generator):
                remainder[position] ^= gf_exp((exponent + log_factor) % 255)
    return bytes(remainder)


def _interleave(blocks: list[bytes]) -> bytes:
    missing = object()
    return bytes(
        value
        for column in zip_longest(*blocks, fillvalue=missing)
        for value in column
        if value is not missing
    )


def build_codewords(
    data: bytes | bytearray | memoryview | str,
    level: int,
    version: int | None = None,
) -> tuple[int, bytes]:
    """Build the interleaved data and EC codewords for ``data``.

    ``version`` of ``None`` or 0 picks the smallest version that fits.
    Returns the version used and the full codeword sequence.
    """
    raw = _as_bytes(data)
    if not raw:
        raise EncodeError("no data to encode")
    level = ErrorLevel(level)
    needed = choose_version(raw, level)
    if not version:
        version = needed
    else:
        version_info(version)
        if needed > version:
            raise EncodeError(f"data needs version {needed}, version {version} requested")
    info = version_info(version)
    capacity = info.data_codewords[level]

    writer = encode_source(raw, 0)
    terminator = min(TERMINATOR_BITS, capacity * 8 - writer.bit_length)
    if terminator > 0:
        writer.write(0, terminator)
    body = writer.to_bytes()
    body += bytes(islice(cycle(PADDING_CODEWORDS), capacity - len(body)))

    data_blocks: list[bytes] = []
    ec_blocks: list[bytes] = []
    offset = 0
    for spec in (info.blocks1[level], info.blocks2[level]):
        for _ in range(spec.count):
            block = body[offset:offset + spec.data]
            offset += spec.data
            data_blocks.append(block)
            ec_blocks.append(rs_codewords(block, spec.ec))

    return version, _interleave(data_blocks) + _interleave(ec_blocks)
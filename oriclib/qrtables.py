"""Static tables for QR code versions 1 to 8 and GF(256) arithmetic."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

MIN_VERSION = 1
MAX_VERSION = 8

_PRIMITIVE = 0x11D


@dataclass(frozen=True)
class RSBlockInfo:
    """Reed-Solomon block layout: block count, codewords and data codewords per block."""

    count: int
    total: int
    data: int

    @property
    def ec(self) -> int:
        return self.total - self.data


@dataclass(frozen=True)
class VersionInfo:
    """Capacity and layout of one QR version, indexed by error level 0..3 (L, M, Q, H)."""

    version: int
    total_codewords: int
    data_codewords: tuple[int, int, int, int]
    align_points: tuple[int, ...]
    blocks1: tuple[RSBlockInfo, RSBlockInfo, RSBlockInfo, RSBlockInfo]
    blocks2: tuple[RSBlockInfo, RSBlockInfo, RSBlockInfo, RSBlockInfo]


def _blocks(*specs: tuple[int, int, int]) -> tuple[RSBlockInfo, ...]:
    return tuple(RSBlockInfo(*spec) for spec in specs)


_NONE = (0, 0, 0)

_VERSIONS: dict[int, VersionInfo] = {
    info.version: info
    for info in (
        VersionInfo(
            1, 26, (19, 16, 13, 9), (),
            _blocks((1, 26, 19), (1, 26, 16), (1, 26, 13), (1, 26, 9)),
            _blocks(_NONE, _NONE, _NONE, _NONE),
        ),
        VersionInfo(
            2, 44, (34, 28, 22, 16), (18,),
            _blocks((1, 44, 34), (1, 44, 28), (1, 44, 22), (1, 44, 16)),
            _blocks(_NONE, _NONE, _NONE, _NONE),
        ),
        VersionInfo(
            3, 70, (55, 44, 34, 26), (22,),
            _blocks((1, 70, 55), (1, 70, 44), (2, 35, 17), (2, 35, 13)),
            _blocks(_NONE, _NONE, _NONE, _NONE),
        ),
        VersionInfo(
            4, 100, (80, 64, 48, 36), (26,),
            _blocks((1, 100, 80), (2, 50, 32), (2, 50, 24), (4, 25, 9)),
            _blocks(_NONE, _NONE, _NONE, _NONE),
        ),
        VersionInfo(
            5, 134, (108, 86, 62, 46), (30,),
            _blocks((1, 134, 108), (2, 67, 43), (2, 33, 15), (2, 33, 11)),
            _blocks(_NONE, _NONE, (2, 34, 16), (2, 34, 12)),
        ),
        VersionInfo(
            6, 172, (136, 108, 76, 60), (34,),
            _blocks((2, 86, 68), (4, 43, 27), (4, 43, 19), (4, 43, 15)),
            _blocks(_NONE, _NONE, _NONE, _NONE),
        ),
        VersionInfo(
            7, 196, (156, 124, 88, 66), (22, 38),
            _blocks((2, 98, 78), (4, 49, 31), (2, 32, 14), (4, 39, 13)),
            _blocks(_NONE, _NONE, (4, 33, 15), (1, 40, 14)),
        ),
        VersionInfo(
            8, 242, (194, 154, 110, 86), (24, 42),
            _blocks((2, 121, 97), (2, 60, 38), (4, 40, 18), (4, 40, 14)),
            _blocks(_NONE, (2, 61, 39), (2, 41, 19), (2, 41, 15)),
        ),
    )
}


def version_info(version: int) -> VersionInfo:
    """Return the layout table of a QR version between 1 and 8."""
    try:
        return _VERSIONS[version]
    except KeyError:
        raise ValueError(f"unsupported QR version: {version!r}") from None


def _build_gf_tables() -> tuple[tuple[int, ...], tuple[int, ...]]:
    exp: list[int] = []
    value = 1
    for _ in range(256):
        exp.append(value)
        value <<= 1
        if value & 0x100:
            value ^= _PRIMITIVE
    log = [0] * 256
    for power, element in enumerate(exp[:255]):
        log[element] = power
    return tuple(exp), tuple(log)


_EXP, _LOG = _build_gf_tables()


def gf_exp(exponent: int) -> int:
    """Return alpha**exponent in GF(256) for an exponent between 0 and 255."""
    if not 0 <= exponent <= 255:
        raise ValueError(f"exponent out of range: {exponent!r}")
    return _EXP[exponent]


def gf_log(value: int) -> int:
    """Return the discrete logarithm of a GF(256) element; log(0) is taken as 0."""
    if not 0 <= value <= 255:
        raise ValueError(f"field element out of range: {value!r}")
    return _LOG[value]


_GENERATOR_COUNTS = frozenset({7, 10, 13, 15, 16, 17, 18, *range(20, 69, 2)})


def _gf_mul(a: int, b: int) -> int:
    if a == 0 or b == 0:
        return 0
    return _EXP[(_LOG[a] + _LOG[b]) % 255]


@lru_cache(maxsize=None)
def rs_generator(count: int) -> tuple[int, ...]:
    """Return the generator polynomial for ``count`` EC codewords as exponents.

    The leading coefficient (always 1) is omitted; the remaining ``count``
    coefficients are given as powers of alpha, highest degree first.
    """
    if count not in _GENERATOR_COUNTS:
        raise ValueError(f"no generator polynomial for {count!r} codewords")
    poly = [1]
    for power in range(count):
        root = _EXP[power]
        shifted = poly + [0]
        for position in range(1, len(shifted)):
            shifted[position] ^= _gf_mul(poly[position - 1], root)
        poly = shifted
    return tuple(_LOG[coefficient] for coefficient in poly[1:])
import pytest

from oriclib.qrdata import EncodeError, ErrorLevel, build_codewords
from oriclib.qrmatrix import (
    MAX_BITDATA,
    QRCode,
    build_matrix,
    encode,
    encode_data,
    pack_bits,
    penalty,
)

TEXT = "http://Defence-Force.org"
FINDER = (0x7F, 0x41, 0x5D, 0x5D, 0x5D, 0x41, 0x7F)
LEVEL_BITS = {ErrorLevel.L: 0x08, ErrorLevel.M: 0x00, ErrorLevel.Q: 0x18, ErrorLevel.H: 0x10}


def _format_second_copy(code: QRCode) -> int:
    m = code.modules
    n = code.size
    value = 0
    for i in range(8):
        value |= int(m[8][n - 1 - i]) << i
    for i in range(8, 15):
        value |= int(m[n - 15 + i][8]) << i
    return value


def _format_first_copy(code: QRCode) -> int:
    m = code.modules
    value = 0
    for i in range(6):
        value |= int(m[i][8]) << i
    value |= int(m[7][8]) << 6
    value |= int(m[8][8]) << 7
    value |= int(m[8][7]) << 8
    for i in range(9, 15):
        value |= int(m[8][14 - i]) << i
    return value


def _block_rows(code: QRCode, x0: int, y0: int) -> tuple:
    return tuple(
        sum(int(code.modules[y0 + row][x0 + col]) << (6 - col) for col in range(7))
        for row in range(7)
    )


def test_size_follows_version():
    code = encode(TEXT)
    assert code.version == 2
    assert code.size == 4 * code.version + 17
    assert all(len(row) == code.size for row in code.modules)


@pytest.mark.parametrize("mask", range(8))
def test_finder_patterns_in_three_corners(mask):
    code = encode(TEXT, mask=mask)
    n = code.size
    assert _block_rows(code, 0, 0) == FINDER
    assert _block_rows(code, n - 7, 0) == FINDER
    assert _block_rows(code, 0, n - 7) == FINDER


def test_timing_patterns_alternate():
    code = encode(TEXT)
    n = code.size
    for i in range(8, n - 8):
        assert code.modules[6][i] == (i % 2 == 0)
        assert code.modules[i][6] == (i % 2 == 0)


def test_fixed_dark_module():
    code = encode(TEXT)
    assert code.modules[code.size - 8][8] is True


def test_format_information_level_l_mask_0():
    code = encode(TEXT, level=ErrorLevel.L, mask=0)
    assert _format_second_copy(code) == 0x77C4
    assert _format_first_copy(code) == 0x77C4


@pytest.mark.parametrize("level", list(ErrorLevel))
@pytest.mark.parametrize("mask", range(8))
def test_format_information_carries_level_and_mask(level, mask):
    code = encode(TEXT, level=level, mask=mask)
    assert code.level == level
    assert code.mask == mask
    fmt = _format_second_copy(code)
    assert fmt == _format_first_copy(code)
    assert (fmt ^ 0x5412) >> 10 == LEVEL_BITS[level] + mask


def test_auto_mask_minimises_penalty():
    auto = encode(TEXT)
    scores = [penalty(encode(TEXT, mask=m).modules) for m in range(8)]
    assert auto.mask == scores.index(min(scores))
    assert auto.modules == encode(TEXT, mask=auto.mask).modules


def test_version_information_pattern():
    code = encode("HELLO", version=7)
    n = code.size
    assert n == 4 * 7 + 17
    value = 0
    for i in range(6):
        for j in range(3):
            bit = code.modules[n - 11 + j][i]
            assert bit == code.modules[i][n - 11 + j]
            value |= int(bit) << (i * 3 + j)
    assert value == 0x07C94


def test_penalty_is_transpose_invariant():
    code = encode(TEXT)
    transposed = tuple(zip(*code.modules))
    assert penalty(transposed) == penalty(code.modules)
    assert penalty(code.modules) >= 0


def test_penalty_rejects_non_square():
    with pytest.raises(ValueError):
        penalty([[True, False], [True]])
    with pytest.raises(ValueError):
        penalty([])


def test_build_matrix_matches_encode():
    version, codewords = build_codewords(TEXT, ErrorLevel.M)
    code = build_matrix(codewords, version, ErrorLevel.M, 3)
    assert code == encode(TEXT, level=ErrorLevel.M, mask=3)


def test_build_matrix_rejects_wrong_codeword_count():
    _, codewords = build_codewords(TEXT, ErrorLevel.L)
    with pytest.raises(ValueError):
        build_matrix(codewords[:-1], 2, ErrorLevel.L)


def test_invalid_mask():
    with pytest.raises(ValueError):
        encode(TEXT, mask=8)


def test_encode_errors():
    with pytest.raises(EncodeError):
        encode("")
    with pytest.raises(EncodeError):
        encode("x" * 30, version=1)
    with pytest.raises(EncodeError):
        encode("x" * 300)


def test_encode_is_deterministic():
    first = encode(TEXT)
    second = encode(TEXT)
    assert first.size == 25
    assert second.size == 25
    assert first.mask == second.mask
    assert first.modules == second.modules
    assert first.packed() == second.packed()


def test_pack_bits_round_trip():
    code = encode(TEXT)
    packed = pack_bits(code.modules)
    cells = code.size * code.size
    assert len(packed) == (cells + 7) // 8
    bits = [bool(packed[k // 8] & (0x80 >> (k % 8))) for k in range(len(packed) * 8)]
    flat = [cell for row in code.modules for cell in row]
    assert bits[:cells] == flat
    assert not any(bits[cells:])
    assert code.packed() == packed


def test_encode_data_buffer():
    width, packed = encode_data(0, 0, TEXT)
    code = encode(TEXT)
    assert width == code.size
    assert len(packed) == MAX_BITDATA
    head = pack_bits(code.modules)
    assert packed[: len(head)] == head
    assert set(packed[len(head):]) <= {0}


def test_encode_data_errors():
    with pytest.raises(EncodeError):
        encode_data(0, 0, "")
    with pytest.raises(EncodeError):
        encode_data(0, 1, "x" * 30)
# oriclib

Small utilities from the Oric world:

- **ROM identification** (`oriclib.romident`): look up a ROM image's CRC-32
  in a table of known Oric, Atmos, Telestrat and Pravetz ROMs and cartridges.
- **QR code encoding** (`oriclib.qrtables`, `oriclib.qrdata`,
  `oriclib.qrmatrix`): a compact QR encoder for byte-mode data, versions
  1 to 8, all four error-correction levels, automatic or fixed mask
  selection and a packed bitmap output.
- **Text screen rendering** (`oriclib.qrscreen`): draw a QR code on a
  40x28 text screen of inverse-video spaces.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

Add the `test` extra to run the test suite:

```
pip install ".[test]"
pytest
```

## Identifying a ROM

```python
import zlib
from oriclib.romident import romident, romident_value

with open("basic11b.rom", "rb") as fh:
    value = zlib.crc32(fh.read())

print(romident_value(value))                  # e.g. "Basic 1.1b"
print(romident(value.to_bytes(4, "little")))  # same lookup from raw bytes
```

`romident` takes exactly four CRC bytes, least significant first;
`romident_value` takes the CRC as an integer between 0 and 0xFFFFFFFF.
Either raises `ValueError` for malformed input and returns `"Unknown"` for a
CRC not in the table. The full table is available as `ROMS`, a tuple of
`RomInfo(crc, name)` entries.

## Encoding a QR code

```python
from oriclib.qrdata import ErrorLevel
from oriclib.qrmatrix import encode

code = encode(b"http://example.com", ErrorLevel.L)
print(code.version, code.mask)
print(code.size)           # modules per side: 21 for version 1
packed = code.packed()     # rows packed MSB first, zero-padded
```

`encode(data, level=ErrorLevel.L, version=None, mask=None)` accepts bytes or
a string (encoded as UTF-8). The returned `QRCode` holds `modules`, a tuple
of rows where `modules[y][x]` is `True` for a dark module.

- With no `version`, the smallest version that holds the data is used.
- With no `mask`, all eight mask patterns are tried and the one with the
  lowest `penalty` score is kept.
- `oriclib.qrdata.EncodeError` (a `ValueError`) is raised for empty input,
  for a requested version too small for the data, and for data larger than
  version 8 holds at the chosen level.

The steps are also available on their own:

- `qrdata.build_codewords(data, level, version)` returns the version used
  and the interleaved data and Reed-Solomon codewords.
- `qrmatrix.build_matrix(codewords, version, level, mask)` lays those
  codewords out as a `QRCode`.
- `qrdata.rs_codewords(data, ec_count)`, `qrtables.rs_generator(count)`,
  `qrtables.gf_exp` and `qrtables.gf_log` expose the GF(256) arithmetic;
  `qrtables.version_info(version)` returns the capacity and block layout
  of a version.

`encode_data(level, version, data)` returns the symbol width together with
the packed bitmap zero-filled to 301 bytes; a `version` of 0 picks the
smallest one that fits.

## Drawing on a text screen

```python
from oriclib.qrmatrix import encode_data
from oriclib.qrscreen import COLUMNS, render

width, packed = encode_data(0, 0, b"http://example.com")
screen = render(packed, width)          # 40 * 28 screen bytes
for row in range(0, len(screen), COLUMNS):
    print(screen[row:row + COLUMNS])
```

`render` places the symbol from the second row, one screen cell per module
(`0xA0` for dark, a space for light), and writes a status line such as
`qr:21x21, 56 bytes` on the last row. Symbols wider than 26 modules do not
fit and raise `ValueError`. `bin_fill(value)` turns one byte into its eight
screen cells.

The command

```
oriclib-qr "http://example.com"
```

encodes the text at level L (the default text is `http://Defence-Force.org`)
and prints the screen, dark cells shown as `█`, with the status line and the
encoding time in milliseconds. It exits with status 1 and a message on
standard error when the text cannot be encoded or does not fit the screen.

## What it does not do

- Only byte mode is encoded; there are no numeric, alphanumeric or kanji
  segments.
- Only QR versions 1 to 8 are supported.
- There is no image output (PNG, SVG and the like) and no QR decoding; the
  result is a module matrix, a packed bitmap or a text screen.
- ROM identification matches CRC values only; it does not compute CRCs or
  read ROM files itself.
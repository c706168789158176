"""Identify Oric ROM images by their CRC32 checksum."""

from __future__ import annotations

from dataclasses import dataclass

UNKNOWN = "Unknown"


@dataclass(frozen=True)
class RomInfo:
    """A known ROM: its CRC32 value and a human-readable name."""

    crc: int
    name: str


ROMS: tuple[RomInfo, ...] = (
    # 256 bytes
    RomInfo(0x0C82F636, "8D FDC"),
    RomInfo(0x15E97B60, "8D FDC Boot"),
    RomInfo(0x8DA2CCD7, "8D FDC Driver"),
    RomInfo(0x38EB94ED, "8D Savena Boot"),
    RomInfo(0x8FDD40A7, "8D Savena Driver"),
    # 2 KB
    RomInfo(0x37220E89, "Jasmin"),
    RomInfo(0xACB2DD34, "Cumana 1"),
    # 8 KB
    RomInfo(0x94358DC6, "Telematic"),
    RomInfo(0xA9664A9C, "Microdisc"),
    RomInfo(0x227529C2, "Microdisc mod"),
    RomInfo(0x19D5BB01, "Microdisc mod"),
    # 16 KB
    RomInfo(0xF18710B4, "Basic 1.0"),
    RomInfo(0xA65D6CED, "Basic 1.1"),
    RomInfo(0xC3A92BEF, "Basic 1.1b"),
    RomInfo(0x08E06953, "Basic 1.1b mod"),
    RomInfo(0x9FD687C7, "Basic 1.1b mod"),
    RomInfo(0x6995DD24, "Basic 1.1b mod"),
    RomInfo(0x72B14D15, "Basic 1.1b mod"),
    RomInfo(0x603B1FBF, "Basic 1.1b mod"),
    RomInfo(0x1752DF63, "Basic 1.1b mod"),
    RomInfo(0x28B26D35, "Basic 1.1b mod"),
    RomInfo(0x303370D1, "Basic 1.1b UK"),
    RomInfo(0xA71523AC, "Basic 1.1b SW"),
    RomInfo(0x47BF26C7, "Basic 1.1b ES"),
    RomInfo(0x65233B2D, "Basic 1.1b GE"),
    RomInfo(0xDC4F22DC, "Basic 1.2"),
    RomInfo(0x47A437FC, "Basic 1.2 FR"),
    RomInfo(0x00FCE8A6, "Basic 1.2 UK"),
    RomInfo(0x100ABE68, "Basic 1.2 SW"),
    RomInfo(0x70DE4AEB, "Basic 1.2 ES"),
    RomInfo(0xF5F0DD52, "Basic 1.2 GE"),
    RomInfo(0x0A2860B1, "Basic 1.21"),
    RomInfo(0xE683DEC2, "Basic 1.21 FR"),
    RomInfo(0x75AA1AA9, "Basic 1.21 UK"),
    RomInfo(0xE6AD11C7, "Basic 1.21 SW"),
    RomInfo(0x87EC679B, "Basic 1.21 ES"),
    RomInfo(0x94FE32BF, "Basic 1.21 GE"),
    RomInfo(0x5EF2A861, "Basic 1.22"),
    RomInfo(0x370CFDA4, "Basic 1.22 FR"),
    RomInfo(0x9865BCD7, "Basic 1.22 UK"),
    RomInfo(0xE7FD57A4, "Basic 1.22 SW"),
    RomInfo(0x9144F9E0, "Basic 1.22 ES"),
    RomInfo(0x9A42BD62, "Basic 1.22 GE"),
    RomInfo(0x7F10F07F, "Basic Evolution v1.0"),
    RomInfo(0xFF87A38C, "Basic Evolution v1.0 FR"),
    RomInfo(0xEC11A8CE, "Basic Evolution v1.0 FR beta"),
    RomInfo(0x58079502, "Pravetz 8D"),
    RomInfo(0xF8D23821, "Pravetz 8D auto boot"),
    RomInfo(0x5BA27A7D, "Telemon 2.3"),
    RomInfo(0xAA727C5D, "Telemon 2.4"),
    RomInfo(0x6F1E7857, "Telemon 2.4"),
    RomInfo(0xCDA92497, "Telemon 2.4"),
    RomInfo(0x952DDDE3, "Monitor PB5"),
    RomInfo(0xB9830BED, "Monitor PB5 Acia"),
    RomInfo(0xB07B442B, "Monitor PB5 Strobe"),
    RomInfo(0x1D96AB50, "Hyperbasic 2.0B"),
    RomInfo(0x31B10476, "Hyperbasic 2.0B"),
    RomInfo(0x83E9B9C9, "HyperBasic PB5 mod"),
    RomInfo(0xD8C635B2, "Teleforth v1.1"),
    RomInfo(0xBC729530, "Teleforth v1.2"),
    RomInfo(0x68B0FDE6, "TeleAss"),
    RomInfo(0x84F0A4ED, "TeleAss PB5 mod"),
    RomInfo(0x491C3839, "Telematic double"),
    RomInfo(0xE0FB199A, "Telematic PB5 mod"),
    RomInfo(0x21FE20D8, "Stratoric 1.0"),
    RomInfo(0x13B696A4, "Stratoric 3.0"),
    RomInfo(0xEF232DD9, "Microdisc mod for Telestrat"),
    RomInfo(0x88C3E656, "Bank 1 cartridge Adresstel"),
    RomInfo(0x87835947, "Bank 2 cartridge Adresstel"),
    RomInfo(0xE933C288, "Bank 3 cartridge Adresstel"),
    RomInfo(0xB488C801, "Bank 4 cartridge Adresstel"),
    RomInfo(0x1726B182, "Diagnostic v1"),
    RomInfo(0xB8F54091, "TeleBoot 1.0"),
    RomInfo(0xB99A934B, "Atmos ROM 1.1 (LOCI patch)"),
    RomInfo(0xB5D312B9, "Atmos ROM 1.1 (EREBUS patch)"),
)


def _build_index() -> dict[int, str]:
    index: dict[int, str] = {}
    for rom in ROMS:
        index.setdefault(rom.crc, rom.name)
    return index


_BY_CRC = _build_index()


def romident_value(value: int) -> str:
    """Return the name of the ROM whose CRC32 is ``value``, or ``"Unknown"``."""
    if not 0 <= value <= 0xFFFFFFFF:
        raise ValueError(f"CRC32 value out of range: {value!r}")
    return _BY_CRC.get(value, UNKNOWN)


def romident(crc: bytes | bytearray | memoryview) -> str:
    """Return the ROM name for a 4-byte little-endian CRC32, or ``"Unknown"``."""
    raw = bytes(crc)
    if len(raw) != 4:
        raise ValueError(f"CRC must be exactly 4 bytes, got {len(raw)}")
    return romident_value(int.from_bytes(raw, "little"))
"""Oric ROM identification by CRC-32 and a byte-mode QR code encoder with text screen rendering."""

__version__ = "0.1.0"
__all__ = ["romident", "qrtables", "qrdata", "qrmatrix", "qrscreen"]
[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oriclib"
version = "0.1.0"
description = "Oric ROM identification by CRC-32 and a compact byte-mode QR code encoder (versions 1 to 8) with text screen rendering"
requires-python = ">=3.10"
dependencies = []
keywords = ["oric", "atmos", "rom", "crc", "qr", "qrcode", "reed-solomon", "retro"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
oriclib-qr = "oriclib.qrscreen:main"

[tool.hatch.build.targets.wheel]
packages = ["oriclib"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

"""Loading and saving of 24-bit colour BMP images."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from pathlib import Path

BITMAP_MAGIC = 0x00
BITMAP_SIZE = 0x02
BITMAP_OFFSET = 0x0A
BITMAP_WIDTH = 0x12
BITMAP_HEIGHT = 0x16
BITMAP_DEPTH = 0x1C
BITMAP_SIZE_RAW = 0x22

BMP_TYPE = 0x4D42
HEADER_SIZE = 0x0E
INFO_SIZE = 0x28
DEFAULT_DEPTH = 0x18

_HEADER_FORMAT = struct.Struct("<HIHHI")
_INFO_FORMAT = struct.Struct("<IiiHHIIiiII")


class Bmp24Error(Exception):
    """Raised when a 24-bit BMP image cannot be built, read or written."""


@dataclass
class BmpHeader:
    """The 14-byte file header."""

    type: int = BMP_TYPE
    size: int = 0
    reserved1: int = 0
    reserved2: int = 0
    offset: int = HEADER_SIZE + INFO_SIZE

    def to_bytes(self) -> bytes:
        return _HEADER_FORMAT.pack(self.type, self.size, self.reserved1, self.reserved2, self.offset)


@dataclass
class BmpInfo:
    """The 40-byte information header."""

    size: int = INFO_SIZE
    width: int = 0
    height: int = 0
    planes: int = 1
    bits: int = DEFAULT_DEPTH
    compression: int = 0
    imagesize: int = 0
    xresolution: int = 0
    yresolution: int = 0
    ncolors: int = 0
    importantcolors: int = 0

    def to_bytes(self) -> bytes:
        return _INFO_FORMAT.pack(
            self.size, self.width, self.height, self.planes, self.bits, self.compression,
            self.imagesize, self.xresolution, self.yresolution, self.ncolors,
            self.importantcolors,
        )


@dataclass(frozen=True)
class Pixel:
    red: int = 0
    green: int = 0
    blue: int = 0


def _row_stride(width: int) -> int:
    return (width * 3 + 3) & ~3


@dataclass
class Bmp24Image:
    """A colour image; ``data[y][x]`` with row 0 at the top."""

    header: BmpHeader
    info: BmpInfo
    width: int
    height: int
    color_depth: int
    data: list[list[Pixel]] = field(default_factory=list)

    def _pixel_bytes(self) -> bytes:
        padding = bytes(_row_stride(self.width) - self.width * 3)
        rows = self.data if self.info.height < 0 else reversed(self.data)
        return b"".join(
            b"".join(bytes((p.blue, p.green, p.red)) for p in row) + padding for row in rows
        )

    def save(self, path: str | Path) -> None:
        """Write the headers and pixel data to ``path``."""
        if len(self.data) != self.height or any(len(row) != self.width for row in self.data):
            raise Bmp24Error("pixel data does not match image dimensions")
        prefix = self.header.to_bytes() + self.info.to_bytes()
        if self.header.offset < len(prefix):
            raise Bmp24Error("pixel offset overlaps the headers")
        content = prefix + bytes(self.header.offset - len(prefix)) + self._pixel_bytes()
        try:
            Path(path).write_bytes(content)
        except OSError as exc:
            raise Bmp24Error(f"cannot write {path}: {exc}") from exc


def allocate_pixels(width: int, height: int) -> list[list[Pixel]]:
    """Return a ``height`` x ``width`` grid of black pixels."""
    if width < 0 or height < 0:
        raise Bmp24Error("image dimensions must not be negative")
    return [[Pixel() for _ in range(width)] for _ in range(height)]


def new_image(width: int, height: int, color_depth: int = DEFAULT_DEPTH) -> Bmp24Image:
    """Create a black image with consistent headers."""
    data = allocate_pixels(width, height)
    image_size = _row_stride(width) * height
    header = BmpHeader(size=HEADER_SIZE + INFO_SIZE + image_size)
    info = BmpInfo(width=width, height=height, bits=color_depth, imagesize=image_size)
    return Bmp24Image(header, info, width, height, color_depth, data)


def parse_header(data: bytes) -> BmpHeader:
    if len(data) < HEADER_SIZE:
        raise Bmp24Error("file header is truncated")
    return BmpHeader(*_HEADER_FORMAT.unpack_from(data, BITMAP_MAGIC))


def parse_info(data: bytes) -> BmpInfo:
    if len(data) < INFO_SIZE:
        raise Bmp24Error("information header is truncated")
    return BmpInfo(*_INFO_FORMAT.unpack_from(data, 0))


def load_image(path: str | Path) -> Bmp24Image:
    """Read a 24-bit uncompressed BMP file."""
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise Bmp24Error(f"cannot open {path}: {exc}") from exc
    header = parse_header(raw)
    info = parse_info(raw[HEADER_SIZE:])
    if header.type != BMP_TYPE:
        raise Bmp24Error(f"{path}: not a BMP file")
    if info.bits != DEFAULT_DEPTH:
        raise Bmp24Error(f"{path}: expected 24 bits per pixel, found {info.bits}")
    width, height = info.width, abs(info.height)
    if width < 0:
        raise Bmp24Error(f"{path}: negative width")
    stride = _row_stride(width)
    if len(raw) < header.offset + stride * height:
        raise Bmp24Error(f"{path}: pixel data truncated")
    rows = []
    for start in range(header.offset, header.offset + stride * height, stride):
        line = raw[start:start + width * 3]
        rows.append([Pixel(r, g, b) for b, g, r in zip(line[0::3], line[1::3], line[2::3])])
    if info.height > 0:
        rows.reverse()
    return Bmp24Image(header, info, width, height, info.bits, rows)
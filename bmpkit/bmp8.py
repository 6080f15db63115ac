"""Loading, saving and filtering of 8-bit grayscale BMP images."""

from __future__ import annotations

import struct
import sys
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import IO, Sequence

HEADER_SIZE = 54
COLOR_TABLE_SIZE = 1024


class Bmp8Error(Exception):
    """Raised when an 8-bit BMP image cannot be read or written."""


class FilterType(IntEnum):
    """Convolution filters available for 8-bit images."""

    BOX_BLUR = 1
    GAUSSIAN_BLUR = 2
    OUTLINE = 3
    EMBOSS = 4
    SHARPEN = 5


_BASE_KERNELS: dict[FilterType, list[list[float]]] = {
    FilterType.BOX_BLUR: [[1.0 / 9.0] * 3 for _ in range(3)],
    FilterType.GAUSSIAN_BLUR: [
        [v / 16.0 for v in row] for row in ((1.0, 2.0, 1.0), (2.0, 4.0, 2.0), (1.0, 2.0, 1.0))
    ],
    FilterType.OUTLINE: [[-1.0, -1.0, -1.0], [-1.0, 8.0, -1.0], [-1.0, -1.0, -1.0]],
    FilterType.EMBOSS: [[-2.0, -1.0, 0.0], [-1.0, 1.0, 1.0], [0.0, 1.0, 2.0]],
    FilterType.SHARPEN: [[0.0, -1.0, 0.0], [-1.0, 5.0, -1.0], [0.0, -1.0, 0.0]],
}

_CHOICES: dict[str, FilterType] = {
    spelling: ftype
    for ftype in FilterType
    for spelling in (ftype.name.lower(), str(ftype.value), f"{ftype.value}.{ftype.name.lower()}")
}


def _f32(value: float) -> float:
    """Round a Python float to single precision."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


@dataclass
class Bmp8Image:
    """An 8-bit image: raw 54-byte header, 1024-byte palette and pixel bytes."""

    header: bytes
    color_table: bytes
    data: bytearray
    width: int
    height: int
    color_depth: int

    @property
    def data_size(self) -> int:
        return len(self.data)

    def save(self, path: str | Path) -> None:
        """Write header, palette and pixel data to ``path``."""
        try:
            with open(path, "wb") as handle:
                handle.write(bytes(self.header))
                handle.write(bytes(self.color_table))
                handle.write(bytes(self.data))
        except OSError as exc:
            raise Bmp8Error(f"cannot write {path}: {exc}") from exc

    def info(self) -> str:
        """Return a text summary of the image dimensions."""
        return (
            "Image Info :\n"
            f"\tWidth : {self.width}\n"
            f"\tHeight : {self.height}\n"
            f"\tColor depth : {self.color_depth}\n"
            f"\tData Size : {self.data_size}\n"
        )

    def print_info(self, out: IO[str] | None = None) -> None:
        (out or sys.stdout).write(self.info())

    def _map(self, table: bytes) -> None:
        self.data[:] = self.data.translate(table)

    def negative(self) -> None:
        """Invert every pixel."""
        self._map(bytes(255 - v for v in range(256)))

    def brightness(self, value: int) -> None:
        """Add ``value`` to every pixel, clamping to 0..255."""
        self._map(bytes(min(255, max(0, v + value)) for v in range(256)))

    def threshold(self, threshold: int) -> None:
        """Set pixels at or above ``threshold`` to 255 and the rest to 0."""
        threshold = min(255, max(0, threshold))
        self._map(bytes(255 if v >= threshold else 0 for v in range(256)))

    def apply_filter(self, kernel: Sequence[Sequence[float]]) -> None:
        """Convolve the inner pixels with a square kernel; border pixels are kept."""
        size = len(kernel)
        if size not in (1, 3) or any(len(row) != size for row in kernel):
            raise ValueError("kernel must be a 1x1 or 3x3 matrix")
        width, height = self.width, self.height
        if len(self.data) < width * height:
            raise Bmp8Error("pixel data is smaller than width * height")
        coeffs = [[_f32(c) for c in row] for row in kernel]
        offset = size // 2
        src = bytes(self.data)
        out = bytearray(src)
        for y in range(1, height - 1):
            for x in range(1, width - 1):
                total = 0.0
                for dy, row in enumerate(coeffs, -offset):
                    base = (y + dy) * width + x
                    for dx, coeff in enumerate(row, -offset):
                        total = _f32(total + _f32(src[base + dx] * coeff))
                total = min(255.0, max(0.0, total))
                out[y * width + x] = int(total)
        self.data[:] = out


def load_image(path: str | Path) -> Bmp8Image:
    """Read an 8-bit BMP file."""
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise Bmp8Error(f"cannot open {path}: {exc}") from exc
    prefix = HEADER_SIZE + COLOR_TABLE_SIZE
    if len(raw) < prefix:
        raise Bmp8Error(f"{path}: file too short for header and palette")
    header = raw[:HEADER_SIZE]
    width, height = struct.unpack_from("<II", header, 18)
    (color_depth,) = struct.unpack_from("<I", header, 28)
    (data_size,) = struct.unpack_from("<I", header, 34)
    if data_size == 0:
        data_size = width * height
    data = raw[prefix:prefix + data_size]
    if len(data) < data_size:
        raise Bmp8Error(f"{path}: pixel data truncated")
    return Bmp8Image(
        header=header,
        color_table=raw[HEADER_SIZE:prefix],
        data=bytearray(data),
        width=width,
        height=height,
        color_depth=color_depth,
    )


def parse_filter_choice(text: str) -> FilterType:
    """Map a menu answer such as ``"3"``, ``"outline"`` or ``"3.outline"`` to a filter."""
    text = text.split("\n", 1)[0]
    try:
        return _CHOICES[text]
    except KeyError:
        raise ValueError(f"unknown filter choice: {text!r}") from None


def choose_filter(stdin: IO[str] | None = None, stdout: IO[str] | None = None) -> FilterType:
    """Prompt until a valid filter is chosen."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stdout.write(" Veuillez choisir un type de filtre parmis les suivants : \n")
    for ftype in FilterType:
        stdout.write(f"\t {ftype.value}.{ftype.name.lower()} \n")
    stdout.write("Votre choix : ")
    while True:
        stdout.flush()
        line = stdin.readline()
        if not line:
            raise EOFError("no filter chosen")
        try:
            return parse_filter_choice(line)
        except ValueError:
            stdout.write("Votre choix est incorrect \n")
            stdout.write("Veuillez resaisir un choix :")


def get_kernel(filter_type: FilterType | int) -> list[list[float]]:
    """Return a fresh 3x3 convolution kernel for ``filter_type``."""
    ftype = FilterType(filter_type)
    return [list(row) for row in _BASE_KERNELS[ftype]]
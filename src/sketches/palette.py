"""
Palette Store - fixed-record table of color themes.

File format: a flat big-endian table. Each record holds COLORS_PER_THEME
packed 32-bit colors (20 bytes). Colors decode as 0xRRGGBB ("rgb") or
0xAARRGGBB ("argb"); the reader and writer of a file must agree on which.

The table is read once into memory and is immutable afterwards, so one store
can be shared by any number of concurrent renders.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np

from .color import Color
from .errors import PaletteFormatError, PaletteLoadError

logger = logging.getLogger(__name__)

COLORS_PER_THEME = 5
BYTES_PER_COLOR = 4
THEME_SIZE = COLORS_PER_THEME * BYTES_PER_COLOR

ENCODINGS = ("rgb", "argb")

Palette = List[Color]


def _check_encoding(encoding: str) -> None:
    if encoding not in ENCODINGS:
        raise PaletteFormatError(f"unknown palette encoding: {encoding}")


class PaletteStore:
    """Addressable, read-only table of palettes."""

    def __init__(self, data: bytes, encoding: str = "rgb"):
        _check_encoding(encoding)
        if len(data) % THEME_SIZE != 0:
            raise PaletteFormatError(
                f"palette data length {len(data)} is not a multiple of {THEME_SIZE}"
            )
        if not data:
            raise PaletteFormatError("palette store is empty")
        self.encoding = encoding
        self._table = np.frombuffer(data, dtype=">u4").reshape(-1, COLORS_PER_THEME)

    @classmethod
    def open(cls, path: Union[str, Path], encoding: str = "rgb") -> "PaletteStore":
        """Read a palette file. Raises PaletteLoadError on I/O failure."""
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise PaletteLoadError(f"cannot read palette file {path}: {e}") from e
        store = cls(data, encoding)
        logger.debug("Opened palette store %s (%d themes)", path, len(store))
        return store

    def __len__(self) -> int:
        return self._table.shape[0]

    def get(self, index: int) -> Palette:
        if not 0 <= index < len(self):
            raise PaletteFormatError(f"palette index {index} out of range [0, {len(self)})")
        decode = Color.from_rgb_u32 if self.encoding == "rgb" else Color.from_rgba_u32
        return [decode(int(c)) for c in self._table[index]]

    def pick(self, rng) -> Tuple[int, Palette]:
        """Draw a uniform index from the store. Consumes one integer draw."""
        index = rng.integer(0, len(self))
        logger.debug("Picked palette %d of %d", index, len(self))
        return index, self.get(index)


def encode_palettes(palettes: Iterable[Sequence[Color]], encoding: str = "rgb") -> bytes:
    """Pack palettes into the fixed-record binary format."""
    _check_encoding(encoding)
    rows = []
    for palette in palettes:
        if len(palette) != COLORS_PER_THEME:
            raise PaletteFormatError(
                f"palette must hold {COLORS_PER_THEME} colors, got {len(palette)}"
            )
        if encoding == "rgb":
            rows.append([c.to_rgb_u32() for c in palette])
        else:
            rows.append([c.to_rgba_u32() for c in palette])
    return np.array(rows, dtype=">u4").reshape(-1).tobytes()


def write_palettes(
    path: Union[str, Path],
    palettes: Iterable[Sequence[Color]],
    encoding: str = "rgb",
) -> int:
    """Write a palette file; returns the number of bytes written."""
    data = encode_palettes(palettes, encoding)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return len(data)

from typing import Tuple

import numpy as np

from .config import Config
from .exceptions import MalformedPalette, PaletteIndexOutOfRange


class Palette(object):
    """
    The 256 colors shared by every image of a BSH container.

    Palette colors are always fully opaque. Instances are immutable and can be
    reused across any number of containers.
    """

    def __init__(self, colors: np.ndarray):
        """
        Initialize Palette.

        Args:
            colors: Array of shape (256, 3) with raw R, G, B byte values
        """
        colors = np.array(colors, dtype=np.uint8)
        if colors.shape != (Config.PALETTE_SIZE, 3):
            raise MalformedPalette(
                f'Expected {Config.PALETTE_SIZE} RGB entries, got shape {colors.shape}'
            )

        rgba = np.full((Config.PALETTE_SIZE, 4), 255, dtype=np.uint8)
        rgba[:, :3] = colors

        self._colors = colors
        self._rgba = rgba
        self._colors.flags.writeable = False
        self._rgba.flags.writeable = False

    @property
    def colors(self) -> np.ndarray:
        """Read-only (256, 3) array of RGB values."""
        return self._colors

    @property
    def rgba(self) -> np.ndarray:
        """Read-only (256, 4) array of RGBA values, alpha always 255."""
        return self._rgba

    def lookup(self, index: int) -> Tuple[int, int, int, int]:
        """
        Resolve a color index.

        Args:
            index: Palette index (0-255)

        Returns:
            (r, g, b, 255) tuple

        Raises:
            PaletteIndexOutOfRange: If index is not in [0, 255]
        """
        if index < 0 or index >= Config.PALETTE_SIZE:
            raise PaletteIndexOutOfRange(f'Palette index {index} out of range')
        r, g, b, a = self._rgba[index]
        return int(r), int(g), int(b), int(a)

    def __len__(self) -> int:
        return Config.PALETTE_SIZE

    def __eq__(self, other) -> bool:
        if not isinstance(other, Palette):
            return NotImplemented
        return np.array_equal(self._colors, other._colors)

    def __hash__(self) -> int:
        return hash(self._colors.tobytes())

    @staticmethod
    def from_bytes(data: bytes) -> 'Palette':
        """
        Build a palette from the contents of a .COL file.

        The file holds a 20 byte header followed by 256 records of
        R, G, B and one padding byte. Values are used as-is.

        Args:
            data: Raw palette bytes

        Returns:
            Palette

        Raises:
            MalformedPalette: If data is shorter than 1044 bytes
        """
        header = Config.PALETTE_HEADER_LENGTH
        table_size = Config.PALETTE_SIZE * Config.PALETTE_RECORD_SIZE
        if len(data) < header + table_size:
            raise MalformedPalette(
                f'Palette too short: {len(data)} bytes, expected at least {header + table_size}'
            )

        records = np.frombuffer(data, dtype=np.uint8, count=table_size, offset=header)
        records = records.reshape(Config.PALETTE_SIZE, Config.PALETTE_RECORD_SIZE)
        return Palette(records[:, :3])

    @staticmethod
    def from_file(file_path: str) -> 'Palette':
        with open(file_path, 'rb') as fp:
            return Palette.from_bytes(fp.read())

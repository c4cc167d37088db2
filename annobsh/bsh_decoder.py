import io
from io import IOBase
from struct import unpack
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .config import Config
from .container import read_offsets
from .decoded_image import DecodedImage
from .exceptions import ImageTooLarge, PixelOutOfBounds, TruncatedImageStream
from .palette import Palette


class ImageDecoder(object):
    """
    Decodes single image records from a BSH container.

    Record layout (little-endian):
        int32 width, int32 height, 8 unknown bytes, then a run stream.

    Run stream:
        255            end of image
        254            end of row
        n, m, i1..im   n transparent pixels, then m opaque pixels with
                       palette indices i1..im
    """

    def __init__(self, fp: IOBase, palette: Palette):
        self._fp = fp
        self._palette = palette

    def _read(self, size: int, offset: int) -> bytes:
        data = self._fp.read(size)
        if len(data) < size:
            raise TruncatedImageStream('Unexpected end of container', offset)
        return data

    def decode(self, offset: int) -> Optional[DecodedImage]:
        """
        Decode the record starting at offset.

        The shared stream is left positioned after the end-of-image marker.

        Returns:
            DecodedImage, or None if the record has a non-positive width or height

        Raises:
            TruncatedImageStream: If the data ends before the end-of-image marker
            PixelOutOfBounds: If a run writes outside the canvas
            ImageTooLarge: If the declared size cannot be allocated
        """
        if offset < 0:
            raise TruncatedImageStream('Record starts before the container', offset)
        self._fp.seek(offset)

        width, height = unpack('<ii', self._read(8, offset))
        if width <= 0 or height <= 0:
            return None

        try:
            pixels = np.zeros((height, width, 4), dtype=np.uint8)
        except (ValueError, MemoryError) as e:
            raise ImageTooLarge(f'Cannot allocate {width}x{height} image: {e}', offset) from e
        self._read(Config.RECORD_PADDING, offset)

        x = 0
        y = 0
        while True:
            num_alpha = self._read(1, offset)[0]

            if num_alpha == Config.END_OF_IMAGE:
                break

            if num_alpha == Config.END_OF_ROW:
                x = 0
                y += 1
                continue

            if num_alpha:
                self._check_bounds(x, y, num_alpha, width, height, offset)
                pixels[y, x:x + num_alpha] = 0
                x += num_alpha

            num_pixels = self._read(1, offset)[0]
            if num_pixels:
                indices = np.frombuffer(self._read(num_pixels, offset), dtype=np.uint8)
                self._check_bounds(x, y, num_pixels, width, height, offset)
                pixels[y, x:x + num_pixels] = self._palette.rgba[indices]
                x += num_pixels

        return DecodedImage(pixels, offset)

    @staticmethod
    def _check_bounds(x, y, count, width, height, offset):
        if y >= height or x + count > width:
            raise PixelOutOfBounds(
                f'Run of {count} pixels at ({x}, {y}) exceeds {width}x{height} canvas',
                offset,
            )


class BshDecoder(object):
    """
    Decodes every image of a BSH container with a fixed palette.

    Records with a non-positive size are skipped; their offsets are collected in
    `skipped`. Output indices stay dense, so the n-th yielded image always has
    index n.
    """

    def __init__(self, palette: Palette, debug: bool = False):
        self._palette = palette
        self._debug = debug
        self.skipped: List[int] = []
        self.decoded = 0

    @property
    def palette(self) -> Palette:
        return self._palette

    def offsets(self, data: bytes) -> Tuple[int, ...]:
        """Offsets of every record in the container, including invalid ones."""
        return read_offsets(data)

    def iter_images(self, data: bytes, progress=None) -> Iterator[Tuple[int, DecodedImage]]:
        """
        Lazily decode all images of a container.

        Args:
            data: Raw container bytes
            progress: Optional tqdm-like object, updated once per record

        Yields:
            (index, DecodedImage) pairs

        Raises:
            MalformedContainer: If the offset table cannot be read
            ImageDecodeError: If a record is corrupt; images already yielded stay valid
        """
        offsets = read_offsets(data)
        self.skipped = []
        self.decoded = 0

        fp = io.BytesIO(data)
        decoder = ImageDecoder(fp, self._palette)

        if self._debug:
            print(f'Offsets: {len(offsets)}')

        index = 0
        for offset in offsets:
            image = decoder.decode(offset)
            if progress is not None:
                progress.update(1)

            # Not every record is a real image
            if image is None:
                self.skipped.append(offset)
                if self._debug:
                    print(f'  [SKIP] Invalid image size at offset {offset}')
                continue

            if self._debug:
                remaining = len(data) - fp.tell()
                print(f'  Image {index}: {image.width}x{image.height} at offset {offset}')
                print(f'  {remaining} bytes remaining')

            self.decoded = index + 1
            yield index, image
            index += 1

    def decode_file(self, file_path: str, progress=None) -> Iterator[Tuple[int, DecodedImage]]:
        with open(file_path, 'rb') as fp:
            data = fp.read()
        return self.iter_images(data, progress=progress)

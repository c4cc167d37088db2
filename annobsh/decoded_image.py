import os
from typing import Optional, Union

import numpy as np
from PIL import Image


def output_name(container_name: str, index: int, extension: str = 'png') -> str:
    """Build the file name of the index-th image decoded from a container."""
    return f"{os.path.basename(container_name)}_{index}.{extension}"


class DecodedImage(object):
    """
    One image decoded from a BSH container.

    Pixels are stored as a numpy array of shape (height, width, 4) with RGBA
    values, row-major with the origin at the top left.
    """

    @property
    def width(self) -> int:
        """Image width in pixels."""
        return self._width

    @property
    def height(self) -> int:
        """Image height in pixels."""
        return self._height

    @property
    def pixels(self) -> np.ndarray:
        """RGBA pixel grid of shape (height, width, 4)."""
        return self._pixels

    @property
    def offset(self) -> Optional[int]:
        """Byte offset of the record inside its container (None if unknown)."""
        return self._offset

    def __init__(self, pixels: np.ndarray, offset: Optional[int] = None):
        """
        Initialize DecodedImage.

        Args:
            pixels: Array of shape (height, width, 4) with RGBA values
            offset: Optional byte offset of the source record
        """
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"Expected an (height, width, 4) array, got shape {pixels.shape}")
        if pixels.shape[0] <= 0 or pixels.shape[1] <= 0:
            raise ValueError("Image must be at least 1x1")

        self._pixels = pixels.astype(np.uint8, copy=False)
        self._height, self._width = pixels.shape[:2]
        self._offset = offset

    def __repr__(self) -> str:
        return f"DecodedImage({self._width}x{self._height}, offset={self._offset})"

    def to_image(
        self,
        scale: Union[int, float] = 1,
        target_width: int = None,
        target_height: int = None,
    ) -> Image.Image:
        """
        Get a Pillow RGBA image of the decoded pixels.

        Args:
            scale: Optional scale factor
            target_width: Optional target width
            target_height: Optional target height

        Returns:
            PIL Image object
        """
        img = Image.fromarray(self._pixels)
        return self._resize(
            img, scale=scale, target_width=target_width, target_height=target_height
        )

    def _resize(
        self,
        img: Image.Image,
        scale: Union[int, float] = 1,
        target_width: int = None,
        target_height: int = None,
    ) -> Image.Image:
        """
        Resize image based on scale or target dimensions.

        Nearest-neighbour sampling keeps the palette colors intact.
        """
        if target_width is not None and target_height is not None:
            return img.resize((target_width, target_height), Image.NEAREST)
        elif target_width is not None:
            new_height = max(1, int(img.height * target_width / img.width))
            return img.resize((target_width, new_height), Image.NEAREST)
        elif target_height is not None:
            new_width = max(1, int(img.width * target_height / img.height))
            return img.resize((new_width, target_height), Image.NEAREST)
        elif scale != 1:
            new_width = max(1, int(img.width * scale))
            new_height = max(1, int(img.height * scale))
            return img.resize((new_width, new_height), Image.NEAREST)
        return img

    def save(
        self,
        output_path: str,
        scale: Union[int, float] = 1,
        target_width: int = None,
        target_height: int = None,
    ) -> None:
        """
        Write the image to disk. The format follows the file extension.

        Args:
            output_path: Path to save the image
            scale: Optional scale factor
            target_width: Optional target width
            target_height: Optional target height
        """
        img = self.to_image(
            scale=scale, target_width=target_width, target_height=target_height
        )
        img.save(output_path)

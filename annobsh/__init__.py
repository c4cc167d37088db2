"""annobsh package entrypoints."""

from .palette import Palette
from .container import read_offsets
from .decoded_image import DecodedImage, output_name
from .bsh_decoder import BshDecoder, ImageDecoder
from .exceptions import (
    BshError,
    ImageDecodeError,
    ImageTooLarge,
    MalformedContainer,
    MalformedPalette,
    PaletteIndexOutOfRange,
    PixelOutOfBounds,
    TruncatedImageStream,
)

__all__ = [
    'Palette',
    'read_offsets',
    'DecodedImage',
    'output_name',
    'BshDecoder',
    'ImageDecoder',
    'BshError',
    'ImageDecodeError',
    'ImageTooLarge',
    'MalformedContainer',
    'MalformedPalette',
    'PaletteIndexOutOfRange',
    'PixelOutOfBounds',
    'TruncatedImageStream',
]

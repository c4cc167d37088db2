from typing import Optional


class BshError(Exception):
    """Raised when a palette or BSH container cannot be decoded."""

    def __init__(self, message: str):
        super().__init__(message)


class MalformedPalette(BshError):
    """Raised when a palette blob is too short to hold 256 colors."""


class MalformedContainer(BshError):
    """Raised when a container is too short for its header or offset table."""


class ImageDecodeError(BshError):
    """Raised when an image record is corrupt enough to stop the whole container."""

    def __init__(self, message: str, offset: Optional[int] = None):
        if offset is not None:
            message = f'{message} (record at offset {offset})'
        super().__init__(message)
        self.offset = offset


class PaletteIndexOutOfRange(ImageDecodeError):
    """Raised when a color index falls outside the palette."""


class TruncatedImageStream(ImageDecodeError):
    """Raised when the buffer ends before the end-of-image marker."""


class PixelOutOfBounds(ImageDecodeError):
    """Raised when a run writes pixels outside the image canvas."""


class ImageTooLarge(ImageDecodeError):
    """Raised when a record declares a size no pixel grid can be allocated for."""

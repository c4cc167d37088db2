"""
Configuration constants for the BSH sprite reader.
"""


class Config:
    """Configuration constants for the BSH sprite reader."""

    # Container layout
    HEADER_LENGTH = 20  # 12 byte tag (42 53 48 00 ...) + 8 unknown bytes
    RECORD_PADDING = 8  # Unknown bytes after width/height in each record

    # Run-length markers
    END_OF_IMAGE = 255
    END_OF_ROW = 254

    # Palette layout (.COL files)
    PALETTE_HEADER_LENGTH = 20
    PALETTE_SIZE = 256
    PALETTE_RECORD_SIZE = 4  # R, G, B, padding

    # Palette used by the city graphics, relative to the game directory
    PALETTE_FILE = 'TOOLGFX/STADTFLD.COL'

    # Output
    OUTPUT_DIR = 'out'
    IMAGE_FORMAT = 'png'
    IMAGE_FORMATS = ('png', 'webp', 'gif', 'tiff')  # Formats that keep the alpha channel
    MANIFEST_FILENAME = 'manifest.csv'

    # Manifest columns
    FIELD_MAPPINGS = {
        "container": "Container",
        "index": "Index",
        "offset": "Offset",
        "width": "Width",
        "height": "Height",
        "filename": "File Name",
    }

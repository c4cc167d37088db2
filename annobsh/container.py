from struct import unpack_from
from typing import Tuple

from .config import Config
from .exceptions import MalformedContainer


def read_offsets(data: bytes) -> Tuple[int, ...]:
    """
    Read the offset table of a BSH container.

    The table has no count field. It starts right after the 20 byte header and
    runs until it reaches the first image, so its length is inferred from the
    first entry. All entries are relative to the end of the header.

    Args:
        data: Raw container bytes

    Returns:
        Absolute byte offsets of every image record, in file order. Entries
        may point at garbage records.

    Raises:
        MalformedContainer: If the header or a table entry lies past the end of data
    """
    header = Config.HEADER_LENGTH
    if len(data) < header + 4:
        raise MalformedContainer(
            f'Container too short: {len(data)} bytes, expected at least {header + 4}'
        )

    first_offset = unpack_from('<i', data, header)[0] + header
    offsets = [first_offset]

    # Entries whose end does not pass the first image belong to the table
    pos = header + 4
    while pos + 4 <= first_offset:
        if pos + 4 > len(data):
            raise MalformedContainer(
                f'Offset table runs past end of container at byte {pos}'
            )
        offsets.append(unpack_from('<i', data, pos)[0] + header)
        pos += 4

    return tuple(offsets)

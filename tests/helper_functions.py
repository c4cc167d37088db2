from struct import pack
from typing import Iterable, List, Sequence, Tuple

HEADER = b"BSH\x00\xa8\x11\x41\x00\x40\x00\x00\x00" + bytes(8)


def make_palette_bytes(colors: Sequence[Tuple[int, int, int]], header: bytes = bytes(20)) -> bytes:
    """Serialize 256 RGB triples in .COL layout, padding byte set to 0xEE."""
    assert len(colors) == 256
    body = b"".join(bytes((r, g, b, 0xEE)) for r, g, b in colors)
    return header + body


def make_record(width: int, height: int, stream: Iterable[int]) -> bytes:
    """Serialize one image record: size, 8 unknown bytes, run stream."""
    return pack("<ii", width, height) + b"\x01" * 8 + bytes(stream)


def make_container(records: List[bytes], header: bytes = HEADER) -> bytes:
    """Serialize a container with one offset table entry per record."""
    table_size = 4 * len(records)
    rel_offsets = []
    position = table_size
    for record in records:
        rel_offsets.append(position)
        position += len(record)
    table = b"".join(pack("<i", rel) for rel in rel_offsets)
    return header + table + b"".join(records)

from struct import pack

import pytest

from annobsh import MalformedContainer, read_offsets

from .helper_functions import make_container, make_record


def test_two_entry_table():
    data = bytes(20) + pack("<i", 8) + pack("<i", 40) + pack("<i", 12345) + bytes(16)
    assert read_offsets(data) == (28, 60)


def test_lookahead_entry_is_discarded():
    # The int32 read at the first image belongs to that image, not the table
    data = bytes(20) + pack("<i", 4) + pack("<i", 999) + bytes(16)
    assert read_offsets(data) == (24,)


def test_offsets_follow_records():
    records = [make_record(1, 1, [0, 1, 0, 255]), make_record(2, 1, [0, 2, 0, 0, 255]), make_record(0, 0, [])]
    data = make_container(records)
    offsets = read_offsets(data)
    assert len(offsets) == 3
    assert offsets[0] == 20 + 12
    assert offsets[1] == offsets[0] + len(records[0])
    assert offsets[2] == offsets[1] + len(records[1])


def test_header_content_is_not_validated():
    data = b"\xff" * 20 + pack("<i", 4) + bytes(8)
    assert read_offsets(data) == (24,)


def test_duplicates_are_preserved():
    data = bytes(20) + pack("<i", 12) + pack("<i", 12) + pack("<i", 12) + bytes(8)
    assert read_offsets(data) == (32, 32, 32)


def test_negative_first_offset_yields_single_entry():
    data = bytes(20) + pack("<i", -4) + bytes(8)
    assert read_offsets(data) == (16,)


@pytest.mark.parametrize("size", [0, 19, 20, 23])
def test_short_container_is_rejected(size: int):
    with pytest.raises(MalformedContainer, match="Container too short"):
        read_offsets(bytes(size))


def test_table_past_end_is_rejected():
    data = bytes(20) + pack("<i", 100) + pack("<i", 1)
    with pytest.raises(MalformedContainer, match="Offset table runs past end"):
        read_offsets(data)

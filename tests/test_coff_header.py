"""Tests for COFF file header parsing."""

import struct

import pytest

from coff_sections import CoffHeader, OutOfBoundsError
from coff_test_utils import IMAGE_FILE_MACHINE_AMD64


class TestCoffHeader:
    def test_parse_valid_header(self, object_file_bytes):
        """Test parsing the header of a synthetic object file."""
        header = CoffHeader.from_bytes(object_file_bytes)
        assert header.machine == IMAGE_FILE_MACHINE_AMD64
        assert header.number_of_sections == 3
        assert header.pointer_to_symbol_table == 20 + 3 * 40
        assert header.number_of_symbols == 2
        assert header.size_of_optional_header == 0

    def test_table_locations(self, object_file_bytes):
        header = CoffHeader.from_bytes(object_file_bytes)
        assert header.section_table_offset() == 20
        assert header.string_table_offset == 20 + 120 + 2 * 18

    def test_image_header_after_signature(self):
        """In an image the section table follows the optional header."""
        data = bytearray(0x100)
        struct.pack_into(
            "<HHIIIHH", data, 0x84, IMAGE_FILE_MACHINE_AMD64, 4, 0, 0, 0, 240, 0x22
        )
        header = CoffHeader.from_bytes(data, 0x84)
        assert header.number_of_sections == 4
        assert header.section_table_offset(0x84) == 0x84 + 20 + 240
        assert header.string_table_offset == 0

    def test_data_too_short_raises(self):
        with pytest.raises(OutOfBoundsError, match="COFF header"):
            CoffHeader.from_bytes(bytes(19))

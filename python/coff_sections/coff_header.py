"""
COFF file header (IMAGE_FILE_HEADER).

Only what is needed to find the section table and the string table:
in an object file the header sits at offset 0, in an image it follows the
"PE\\0\\0" signature. Locating that signature is left to the caller.
"""

import struct
from dataclasses import dataclass
from typing import ClassVar

from .reader import Buffer, check_bounds
from .string_table import string_table_offset
from .types import COFF_HEADER_SIZE


@dataclass(frozen=True)
class CoffHeader:
    """COFF file header (20 bytes)."""

    machine: int
    number_of_sections: int
    time_date_stamp: int
    pointer_to_symbol_table: int  # 0 when there is no symbol table
    number_of_symbols: int
    size_of_optional_header: int  # 0 for object files
    characteristics: int

    STRUCT_FMT: ClassVar[str] = "<HHIIIHH"
    SIZE: ClassVar[int] = COFF_HEADER_SIZE

    @classmethod
    def from_bytes(cls, data: Buffer, offset: int = 0) -> "CoffHeader":
        """Parse COFF header from binary data.

        Raises:
            OutOfBoundsError: If the header does not fit in data
        """
        check_bounds(data, offset, cls.SIZE, what="COFF header")
        fields = struct.unpack_from(cls.STRUCT_FMT, data, offset)
        return cls(*fields)

    def section_table_offset(self, header_offset: int = 0) -> int:
        """Absolute offset of the section table (right after the optional header)."""
        return header_offset + self.SIZE + self.size_of_optional_header

    @property
    def string_table_offset(self) -> int:
        """Absolute offset of the string table."""
        return string_table_offset(
            self.pointer_to_symbol_table, self.number_of_symbols
        )

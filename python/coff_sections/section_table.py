"""
COFF section table entries (IMAGE_SECTION_HEADER).

Each entry is 40 bytes, little-endian:

    Offset | Size | Field
    -------|------|------
    0x00   | 8    | Name
    0x08   | 4    | VirtualSize
    0x0C   | 4    | VirtualAddress
    0x10   | 4    | SizeOfRawData
    0x14   | 4    | PointerToRawData
    0x18   | 4    | PointerToRelocations
    0x1C   | 4    | PointerToLinenumbers
    0x20   | 2    | NumberOfRelocations
    0x22   | 2    | NumberOfLinenumbers
    0x24   | 4    | Characteristics

The name is resolved while decoding: a name starting with "/" refers to the
string table (see string_table.py), and the entry stores the resolved text
so it never has to go back to the buffer.
"""

import logging
import struct
from dataclasses import dataclass
from typing import ClassVar

from .errors import EncodingError
from .reader import Buffer, Cursor, read_bytes
from .string_table import DEFAULT_NAME_ENCODING, decode_indirect_index, read_string
from .types import (
    INDIRECT_NAME_MARKER,
    IMAGE_SCN_CNT_CODE,
    IMAGE_SCN_CNT_INITIALIZED_DATA,
    IMAGE_SCN_CNT_UNINITIALIZED_DATA,
    IMAGE_SCN_MEM_DISCARDABLE,
    IMAGE_SCN_MEM_EXECUTE,
    IMAGE_SCN_MEM_READ,
    IMAGE_SCN_MEM_WRITE,
    SECTION_TABLE_ENTRY_SIZE,
    section_alignment,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectName:
    """Section name stored inline in the 8-byte name field."""

    raw: bytes
    encoding: str = DEFAULT_NAME_ENCODING

    @property
    def text(self) -> str:
        """Name trimmed at the first NUL (8 chars are NOT NUL-terminated)."""
        trimmed = self.raw.split(b"\x00", 1)[0]
        try:
            return trimmed.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise EncodingError(trimmed, self.encoding) from e


@dataclass(frozen=True)
class IndirectName:
    """Section name stored in the string table."""

    raw: bytes
    index: int  # Relative to the start of the string table
    resolved: str

    @property
    def text(self) -> str:
        return self.resolved


SectionName = DirectName | IndirectName


def resolve_name(
    raw_name: bytes,
    buffer: Buffer,
    string_table_base: int,
    encoding: str = DEFAULT_NAME_ENCODING,
) -> SectionName:
    """Resolve an 8-byte name field, following string table references.

    Raises:
        MalformedError: If an indirect name has an unparseable offset
        OutOfBoundsError: If the referenced string is outside the buffer
        EncodingError: If the referenced string is not valid text
    """
    if raw_name[0] != INDIRECT_NAME_MARKER:
        return DirectName(raw_name, encoding)

    index = decode_indirect_index(raw_name)
    resolved = read_string(buffer, string_table_base, index, encoding)
    logger.debug(
        "Resolved section name %r -> %r (string table %#x + %#x)",
        raw_name,
        resolved,
        string_table_base,
        index,
    )
    return IndirectName(raw_name, index, resolved)


@dataclass(frozen=True)
class SectionTableEntry:
    """PE/COFF section header (IMAGE_SECTION_HEADER)."""

    section_name: SectionName
    virtual_size: int  # Size in memory (can be > size_of_raw_data)
    virtual_address: int  # RVA of section
    size_of_raw_data: int
    pointer_to_raw_data: int  # File offset, 0 if none
    pointer_to_relocations: int
    pointer_to_linenumbers: int  # Deprecated, usually 0
    number_of_relocations: int
    number_of_linenumbers: int
    characteristics: int

    STRUCT_FMT: ClassVar[str] = "<8sIIIIIIHHI"
    SIZE: ClassVar[int] = SECTION_TABLE_ENTRY_SIZE

    @classmethod
    def decode(
        cls,
        buffer: Buffer,
        cursor: Cursor,
        string_table_base: int,
        encoding: str = DEFAULT_NAME_ENCODING,
    ) -> "SectionTableEntry":
        """Decode one entry at the cursor and advance it by 40 bytes.

        Args:
            buffer: Data holding the section table (and string table)
            cursor: Read position, advanced past the entry on success
            string_table_base: Absolute offset of the string table
            encoding: Text encoding for section names

        Returns:
            Decoded entry with its name already resolved

        Raises:
            OutOfBoundsError: If the entry or its long name lies outside
                the buffer. The cursor position is unspecified afterwards.
            MalformedError: If a long name reference cannot be parsed
            EncodingError: If a long name is not valid text
        """
        record = read_bytes(buffer, cursor, cls.SIZE, what="section table entry")
        raw_name, *fields = struct.unpack(cls.STRUCT_FMT, record)
        section_name = resolve_name(raw_name, buffer, string_table_base, encoding)
        return cls(section_name, *fields)

    def to_bytes(self) -> bytes:
        """Serialize entry to binary data."""
        return struct.pack(
            self.STRUCT_FMT,
            self.raw_name,
            self.virtual_size,
            self.virtual_address,
            self.size_of_raw_data,
            self.pointer_to_raw_data,
            self.pointer_to_relocations,
            self.pointer_to_linenumbers,
            self.number_of_relocations,
            self.number_of_linenumbers,
            self.characteristics,
        )

    def write_to(self, data: bytearray, offset: int) -> None:
        """Write entry to mutable buffer at offset."""
        data[offset : offset + self.SIZE] = self.to_bytes()

    def to_dict(self) -> dict:
        """Plain-dict view, suitable for msgpack."""
        return {
            "name": self.name,
            "raw_name": self.raw_name,
            "virtual_size": self.virtual_size,
            "virtual_address": self.virtual_address,
            "size_of_raw_data": self.size_of_raw_data,
            "pointer_to_raw_data": self.pointer_to_raw_data,
            "pointer_to_relocations": self.pointer_to_relocations,
            "pointer_to_linenumbers": self.pointer_to_linenumbers,
            "number_of_relocations": self.number_of_relocations,
            "number_of_linenumbers": self.number_of_linenumbers,
            "characteristics": self.characteristics,
        }

    @property
    def raw_name(self) -> bytes:
        """The 8-byte name field as stored on disk."""
        return self.section_name.raw

    @property
    def resolved_name(self) -> str | None:
        """Name read from the string table, or None for inline names."""
        if isinstance(self.section_name, IndirectName):
            return self.section_name.resolved
        return None

    @property
    def name(self) -> str:
        """Effective section name.

        Raises:
            EncodingError: If an inline name is not valid text
        """
        return self.section_name.text

    @property
    def alignment(self) -> int | None:
        """Alignment in bytes from IMAGE_SCN_ALIGN_*, if set."""
        return section_alignment(self.characteristics)

    @property
    def is_code(self) -> bool:
        """Check if this section contains code."""
        return bool(self.characteristics & IMAGE_SCN_CNT_CODE)

    @property
    def is_initialized_data(self) -> bool:
        """Check if this section contains initialized data."""
        return bool(self.characteristics & IMAGE_SCN_CNT_INITIALIZED_DATA)

    @property
    def is_uninitialized_data(self) -> bool:
        """Check if this section contains uninitialized data (BSS)."""
        return bool(self.characteristics & IMAGE_SCN_CNT_UNINITIALIZED_DATA)

    @property
    def is_readable(self) -> bool:
        return bool(self.characteristics & IMAGE_SCN_MEM_READ)

    @property
    def is_writable(self) -> bool:
        return bool(self.characteristics & IMAGE_SCN_MEM_WRITE)

    @property
    def is_executable(self) -> bool:
        return bool(self.characteristics & IMAGE_SCN_MEM_EXECUTE)

    @property
    def is_discardable(self) -> bool:
        return bool(self.characteristics & IMAGE_SCN_MEM_DISCARDABLE)


def decode(
    buffer: Buffer,
    cursor: Cursor,
    string_table_base: int,
    encoding: str = DEFAULT_NAME_ENCODING,
) -> SectionTableEntry:
    """Decode one section table entry. See SectionTableEntry.decode."""
    return SectionTableEntry.decode(buffer, cursor, string_table_base, encoding)


def decode_section_table(
    buffer: Buffer,
    offset: int,
    count: int,
    string_table_base: int,
    encoding: str = DEFAULT_NAME_ENCODING,
) -> list[SectionTableEntry]:
    """Decode count consecutive section table entries starting at offset.

    Args:
        buffer: Data holding the section table (and string table)
        offset: Absolute offset of the first entry
        count: Number of entries (NumberOfSections from the COFF header)
        string_table_base: Absolute offset of the string table
        encoding: Text encoding for section names

    Returns:
        Entries in table order

    Raises:
        Whatever SectionTableEntry.decode raises for the first bad entry
    """
    cursor = Cursor(offset)
    entries = []
    for i in range(count):
        entry = SectionTableEntry.decode(buffer, cursor, string_table_base, encoding)
        logger.debug(
            "Section %d: raw name %r at %#x",
            i,
            entry.raw_name,
            cursor.offset - SectionTableEntry.SIZE,
        )
        entries.append(entry)
    return entries

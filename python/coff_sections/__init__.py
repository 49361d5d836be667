"""
coff-sections: PE/COFF section table decoding.

Decodes 40-byte section table entries and resolves long section names
through the COFF string table ("/123" and "//AAAAAB" references):

    from coff_sections import Cursor, decode

    cursor = Cursor(section_table_offset)
    entry = decode(data, cursor, string_table_offset)
    print(entry.name)  # ".debug_info", not "/4"

Modules:
- types: Section characteristics flags and structure sizes
- reader: Bounds-checked buffer reads and the Cursor
- string_table: String table references (decimal and base-64 forms)
- section_table: SectionTableEntry decoding and serialization
- coff_header: COFF file header, used to locate the tables
"""

from .errors import (
    CoffSectionError,
    OutOfBoundsError,
    MalformedError,
    EncodingError,
)
from .reader import Cursor, read_cstring
from .string_table import (
    DEFAULT_NAME_ENCODING,
    decode_base64_index,
    decode_decimal_index,
    decode_indirect_index,
    encode_string_table_index,
    read_string,
    string_table_offset,
)
from .section_table import (
    DirectName,
    IndirectName,
    SectionTableEntry,
    decode,
    decode_section_table,
    resolve_name,
)
from .coff_header import CoffHeader
from .types import (
    # Structure sizes
    COFF_HEADER_SIZE,
    SECTION_TABLE_ENTRY_SIZE,
    SECTION_NAME_SIZE,
    SYMBOL_SIZE,
    # Section characteristics
    IMAGE_SCN_TYPE_NO_PAD,
    IMAGE_SCN_CNT_CODE,
    IMAGE_SCN_CNT_INITIALIZED_DATA,
    IMAGE_SCN_CNT_UNINITIALIZED_DATA,
    IMAGE_SCN_LNK_OTHER,
    IMAGE_SCN_LNK_INFO,
    IMAGE_SCN_LNK_REMOVE,
    IMAGE_SCN_LNK_COMDAT,
    IMAGE_SCN_GPREL,
    IMAGE_SCN_MEM_PURGEABLE,
    IMAGE_SCN_MEM_16BIT,
    IMAGE_SCN_MEM_LOCKED,
    IMAGE_SCN_MEM_PRELOAD,
    IMAGE_SCN_ALIGN_1BYTES,
    IMAGE_SCN_ALIGN_2BYTES,
    IMAGE_SCN_ALIGN_4BYTES,
    IMAGE_SCN_ALIGN_8BYTES,
    IMAGE_SCN_ALIGN_16BYTES,
    IMAGE_SCN_ALIGN_32BYTES,
    IMAGE_SCN_ALIGN_64BYTES,
    IMAGE_SCN_ALIGN_128BYTES,
    IMAGE_SCN_ALIGN_256BYTES,
    IMAGE_SCN_ALIGN_512BYTES,
    IMAGE_SCN_ALIGN_1024BYTES,
    IMAGE_SCN_ALIGN_2048BYTES,
    IMAGE_SCN_ALIGN_4096BYTES,
    IMAGE_SCN_ALIGN_8192BYTES,
    IMAGE_SCN_ALIGN_MASK,
    IMAGE_SCN_LNK_NRELOC_OVFL,
    IMAGE_SCN_MEM_DISCARDABLE,
    IMAGE_SCN_MEM_NOT_CACHED,
    IMAGE_SCN_MEM_NOT_PAGED,
    IMAGE_SCN_MEM_SHARED,
    IMAGE_SCN_MEM_EXECUTE,
    IMAGE_SCN_MEM_READ,
    IMAGE_SCN_MEM_WRITE,
    # Helper functions
    section_alignment,
    alignment_to_flag,
)

__all__ = [
    # Errors
    "CoffSectionError",
    "OutOfBoundsError",
    "MalformedError",
    "EncodingError",
    # Reading
    "Cursor",
    "read_cstring",
    # String table
    "DEFAULT_NAME_ENCODING",
    "decode_base64_index",
    "decode_decimal_index",
    "decode_indirect_index",
    "encode_string_table_index",
    "read_string",
    "string_table_offset",
    # Section table
    "DirectName",
    "IndirectName",
    "SectionTableEntry",
    "decode",
    "decode_section_table",
    "resolve_name",
    "CoffHeader",
    # Structure sizes
    "COFF_HEADER_SIZE",
    "SECTION_TABLE_ENTRY_SIZE",
    "SECTION_NAME_SIZE",
    "SYMBOL_SIZE",
    # Section characteristics
    "IMAGE_SCN_TYPE_NO_PAD",
    "IMAGE_SCN_CNT_CODE",
    "IMAGE_SCN_CNT_INITIALIZED_DATA",
    "IMAGE_SCN_CNT_UNINITIALIZED_DATA",
    "IMAGE_SCN_LNK_OTHER",
    "IMAGE_SCN_LNK_INFO",
    "IMAGE_SCN_LNK_REMOVE",
    "IMAGE_SCN_LNK_COMDAT",
    "IMAGE_SCN_GPREL",
    "IMAGE_SCN_MEM_PURGEABLE",
    "IMAGE_SCN_MEM_16BIT",
    "IMAGE_SCN_MEM_LOCKED",
    "IMAGE_SCN_MEM_PRELOAD",
    "IMAGE_SCN_ALIGN_1BYTES",
    "IMAGE_SCN_ALIGN_2BYTES",
    "IMAGE_SCN_ALIGN_4BYTES",
    "IMAGE_SCN_ALIGN_8BYTES",
    "IMAGE_SCN_ALIGN_16BYTES",
    "IMAGE_SCN_ALIGN_32BYTES",
    "IMAGE_SCN_ALIGN_64BYTES",
    "IMAGE_SCN_ALIGN_128BYTES",
    "IMAGE_SCN_ALIGN_256BYTES",
    "IMAGE_SCN_ALIGN_512BYTES",
    "IMAGE_SCN_ALIGN_1024BYTES",
    "IMAGE_SCN_ALIGN_2048BYTES",
    "IMAGE_SCN_ALIGN_4096BYTES",
    "IMAGE_SCN_ALIGN_8192BYTES",
    "IMAGE_SCN_ALIGN_MASK",
    "IMAGE_SCN_LNK_NRELOC_OVFL",
    "IMAGE_SCN_MEM_DISCARDABLE",
    "IMAGE_SCN_MEM_NOT_CACHED",
    "IMAGE_SCN_MEM_NOT_PAGED",
    "IMAGE_SCN_MEM_SHARED",
    "IMAGE_SCN_MEM_EXECUTE",
    "IMAGE_SCN_MEM_READ",
    "IMAGE_SCN_MEM_WRITE",
    # Helper functions
    "section_alignment",
    "alignment_to_flag",
]

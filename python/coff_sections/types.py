"""
COFF section table constants.

Section characteristics flags, the alignment sub-field, and the structure
sizes needed to walk a section table and its string table.

References:
- Microsoft PE/COFF Specification, "Section Flags"
- https://learn.microsoft.com/en-us/windows/win32/debug/pe-format#section-flags
"""

# =============================================================================
# Structure sizes
# =============================================================================

COFF_HEADER_SIZE = 20
SECTION_TABLE_ENTRY_SIZE = 40
SECTION_NAME_SIZE = 8
SYMBOL_SIZE = 18  # IMAGE_SYMBOL, no padding

# Marker byte that introduces a string table reference in a section name
INDIRECT_NAME_MARKER = ord("/")

# =============================================================================
# Section characteristics
# =============================================================================

# Content type
IMAGE_SCN_TYPE_NO_PAD = 0x00000008  # Obsolete, replaced by IMAGE_SCN_ALIGN_1BYTES
IMAGE_SCN_CNT_CODE = 0x00000020
IMAGE_SCN_CNT_INITIALIZED_DATA = 0x00000040
IMAGE_SCN_CNT_UNINITIALIZED_DATA = 0x00000080

# Linker flags (object files only)
IMAGE_SCN_LNK_OTHER = 0x00000100
IMAGE_SCN_LNK_INFO = 0x00000200  # .drectve has this
IMAGE_SCN_LNK_REMOVE = 0x00000800
IMAGE_SCN_LNK_COMDAT = 0x00001000
IMAGE_SCN_GPREL = 0x00008000
IMAGE_SCN_MEM_PURGEABLE = 0x00020000
IMAGE_SCN_MEM_16BIT = 0x00020000
IMAGE_SCN_MEM_LOCKED = 0x00040000
IMAGE_SCN_MEM_PRELOAD = 0x00080000

# Alignment sub-field (object files only). Each value is an enumerated code,
# not a shift count.
IMAGE_SCN_ALIGN_1BYTES = 0x00100000
IMAGE_SCN_ALIGN_2BYTES = 0x00200000
IMAGE_SCN_ALIGN_4BYTES = 0x00300000
IMAGE_SCN_ALIGN_8BYTES = 0x00400000
IMAGE_SCN_ALIGN_16BYTES = 0x00500000
IMAGE_SCN_ALIGN_32BYTES = 0x00600000
IMAGE_SCN_ALIGN_64BYTES = 0x00700000
IMAGE_SCN_ALIGN_128BYTES = 0x00800000
IMAGE_SCN_ALIGN_256BYTES = 0x00900000
IMAGE_SCN_ALIGN_512BYTES = 0x00A00000
IMAGE_SCN_ALIGN_1024BYTES = 0x00B00000
IMAGE_SCN_ALIGN_2048BYTES = 0x00C00000
IMAGE_SCN_ALIGN_4096BYTES = 0x00D00000
IMAGE_SCN_ALIGN_8192BYTES = 0x00E00000
IMAGE_SCN_ALIGN_MASK = 0x00F00000

# Extended relocations: the real count lives in the first relocation entry
IMAGE_SCN_LNK_NRELOC_OVFL = 0x01000000

# Memory permissions
IMAGE_SCN_MEM_DISCARDABLE = 0x02000000
IMAGE_SCN_MEM_NOT_CACHED = 0x04000000
IMAGE_SCN_MEM_NOT_PAGED = 0x08000000
IMAGE_SCN_MEM_SHARED = 0x10000000
IMAGE_SCN_MEM_EXECUTE = 0x20000000
IMAGE_SCN_MEM_READ = 0x40000000
IMAGE_SCN_MEM_WRITE = 0x80000000

# Alignment flag -> alignment in bytes
ALIGNMENT_BY_FLAG: dict[int, int] = {
    IMAGE_SCN_ALIGN_1BYTES: 1,
    IMAGE_SCN_ALIGN_2BYTES: 2,
    IMAGE_SCN_ALIGN_4BYTES: 4,
    IMAGE_SCN_ALIGN_8BYTES: 8,
    IMAGE_SCN_ALIGN_16BYTES: 16,
    IMAGE_SCN_ALIGN_32BYTES: 32,
    IMAGE_SCN_ALIGN_64BYTES: 64,
    IMAGE_SCN_ALIGN_128BYTES: 128,
    IMAGE_SCN_ALIGN_256BYTES: 256,
    IMAGE_SCN_ALIGN_512BYTES: 512,
    IMAGE_SCN_ALIGN_1024BYTES: 1024,
    IMAGE_SCN_ALIGN_2048BYTES: 2048,
    IMAGE_SCN_ALIGN_4096BYTES: 4096,
    IMAGE_SCN_ALIGN_8192BYTES: 8192,
}


# =============================================================================
# Helper Functions
# =============================================================================


def section_alignment(characteristics: int) -> int | None:
    """Get the alignment in bytes encoded in a characteristics value.

    Args:
        characteristics: Section characteristics bitmask

    Returns:
        Alignment in bytes, or None if the alignment sub-field is zero or
        holds an undefined code (0xF)
    """
    return ALIGNMENT_BY_FLAG.get(characteristics & IMAGE_SCN_ALIGN_MASK)


def alignment_to_flag(alignment: int) -> int:
    """Get the IMAGE_SCN_ALIGN_* flag for an alignment in bytes."""
    for flag, value in ALIGNMENT_BY_FLAG.items():
        if value == alignment:
            return flag
    raise ValueError(f"No section alignment flag for {alignment} bytes")

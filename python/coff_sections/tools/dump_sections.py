#!/usr/bin/env python3
"""
Section table dump CLI tool.

Prints the section table of a COFF object file, resolving long section names
through the string table. For PE images (or any other buffer) pass the
section table and string table offsets explicitly.

Usage:
    python -m coff_sections.tools.dump_sections <file> [--verbose]
    python -m coff_sections.tools.dump_sections <file> \\
        --section-table-offset 0x188 --count 5 --string-table-offset 0x4000
    python -m coff_sections.tools.dump_sections <file> --msgpack sections.msgpack
"""

import argparse
import logging
import sys
from pathlib import Path

import msgpack

from coff_sections import (
    CoffHeader,
    CoffSectionError,
    SectionTableEntry,
    decode_section_table,
)
from coff_sections.types import (
    IMAGE_SCN_CNT_CODE,
    IMAGE_SCN_CNT_INITIALIZED_DATA,
    IMAGE_SCN_CNT_UNINITIALIZED_DATA,
    IMAGE_SCN_LNK_COMDAT,
    IMAGE_SCN_LNK_INFO,
    IMAGE_SCN_LNK_REMOVE,
    IMAGE_SCN_MEM_DISCARDABLE,
    IMAGE_SCN_MEM_EXECUTE,
    IMAGE_SCN_MEM_READ,
    IMAGE_SCN_MEM_SHARED,
    IMAGE_SCN_MEM_WRITE,
)

logger = logging.getLogger(__name__)

FLAG_NAMES = [
    (IMAGE_SCN_CNT_CODE, "CODE"),
    (IMAGE_SCN_CNT_INITIALIZED_DATA, "INITIALIZED_DATA"),
    (IMAGE_SCN_CNT_UNINITIALIZED_DATA, "UNINITIALIZED_DATA"),
    (IMAGE_SCN_LNK_INFO, "LNK_INFO"),
    (IMAGE_SCN_LNK_REMOVE, "LNK_REMOVE"),
    (IMAGE_SCN_LNK_COMDAT, "LNK_COMDAT"),
    (IMAGE_SCN_MEM_DISCARDABLE, "DISCARDABLE"),
    (IMAGE_SCN_MEM_SHARED, "SHARED"),
    (IMAGE_SCN_MEM_EXECUTE, "EXECUTE"),
    (IMAGE_SCN_MEM_READ, "READ"),
    (IMAGE_SCN_MEM_WRITE, "WRITE"),
]


def load_section_table(
    data: bytes,
    section_table_offset: int | None = None,
    count: int | None = None,
    string_table_offset: int | None = None,
) -> list[SectionTableEntry]:
    """Decode the section table of a COFF object file.

    Any location not given explicitly is taken from the COFF header at
    offset 0.

    Args:
        data: File contents
        section_table_offset: Absolute offset of the first entry
        count: Number of entries
        string_table_offset: Absolute offset of the string table

    Returns:
        Decoded entries
    """
    if None in (section_table_offset, count, string_table_offset):
        header = CoffHeader.from_bytes(data)
        logger.debug("COFF header: %s", header)
        if section_table_offset is None:
            section_table_offset = header.section_table_offset()
        if count is None:
            count = header.number_of_sections
        if string_table_offset is None:
            string_table_offset = header.string_table_offset

    return decode_section_table(data, section_table_offset, count, string_table_offset)


def describe_characteristics(characteristics: int) -> str:
    """Short flag summary, e.g. "CODE EXECUTE READ"."""
    names = [name for flag, name in FLAG_NAMES if characteristics & flag]
    return " ".join(names)


def format_entry(index: int, entry: SectionTableEntry) -> str:
    """One line of the text dump."""
    line = (
        f"{index:3d} {entry.name:<16} "
        f"vaddr={entry.virtual_address:#010x} vsize={entry.virtual_size:#x} "
        f"raw={entry.pointer_to_raw_data:#x}+{entry.size_of_raw_data:#x} "
        f"relocs={entry.number_of_relocations} "
        f"flags={entry.characteristics:#010x} "
        f"{describe_characteristics(entry.characteristics)}"
    )
    if entry.alignment is not None:
        line += f" align={entry.alignment}"
    return line.rstrip()


def write_msgpack(entries: list[SectionTableEntry], output: Path) -> None:
    """Write the decoded table as a msgpack list of maps."""
    payload = [entry.to_dict() for entry in entries]
    output.write_bytes(msgpack.packb(payload, use_bin_type=True))


def parse_int(value: str) -> int:
    """argparse type accepting decimal or 0x-prefixed values."""
    return int(value, 0)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Dump a COFF section table, resolving long section names"
    )
    parser.add_argument("binary", type=Path, help="Path to COFF object or image")
    parser.add_argument(
        "--section-table-offset",
        type=parse_int,
        help="Absolute offset of the section table (default: from COFF header)",
    )
    parser.add_argument(
        "--count",
        type=parse_int,
        help="Number of sections (default: from COFF header)",
    )
    parser.add_argument(
        "--string-table-offset",
        type=parse_int,
        help="Absolute offset of the string table (default: from COFF header)",
    )
    parser.add_argument(
        "--msgpack",
        type=Path,
        metavar="OUTPUT",
        help="Also write the decoded table to OUTPUT as msgpack",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.binary.exists():
        print(f"Error: {args.binary} does not exist", file=sys.stderr)
        return 1

    data = args.binary.read_bytes()
    try:
        entries = load_section_table(
            data,
            section_table_offset=args.section_table_offset,
            count=args.count,
            string_table_offset=args.string_table_offset,
        )
        lines = [format_entry(i, entry) for i, entry in enumerate(entries)]
    except CoffSectionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Sections in {args.binary}: {len(entries)}")
    for line in lines:
        print(line)

    if args.msgpack:
        write_msgpack(entries, args.msgpack)
        print(f"Wrote {args.msgpack}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

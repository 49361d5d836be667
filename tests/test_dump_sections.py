"""Tests for the section table dump tool."""

from pathlib import Path

import msgpack
import pytest

from coff_sections.tools.dump_sections import (
    describe_characteristics,
    format_entry,
    load_section_table,
    main,
)
from coff_sections.types import (
    IMAGE_SCN_ALIGN_16BYTES,
    IMAGE_SCN_CNT_CODE,
    IMAGE_SCN_MEM_EXECUTE,
    IMAGE_SCN_MEM_READ,
)
from coff_test_utils import make_section_record, make_string_table


@pytest.fixture
def object_file(tmp_path: Path, object_file_bytes: bytes) -> Path:
    path = tmp_path / "test.obj"
    path.write_bytes(object_file_bytes)
    return path


class TestLoadSectionTable:
    def test_uses_coff_header(self, object_file_bytes):
        entries = load_section_table(object_file_bytes)
        assert [e.name for e in entries] == [".text", ".debug_info", ".debug_abbrev"]

    def test_explicit_offsets(self):
        """Raw buffer without a COFF header."""
        data = (
            b"\x00" * 8
            + make_section_record(b".text")
            + make_section_record(b"/4")
            + make_string_table([".debug_str"])
        )
        entries = load_section_table(
            data, section_table_offset=8, count=2, string_table_offset=88
        )
        assert [e.name for e in entries] == [".text", ".debug_str"]

    def test_partial_override(self, object_file_bytes):
        entries = load_section_table(object_file_bytes, count=1)
        assert [e.name for e in entries] == [".text"]


class TestFormatting:
    def test_describe_characteristics(self):
        flags = IMAGE_SCN_CNT_CODE | IMAGE_SCN_MEM_EXECUTE | IMAGE_SCN_MEM_READ
        assert describe_characteristics(flags) == "CODE EXECUTE READ"
        assert describe_characteristics(0) == ""

    def test_format_entry_includes_alignment(self, object_file_bytes):
        entry = load_section_table(object_file_bytes)[0]
        assert "align=" not in format_entry(0, entry)

        flags = IMAGE_SCN_CNT_CODE | IMAGE_SCN_ALIGN_16BYTES
        record = make_section_record(b".text", characteristics=flags)
        aligned = load_section_table(
            record, section_table_offset=0, count=1, string_table_offset=0
        )[0]
        line = format_entry(0, aligned)
        assert ".text" in line
        assert line.endswith("CODE align=16")


class TestMain:
    def test_dump_object_file(self, object_file: Path, capsys):
        assert main([str(object_file)]) == 0
        out = capsys.readouterr().out
        assert "Sections in" in out
        assert "  0 .text" in out
        assert "  1 .debug_info" in out
        assert "  2 .debug_abbrev" in out

    def test_msgpack_output(self, object_file: Path, tmp_path: Path):
        output = tmp_path / "sections.msgpack"
        assert main([str(object_file), "--msgpack", str(output)]) == 0

        table = msgpack.unpackb(output.read_bytes(), raw=False)
        assert [s["name"] for s in table] == [".text", ".debug_info", ".debug_abbrev"]
        assert table[2]["raw_name"] == b"//AAAAAQ"

    def test_hex_offsets(self, object_file: Path, capsys):
        argv = [
            str(object_file),
            "--section-table-offset",
            "0x14",
            "--count",
            "2",
            "--string-table-offset",
            "0xb0",
        ]
        assert main(argv) == 0
        out = capsys.readouterr().out
        assert ".debug_info" in out
        assert ".debug_abbrev" not in out

    def test_missing_file(self, tmp_path: Path, capsys):
        assert main([str(tmp_path / "missing.obj")]) == 1
        assert "does not exist" in capsys.readouterr().err

    def test_decode_error(self, tmp_path: Path, capsys):
        path = tmp_path / "bad.obj"
        path.write_bytes(make_section_record(b"/bad"))
        argv = [
            str(path),
            "--section-table-offset",
            "0",
            "--count",
            "1",
            "--string-table-offset",
            "40",
        ]
        assert main(argv) == 1
        assert "Invalid indirect section name /bad" in capsys.readouterr().err

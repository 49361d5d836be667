"""
COFF string table references.

Section names longer than 8 bytes live in the string table that follows the
symbol table. The section header then stores a reference instead of the name:

    "/123"       decimal offset into the string table
    "//AAAAAB"   offset written as a base-64 numeral, used by linkers once the
                 decimal form no longer fits in 7 characters

The base-64 form uses the usual base64 symbols (A-Z, a-z, 0-9, +, /) as plain
positional digits, most significant first. It is NOT byte-oriented base64.

Offsets are relative to the start of the string table, which begins with its
own 4-byte size field, so the first real string is at offset 4.

References:
- llvm/lib/Object/COFFObjectFile.cpp (decodeBase64StringEntry)
- llvm/lib/MC/WinCOFFObjectWriter.cpp (encodeBase64StringEntry)
"""

from .errors import EncodingError, MalformedError
from .reader import Buffer, read_cstring
from .types import INDIRECT_NAME_MARKER, SECTION_NAME_SIZE, SYMBOL_SIZE

DEFAULT_NAME_ENCODING = "utf-8"

BASE64_ALPHABET = b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_BASE64_VALUES = {symbol: value for value, symbol in enumerate(BASE64_ALPHABET)}

# Digits left after the "//" marker in an 8-byte name
MAX_BASE64_DIGITS = SECTION_NAME_SIZE - 2
# Largest offset that fits after a single "/" in an 8-byte name
MAX_DECIMAL_INDEX = 9_999_999
MAX_BASE64_INDEX = 64**MAX_BASE64_DIGITS - 1


def _printable(text: bytes) -> str:
    return text.decode("ascii", errors="backslashreplace")


def _trim_nul(data: bytes) -> bytes:
    return data.split(b"\x00", 1)[0]


def decode_base64_index(text: bytes | str) -> int:
    """Decode a base-64 string table offset (without the "//" prefix).

    Args:
        text: Up to 6 digits from the base-64 alphabet

    Returns:
        The decoded offset

    Raises:
        MalformedError: If text is longer than 6 digits or contains a
            symbol outside the alphabet
    """
    if isinstance(text, str):
        text = text.encode("utf-8")

    if len(text) > MAX_BASE64_DIGITS:
        raise MalformedError(
            f"//{_printable(text)}",
            f"more than {MAX_BASE64_DIGITS} base64 digits",
        )

    value = 0
    for symbol in text:
        digit = _BASE64_VALUES.get(symbol)
        if digit is None:
            raise MalformedError(
                f"//{_printable(text)}",
                f"base64 decoding failed at {_printable(bytes([symbol]))!r}",
            )
        value = value * 64 + digit
    return value


def decode_decimal_index(text: bytes | str) -> int:
    """Decode a decimal string table offset (without the "/" prefix)."""
    if isinstance(text, str):
        text = text.encode("utf-8")

    # bytes.isdigit() only accepts ASCII 0-9, unlike int() on str
    if not text:
        raise MalformedError("/", "empty decimal offset")
    if not text.isdigit():
        raise MalformedError(f"/{_printable(text)}", "not a decimal number")
    return int(text)


def decode_indirect_index(raw_name: bytes) -> int:
    """Decode the string table offset stored in an indirect section name.

    Args:
        raw_name: The 8-byte name field, starting with "/"

    Returns:
        Offset relative to the start of the string table

    Raises:
        MalformedError: If raw_name is not an indirect name or its offset
            text cannot be parsed
    """
    if not raw_name or raw_name[0] != INDIRECT_NAME_MARKER:
        raise MalformedError(_printable(bytes(raw_name)), "missing '/' marker")

    if len(raw_name) > 1 and raw_name[1] == INDIRECT_NAME_MARKER:
        return decode_base64_index(_trim_nul(raw_name[2:]))
    return decode_decimal_index(_trim_nul(raw_name[1:]))


def encode_string_table_index(index: int) -> bytes:
    """Encode a string table offset as an 8-byte section name field.

    Uses the decimal form while it fits, and the base-64 form above that.

    Raises:
        ValueError: If index is negative or too large for either form
    """
    if index < 0:
        raise ValueError(f"String table offset cannot be negative: {index}")

    if index <= MAX_DECIMAL_INDEX:
        encoded = b"/" + str(index).encode("ascii")
    elif index <= MAX_BASE64_INDEX:
        digits = bytearray()
        for _ in range(MAX_BASE64_DIGITS):
            index, digit = divmod(index, 64)
            digits.append(BASE64_ALPHABET[digit])
        encoded = b"//" + bytes(reversed(digits))
    else:
        raise ValueError(
            f"String table offset too large for a section name: {index:#x}"
        )
    return encoded.ljust(SECTION_NAME_SIZE, b"\x00")


def read_string(
    buffer: Buffer,
    string_table_base: int,
    index: int,
    encoding: str = DEFAULT_NAME_ENCODING,
) -> str:
    """Read a NUL-terminated string from the string table.

    Args:
        buffer: Whole file (or at least everything up to the string)
        string_table_base: Absolute offset of the string table
        index: Offset relative to string_table_base
        encoding: Text encoding of the string

    Raises:
        OutOfBoundsError: If the string starts past the end of the buffer
            or is not terminated before it
        EncodingError: If the bytes are not valid text
    """
    offset = string_table_base + index
    raw = read_cstring(buffer, offset, what="string table entry")
    try:
        return raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise EncodingError(raw, encoding) from e


def string_table_offset(pointer_to_symbol_table: int, number_of_symbols: int) -> int:
    """Get the absolute offset of the string table.

    The string table immediately follows the symbol table.
    """
    return pointer_to_symbol_table + number_of_symbols * SYMBOL_SIZE

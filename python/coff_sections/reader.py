"""
Bounds-checked reads over an immutable buffer.

Reads go through a Cursor owned by the caller so several decoders can walk
the same buffer independently. Every read checks the buffer length first and
raises OutOfBoundsError instead of letting struct or slicing misbehave
(struct.unpack_from accepts negative offsets, slicing silently truncates).
"""

from dataclasses import dataclass

from .errors import OutOfBoundsError

Buffer = bytes | bytearray | memoryview


@dataclass
class Cursor:
    """Mutable read position into a buffer."""

    offset: int = 0

    def advance(self, size: int) -> int:
        """Move forward by size bytes and return the previous offset."""
        start = self.offset
        self.offset += size
        return start


def check_bounds(buffer: Buffer, offset: int, size: int, what: str = "data") -> None:
    """Raise OutOfBoundsError unless buffer[offset:offset + size] is readable."""
    if offset < 0 or size < 0 or offset + size > len(buffer):
        raise OutOfBoundsError(offset, size, len(buffer), what)


def read_bytes(buffer: Buffer, cursor: Cursor, size: int, what: str = "data") -> bytes:
    """Read size raw bytes at the cursor and advance it."""
    check_bounds(buffer, cursor.offset, size, what)
    start = cursor.advance(size)
    return bytes(buffer[start : start + size])


def read_cstring(buffer: Buffer, offset: int, what: str = "string") -> bytes:
    """Read a NUL-terminated byte string at an absolute offset.

    Args:
        buffer: Data to read from
        offset: Absolute offset of the first byte
        what: Description used in error messages

    Returns:
        The bytes before the terminator (terminator not included)

    Raises:
        OutOfBoundsError: If offset is outside the buffer or no NUL byte
            follows it before the end of the buffer
    """
    length = len(buffer)
    if offset < 0 or offset >= length:
        raise OutOfBoundsError(offset, 1, length, what)

    if isinstance(buffer, memoryview):
        buffer = buffer.tobytes()
    end = buffer.find(b"\x00", offset)
    if end < 0:
        # Unterminated: the string would need at least one byte past the end
        raise OutOfBoundsError(offset, length - offset + 1, length, what)
    return bytes(buffer[offset:end])

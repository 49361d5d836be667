"""
Errors raised while decoding COFF section tables.

All of them derive from ValueError, so callers that only care about
"this input is bad" can keep catching ValueError.
"""


class CoffSectionError(ValueError):
    """Base class for section table decode errors."""

    pass


class OutOfBoundsError(CoffSectionError):
    """Raised when a read would run past the end of the buffer."""

    def __init__(self, offset: int, size: int, length: int, what: str = "data"):
        self.offset = offset
        self.size = size
        self.length = length
        super().__init__(
            f"Cannot read {what} at {offset:#x} (+{size}): "
            f"buffer is only {length:#x} bytes"
        )


class MalformedError(CoffSectionError):
    """Raised when an indirect section name cannot be parsed."""

    def __init__(self, text: str, reason: str):
        self.text = text
        super().__init__(f"Invalid indirect section name {text}: {reason}")


class EncodingError(CoffSectionError):
    """Raised when name bytes are not valid text."""

    def __init__(self, raw: bytes, encoding: str):
        self.raw = bytes(raw)
        self.encoding = encoding
        super().__init__(f"Section name {self.raw!r} is not valid {encoding}")

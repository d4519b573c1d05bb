"""Exception hierarchy for lebin.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from LebinError for easy catching of any lebin-specific error.

Size problems on the lenient paths are not raised: an encode that does not fit
reports 0 bytes written and a decode from a short buffer yields zero values.
The Insufficient* exceptions below are only raised in strict mode.
"""

from __future__ import annotations


class LebinError(Exception):
    """Base exception for all lebin errors."""

    pass


class SchemaError(LebinError):
    """Raised when a type spec or record layout is invalid.

    Examples:
        - Array length is not a positive integer
        - Record field without a lebin type annotation
        - Size requested for a variable-length (CString) spec
    """

    pass


class UnsupportedTypeError(SchemaError):
    """Raised when a value or spec matches no encoding strategy.

    Examples:
        - A bare ``int`` (no width)
        - A ``list``/``dict`` or other dynamic collection
        - An enum whose underlying type is not an integer scalar
    """

    pass


class EncodeError(LebinError):
    """Raised when a value cannot be encoded.

    Examples:
        - Value out of range for its scalar type
        - Array value with the wrong number of elements
        - C-string content with an embedded NUL byte
    """

    pass


class InsufficientCapacityError(EncodeError):
    """Raised in strict mode when the destination cannot hold the sequence."""

    def __init__(self, needed: int, capacity: int) -> None:
        super().__init__(f"Destination too small: need {needed} bytes, capacity {capacity}")
        self.needed = needed
        self.capacity = capacity


class InvalidBufferError(EncodeError):
    """Raised when the destination buffer is not writable."""

    pass


class DecodeError(LebinError):
    """Raised when decoding binary data fails.

    Examples:
        - No source buffer given
        - Truncated data (strict mode only)
    """

    pass


class InvalidSourceError(DecodeError):
    """Raised when a decode cursor is built over an absent source buffer."""

    pass


class InsufficientSourceError(DecodeError):
    """Raised in strict mode when a read needs more bytes than remain."""

    def __init__(self, needed: int, remaining: int) -> None:
        super().__init__(f"Truncated data: need {needed} bytes, have {remaining}")
        self.needed = needed
        self.remaining = remaining

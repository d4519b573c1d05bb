"""Byte-level cursors over caller-owned buffers.

This module provides the two borrowed, self-advancing views the codecs write
to and read from. Neither cursor copies or owns its buffer; the caller keeps
the buffer alive (and, for decoding, unmodified) while the cursor is in use.

A cursor instance must not be shared between threads.
"""

from __future__ import annotations

import struct
from typing import Any, Optional

from ..exceptions import InvalidBufferError, InvalidSourceError


def _byte_view(buffer: Any, length: Optional[int]) -> memoryview:
    view = memoryview(buffer)
    if view.ndim != 1 or view.itemsize != 1 or view.format != "B":
        view = view.cast("B")
    if length is not None:
        if length < 0:
            raise ValueError(f"length must be >= 0, got {length}")
        view = view[: min(length, len(view))]
    return view


class EncodeCursor:
    """Writes whole values into a caller-supplied writable buffer.

    Every write is whole-or-nothing: when fewer bytes remain than the value
    needs, nothing is written and 0 is returned.

    Example:
        >>> buf = bytearray(4)
        >>> cursor = EncodeCursor(buf)
        >>> cursor.pack(struct.Struct("<H"), 1234)
        2
        >>> cursor.remaining
        2
    """

    def __init__(self, buffer: Any, capacity: Optional[int] = None) -> None:
        """Initialize a cursor at the start of ``buffer``.

        Args:
            buffer: Writable bytes-like object (bytearray, memoryview, array, ...)
            capacity: Usable bytes from the start of the buffer; clamped to its length

        Raises:
            InvalidBufferError: If the buffer is missing or read-only
        """
        if buffer is None:
            raise InvalidBufferError("No destination buffer given")
        try:
            view = _byte_view(buffer, capacity)
        except TypeError as err:
            raise InvalidBufferError(f"Destination is not a buffer: {err}") from err
        if view.readonly:
            raise InvalidBufferError(f"Destination {type(buffer).__name__} is read-only")
        self._view = view
        self._position = 0

    @property
    def capacity(self) -> int:
        return len(self._view)

    @property
    def position(self) -> int:
        """Bytes written so far."""
        return self._position

    @property
    def remaining(self) -> int:
        return len(self._view) - self._position

    def write(self, data: bytes) -> int:
        """Append raw bytes.

        Returns:
            Number of bytes written (0 if ``data`` does not fit)
        """
        size = len(data)
        if size > self.remaining:
            return 0
        self._view[self._position : self._position + size] = data
        self._position += size
        return size

    def pack(self, codec: struct.Struct, value: Any) -> int:
        """Pack a single value with a ``struct`` codec.

        Returns:
            Number of bytes written (0 if the value does not fit)
        """
        if codec.size > self.remaining:
            return 0
        codec.pack_into(self._view, self._position, value)
        self._position += codec.size
        return codec.size


class DecodeCursor:
    """Reads values from a borrowed byte region, shrinking as it goes.

    Reads never look ahead and never consume a partial value: a read that needs
    more bytes than remain returns None and leaves the cursor where it was.
    Once ``remaining`` reaches 0 the cursor is exhausted for good.
    """

    def __init__(self, source: Any, length: Optional[int] = None) -> None:
        """Initialize a cursor at the start of ``source``.

        Args:
            source: Bytes-like object to read from
            length: Readable bytes from the start of the source; clamped to its length

        Raises:
            InvalidSourceError: If the source is missing or not bytes-like
        """
        if source is None:
            raise InvalidSourceError("No source buffer given")
        try:
            self._view = _byte_view(source, length)
        except TypeError as err:
            raise InvalidSourceError(f"Source is not a buffer: {err}") from err
        self._position = 0

    @property
    def position(self) -> int:
        """Bytes consumed so far."""
        return self._position

    @property
    def remaining(self) -> int:
        return len(self._view) - self._position

    @property
    def exhausted(self) -> bool:
        return self.remaining == 0

    def take(self, size: int) -> Optional[memoryview]:
        """Consume ``size`` bytes.

        Returns:
            View of the consumed bytes, or None if fewer than ``size`` remain
        """
        if size > self.remaining:
            return None
        chunk = self._view[self._position : self._position + size]
        self._position += size
        return chunk

    def unpack(self, codec: struct.Struct) -> Any:
        """Consume one ``struct`` value.

        Returns:
            Unpacked value, or None if fewer than ``codec.size`` bytes remain
        """
        if codec.size > self.remaining:
            return None
        (value,) = codec.unpack_from(self._view, self._position)
        self._position += codec.size
        return value

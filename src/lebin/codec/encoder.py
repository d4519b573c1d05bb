"""Little-endian encoder for value sequences.

This module provides the serialize() function that binds an ordered sequence
of values and writes their encodings, back to back, into a caller-supplied
buffer.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from ..config import CodecConfig, resolve
from ..exceptions import InsufficientCapacityError
from .cursor import EncodeCursor
from .strategy import Codec, bind

logger = logging.getLogger(__name__)


class Serializer:
    """An ordered, immutable sequence of values ready to be written.

    Created by serialize(); every value has already been classified and
    range-checked, so ``to()`` can only fail for lack of space.
    """

    def __init__(self, values: Tuple[Any, ...], config: Optional[CodecConfig] = None) -> None:
        self._config = config
        self._bound: List[Tuple[Codec, Any]] = [bind(value) for value in values]

    def __len__(self) -> int:
        return len(self._bound)

    def size(self) -> int:
        """Return the exact number of bytes ``to()`` writes.

        C-strings are probed here (content length + 1).
        """
        return sum(codec.encoded_size(value) for codec, value in self._bound)

    def to(self, buffer: Any, capacity: Optional[int] = None) -> int:
        """Write every value, in order, to the start of ``buffer``.

        Args:
            buffer: Writable bytes-like destination owned by the caller
            capacity: Usable bytes (defaults to, and is clamped to, len(buffer))

        Returns:
            Total bytes written, or 0 if the sequence does not fit. Bytes past
            the written region are left untouched.

        Raises:
            InvalidBufferError: If the destination is missing or read-only
            InsufficientCapacityError: If the sequence does not fit and the
                config is strict
        """
        config = resolve(self._config)
        config.check_host()
        cursor = EncodeCursor(buffer, capacity)

        if config.precheck:
            needed = self.size()
            if needed > cursor.capacity:
                return self._fail(config, needed, cursor.capacity)

        for codec, value in self._bound:
            if codec.write(cursor, value) == 0:
                # Earlier whole values stay in the buffer; the call still reports 0
                return self._fail(config, self.size(), cursor.capacity)

        return cursor.position

    def to_bytes(self) -> bytes:
        """Encode into a freshly allocated buffer of exactly ``size()`` bytes."""
        buffer = bytearray(self.size())
        self.to(buffer)
        return bytes(buffer)

    @staticmethod
    def _fail(config: CodecConfig, needed: int, capacity: int) -> int:
        if config.strict:
            raise InsufficientCapacityError(needed, capacity)
        logger.debug("Insufficient capacity: need %d bytes, have %d", needed, capacity)
        return 0


def serialize(*values: Any, config: Optional[CodecConfig] = None) -> Serializer:
    """Bind values for encoding.

    Values are encoded in argument order with little-endian byte order and no
    framing: the output is exactly the concatenation of each value's encoding.

    Args:
        *values: Typed values (``uint16(7)``, ``typed(Mode, 9)``), bools, floats
            (float64), str/bytes (C-strings), IntEnum members or Record instances
        config: Optional configuration; defaults to the process-wide one

    Returns:
        Serializer bound to the values

    Raises:
        ValueError: If no values are given
        UnsupportedTypeError: If a value matches no encoding strategy
        EncodeError: If a value does not fit its type

    Examples:
        ```python
        from lebin import serialize, uint16, int8, float32

        buf = bytearray(16)
        written = serialize(uint16(1234), int8(-5), float32(3.5)).to(buf)
        # written == 7, buf[:7] == b"\\xd2\\x04\\xfb\\x00\\x00\\x60\\x40"
        ```
    """
    if not values:
        raise ValueError("serialize() requires at least one value")
    return Serializer(values, config)

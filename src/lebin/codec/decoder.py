"""Little-endian decoder for value sequences.

This module provides the deserialize() function that reads values of the
requested types, in order, from a borrowed byte buffer.

Truncated input is not an error by default: a scalar, enum or record that does
not fit decodes to its zero value without consuming anything, and an array
decodes the elements that fit and zero-fills the rest. Use ``strict=True`` to
raise InsufficientSourceError instead, or ``try_to()`` to learn whether a
result was padded.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, NamedTuple, Optional

from ..config import CodecConfig, resolve
from ..exceptions import InsufficientSourceError, UnsupportedTypeError
from .cursor import DecodeCursor
from .strategy import Codec, Strategy, codec_for

logger = logging.getLogger(__name__)


class DecodeResult(NamedTuple):
    """Decoded values plus whether any of them were zero-filled."""

    values: Any
    truncated: bool


class Deserializer:
    """Single-pass reader over a borrowed buffer.

    Every ``to()`` call consumes bytes; a second call continues where the
    previous one stopped. Once exhausted, further reads return zero values.
    """

    def __init__(
        self, source: Any, length: Optional[int] = None, config: Optional[CodecConfig] = None
    ) -> None:
        self._config = resolve(config)
        self._config.check_host()
        self._cursor = DecodeCursor(source, length)
        self._truncated = False

    @property
    def remaining(self) -> int:
        """Bytes not yet consumed."""
        return self._cursor.remaining

    @property
    def exhausted(self) -> bool:
        return self._cursor.exhausted

    @property
    def truncated(self) -> bool:
        """True once any read substituted zero values for missing data."""
        return self._truncated

    def to(self, *specs: Any) -> Any:
        """Read one value per spec.

        Args:
            *specs: Type specs, in wire order (CString is not decodable)

        Returns:
            The value for a single spec, or a tuple in spec order. Arrays come
            back as lists (``bytes`` for char arrays).

        Raises:
            ValueError: If no spec is given
            UnsupportedTypeError: If a spec matches no decodable strategy
            InsufficientSourceError: If data runs out and the config is strict
        """
        if not specs:
            raise ValueError("to() requires at least one type")
        codecs = [self._decodable(spec) for spec in specs]

        required = sum(codec.size for codec in codecs)  # type: ignore[misc]
        if required > self._cursor.remaining:
            logger.debug(
                "Decoding %d bytes from %d remaining; missing data will be zero-filled",
                required,
                self._cursor.remaining,
            )

        values = [self._read(codec) for codec in codecs]
        if len(values) == 1:
            return values[0]
        return tuple(values)

    def try_to(self, *specs: Any) -> DecodeResult:
        """Like ``to()``, but report whether this call zero-filled anything."""
        before = self._truncated
        self._truncated = False
        try:
            values = self.to(*specs)
            return DecodeResult(values, self._truncated)
        finally:
            self._truncated = before or self._truncated

    def _decodable(self, spec: Any) -> Codec:
        codec = codec_for(spec)
        if codec.strategy is Strategy.CSTRING:
            raise UnsupportedTypeError(
                "CString is serialize-only; decode fixed text with Array(char, N)"
            )
        return codec

    def _read(self, codec: Codec) -> Any:
        if self._config.strict and codec.size > self._cursor.remaining:  # type: ignore[operator]
            raise InsufficientSourceError(codec.size, self._cursor.remaining)  # type: ignore[arg-type]
        value, complete = codec.read(self._cursor)
        if not complete:
            self._truncated = True
            logger.debug("Truncated read of %r, zero value substituted", codec.spec)
        return value


def deserialize(
    source: Any,
    length: Optional[int] = None,
    *,
    strict: Optional[bool] = None,
    config: Optional[CodecConfig] = None,
) -> Deserializer:
    """Create a reader over a byte buffer.

    The buffer is borrowed, not copied: it must stay alive and unmodified
    while the returned Deserializer is used.

    Args:
        source: Bytes-like object to decode from
        length: Readable bytes (defaults to, and is clamped to, len(source))
        strict: Raise on truncated data instead of zero-filling; overrides config
        config: Optional configuration; defaults to the process-wide one

    Returns:
        Deserializer positioned at the start of the buffer

    Raises:
        InvalidSourceError: If the source is None or not bytes-like

    Examples:
        ```python
        from lebin import deserialize, uint16, int8, float32

        data = b"\\xd2\\x04\\xfb\\x00\\x00\\x60\\x40"
        value, offset, gain = deserialize(data).to(uint16, int8, float32)
        # (1234, -5, 3.5)
        ```
    """
    config = resolve(config)
    if strict is not None and strict != config.strict:
        config = replace(config, strict=strict)
    return Deserializer(source, length, config)


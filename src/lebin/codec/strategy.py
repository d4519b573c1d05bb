"""Type classification and per-strategy codecs.

Every type spec maps to exactly one encoding strategy. The codec for a spec is
resolved once and cached, so dispatch happens per concrete type rather than
per value.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Dict, Optional, Tuple

from ..exceptions import EncodeError, SchemaError, UnsupportedTypeError
from .cursor import DecodeCursor, EncodeCursor
from .types import CString, ArrayType, ScalarType, Typed, bool_, char, float64, underlying_of

logger = logging.getLogger(__name__)


class Strategy(enum.Enum):
    """Encoding strategy of a type spec."""

    SCALAR = "scalar"
    ENUM = "enum"
    FIXED_ARRAY = "fixed_array"
    TRIVIAL_AGGREGATE = "trivial_aggregate"
    CSTRING = "cstring"


def _is_record(spec: Any) -> bool:
    from ..models.base import Record

    return isinstance(spec, type) and issubclass(spec, Record) and spec is not Record


def _is_int_enum(spec: Any) -> bool:
    return isinstance(spec, type) and issubclass(spec, enum.Enum) and issubclass(spec, int)


def classify(spec: Any) -> Strategy:
    """Return the encoding strategy of a type spec.

    Args:
        spec: Type spec to classify

    Returns:
        The single matching Strategy

    Raises:
        UnsupportedTypeError: If the spec matches no strategy
    """
    if isinstance(spec, ScalarType):
        return Strategy.SCALAR
    if _is_int_enum(spec):
        return Strategy.ENUM
    if isinstance(spec, ArrayType):
        return Strategy.FIXED_ARRAY
    if _is_record(spec):
        return Strategy.TRIVIAL_AGGREGATE
    if spec is CString:
        return Strategy.CSTRING

    if isinstance(spec, type) and issubclass(spec, enum.Enum):
        raise UnsupportedTypeError(
            f"Enum {spec.__name__} has no integer representation; derive from enum.IntEnum"
        )
    raise UnsupportedTypeError(f"Unsupported type spec: {spec!r}")


class Codec:
    """Encodes and decodes values of one type spec.

    Attributes:
        spec: The type spec this codec handles
        strategy: Its encoding strategy
        size: Encoded size in bytes, or None when it depends on the value
        alignment: Natural alignment inside a record
    """

    strategy: Strategy
    size: Optional[int]
    alignment: int

    def __init__(self, spec: Any) -> None:
        self.spec = spec

    def zero(self) -> Any:
        """Return the value substituted for data that could not be read."""
        raise NotImplementedError

    def check(self, value: Any) -> Any:
        """Validate a value and return it normalized for ``write``."""
        raise NotImplementedError

    def encoded_size(self, value: Any) -> int:
        """Return the encoded size of an already checked value."""
        assert self.size is not None
        return self.size

    def write(self, cursor: EncodeCursor, value: Any) -> int:
        """Write a checked value; returns bytes written, 0 if it does not fit."""
        raise NotImplementedError

    def read(self, cursor: DecodeCursor) -> Tuple[Any, bool]:
        """Read one value.

        Returns:
            Tuple (value, complete). ``complete`` is False when the source ran
            out and zero values were substituted.
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.spec!r})"


class ScalarCodec(Codec):
    strategy = Strategy.SCALAR

    def __init__(self, spec: ScalarType) -> None:
        super().__init__(spec)
        self.size = spec.size
        self.alignment = spec.size

    def zero(self) -> Any:
        return self.spec.zero()

    def check(self, value: Any) -> Any:
        return self.spec.check(value)

    def write(self, cursor: EncodeCursor, value: Any) -> int:
        return cursor.pack(self.spec.codec, value)

    def read(self, cursor: DecodeCursor) -> Tuple[Any, bool]:
        value = cursor.unpack(self.spec.codec)
        if value is None:
            return self.zero(), False
        return value, True


class EnumCodec(Codec):
    """Encodes only the underlying bit pattern of an enum member."""

    strategy = Strategy.ENUM

    def __init__(self, spec: type) -> None:
        super().__init__(spec)
        self.scalar = ScalarCodec(underlying_of(spec))
        self.size = self.scalar.size
        self.alignment = self.scalar.alignment

    def _to_member(self, raw: int) -> Any:
        try:
            return self.spec(raw)
        except ValueError:
            # C enums may hold any value of the underlying type
            logger.debug("No %s member for value %d, returning raw int", self.spec.__name__, raw)
            return raw

    def zero(self) -> Any:
        return self._to_member(0)

    def check(self, value: Any) -> Any:
        if isinstance(value, enum.Enum) and not isinstance(value, self.spec):
            raise EncodeError(
                f"{self.spec.__name__}: expected {self.spec.__name__} member, "
                f"got {type(value).__name__}"
            )
        return self._to_member(self.scalar.check(value))

    def write(self, cursor: EncodeCursor, value: Any) -> int:
        return self.scalar.write(cursor, value)

    def read(self, cursor: DecodeCursor) -> Tuple[Any, bool]:
        raw, complete = self.scalar.read(cursor)
        return self._to_member(raw), complete


class ArrayCodec(Codec):
    """N consecutive element encodings, index-ascending, no length prefix.

    Arrays of ``char`` take and return ``bytes``; all others use lists.
    """

    strategy = Strategy.FIXED_ARRAY

    def __init__(self, spec: ArrayType) -> None:
        super().__init__(spec)
        if spec.length <= 0:
            raise SchemaError(f"Array length must be > 0, got {spec.length}")
        self.element = codec_for(spec.element)
        if self.element.size is None:
            raise UnsupportedTypeError(f"Array element {spec.element!r} has no fixed size")
        self.length = spec.length
        self.size = self.element.size * self.length
        self.alignment = self.element.alignment
        self.is_text = spec.element is char

    def zero(self) -> Any:
        if self.is_text:
            return bytes(self.length)
        return [self.element.zero() for _ in range(self.length)]

    def check(self, value: Any) -> Any:
        if self.is_text:
            if isinstance(value, str):
                value = value.encode("utf-8")
            if not isinstance(value, (bytes, bytearray)):
                raise EncodeError(f"{self.spec!r}: expected bytes or str, got {type(value).__name__}")
            if len(value) > self.length:
                raise EncodeError(
                    f"{self.spec!r}: expected at most {self.length} bytes, got {len(value)}"
                )
            # Shorter text is NUL-padded like a C char array initializer
            return bytes(value).ljust(self.length, b"\x00")

        if isinstance(value, (str, bytes, bytearray)) or not hasattr(value, "__len__"):
            raise EncodeError(f"{self.spec!r}: expected a sequence, got {type(value).__name__}")
        if len(value) != self.length:
            raise EncodeError(
                f"{self.spec!r}: expected {self.length} elements, got {len(value)} elements"
            )
        return [self.element.check(item) for item in value]

    def write(self, cursor: EncodeCursor, value: Any) -> int:
        if self.size > cursor.remaining:
            return 0
        if self.is_text:
            return cursor.write(value)
        written = 0
        for item in value:
            written += self.element.write(cursor, item)
        return written

    def read(self, cursor: DecodeCursor) -> Tuple[Any, bool]:
        # Only elements that fit whole are read; the unread tail is zero-filled
        # and nothing further is consumed.
        available = min(self.length, cursor.remaining // self.element.size)  # type: ignore[operator]
        items = []
        for _ in range(available):
            item, _complete = self.element.read(cursor)
            items.append(item)
        complete = available == self.length
        if not complete:
            logger.debug(
                "Source exhausted in %r after %d of %d elements", self.spec, available, self.length
            )
            items.extend(self.element.zero() for _ in range(self.length - available))
        if self.is_text:
            return b"".join(items), complete
        return items, complete


class RecordCodec(Codec):
    """Raw image of a record: fields at their layout offsets, padding included.

    Padding bytes are written as zero and skipped on read. The layout follows
    C natural alignment, so it is only wire compatible with producers using the
    same layout.
    """

    strategy = Strategy.TRIVIAL_AGGREGATE

    def __init__(self, spec: type) -> None:
        super().__init__(spec)
        from .schema import RecordLayout

        self.layout = RecordLayout.from_model(spec)
        self.size = self.layout.size
        self.alignment = self.layout.alignment

    def zero(self) -> Any:
        return self.spec.model_construct(
            **{f.name: f.codec.zero() for f in self.layout.fields}
        )

    def check(self, value: Any) -> Any:
        if not isinstance(value, self.spec):
            raise EncodeError(
                f"{self.spec.__name__}: expected {self.spec.__name__}, got {type(value).__name__}"
            )
        for f in self.layout.fields:
            f.codec.check(getattr(value, f.name))
        return value

    def write(self, cursor: EncodeCursor, value: Any) -> int:
        if self.size > cursor.remaining:
            return 0
        start = cursor.position
        for f in self.layout.fields:
            cursor.write(bytes(f.offset - (cursor.position - start)))
            f.codec.write(cursor, f.codec.check(getattr(value, f.name)))
        cursor.write(bytes(self.size - (cursor.position - start)))
        return cursor.position - start

    def read(self, cursor: DecodeCursor) -> Tuple[Any, bool]:
        chunk = cursor.take(self.size)  # type: ignore[arg-type]
        if chunk is None:
            return self.zero(), False
        values: Dict[str, Any] = {}
        for f in self.layout.fields:
            field_cursor = DecodeCursor(chunk[f.offset : f.offset + f.size])
            values[f.name], _complete = f.codec.read(field_cursor)
        return self.spec.model_construct(**values), True


class CStringCodec(Codec):
    """Content bytes plus one zero terminator; encode only."""

    strategy = Strategy.CSTRING
    size = None
    alignment = 1

    def zero(self) -> Any:
        return b""

    def check(self, value: Any) -> bytes:
        return CString.check(value)

    def encoded_size(self, value: Any) -> int:
        return len(value) + 1

    def write(self, cursor: EncodeCursor, value: Any) -> int:
        return cursor.write(value + b"\x00")

    def read(self, cursor: DecodeCursor) -> Tuple[Any, bool]:
        raise UnsupportedTypeError(
            "CString is serialize-only; decode fixed text with Array(char, N)"
        )


_CODEC_TYPES = {
    Strategy.SCALAR: ScalarCodec,
    Strategy.ENUM: EnumCodec,
    Strategy.FIXED_ARRAY: ArrayCodec,
    Strategy.TRIVIAL_AGGREGATE: RecordCodec,
    Strategy.CSTRING: CStringCodec,
}

# Codecs of scalar and CString specs and of arrays built only from them
_codecs: Dict[Any, Codec] = {}

# Per-class cache attribute of enum and Record classes
CODECS_ATTR = "__lebin_codecs__"


def _cache_for(spec: Any, create: bool = False) -> Dict[Any, Codec]:
    """Return the cache that holds the codec of ``spec``.

    Specs rooted in an enum or Record class (the class itself or arrays of it)
    are cached on that class, so the codecs are released together with it.
    """
    root = spec
    while isinstance(root, ArrayType):
        root = root.element
    if not isinstance(root, type):
        return _codecs
    cache = vars(root).get(CODECS_ATTR)
    if cache is None:
        cache = {}
        if create:
            setattr(root, CODECS_ATTR, cache)
    return cache


def codec_for(spec: Any) -> Codec:
    """Return the (cached) codec of a type spec.

    The codec is built on first use. A record layout is therefore fixed from
    then on; changing ``lebin_packed`` afterwards has no effect.

    Raises:
        UnsupportedTypeError: If the spec matches no strategy
        SchemaError: If a record layout is invalid
    """
    try:
        return _cache_for(spec)[spec]
    except KeyError:
        pass
    except TypeError as err:
        raise UnsupportedTypeError(f"Unsupported type spec: {spec!r}") from err

    codec = _CODEC_TYPES[classify(spec)](spec)
    _cache_for(spec, create=True)[spec] = codec
    return codec


def typed(spec: Any, value: Any) -> Typed:
    """Bind a value to an explicit type spec.

    Scalar and array specs are callable for this (``uint16(7)``). Enum and
    Record classes are not, since calling them builds a member or an instance.
    ``typed`` also covers a raw int read back for an enum bit pattern with no
    member.

    Args:
        spec: Any type spec
        value: Value to check against it

    Returns:
        Typed value accepted by ``serialize``

    Raises:
        UnsupportedTypeError: If the spec matches no strategy
        EncodeError: If the value does not fit the spec

    Example:
        >>> mode = deserialize(b"\\x09").to(Mode)  # no member, raw int 9
        >>> serialize(typed(Mode, mode)).to_bytes()
        b'\\t'
    """
    return Typed(spec, codec_for(spec).check(value))


def spec_of(value: Any) -> Any:
    """Infer the type spec of a value passed to ``serialize``.

    Only unambiguous values are inferred: typed values, bool, float (float64),
    str/bytes (CString), IntEnum members and Record instances. A bare int has
    no width and is rejected.

    Raises:
        UnsupportedTypeError: If no spec can be inferred
    """
    if isinstance(value, Typed):
        return value.spec
    if isinstance(value, bool):
        return bool_
    if isinstance(value, enum.Enum):
        classify(type(value))
        return type(value)
    if _is_record(type(value)):
        return type(value)
    if isinstance(value, float):
        return float64
    if isinstance(value, (str, bytes, bytearray)):
        return CString
    if isinstance(value, int):
        raise UnsupportedTypeError(
            f"Bare int {value} has no width; wrap it in a scalar type such as int32({value})"
        )
    raise UnsupportedTypeError(f"Unsupported value type: {type(value).__name__}")


def bind(value: Any) -> Tuple[Codec, Any]:
    """Resolve the codec of a value and check the value against it.

    Returns:
        Tuple (codec, checked value)
    """
    if isinstance(value, Typed):
        return codec_for(value.spec), value.value
    codec = codec_for(spec_of(value))
    return codec, codec.check(value)

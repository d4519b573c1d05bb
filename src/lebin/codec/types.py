"""Type specs for the wire format.

Python values carry no static width, so every encodable value is described by
a *type spec*: one of the predefined scalar types below, an ``IntEnum``
subclass, an ``Array(element, length)``, a ``Record`` subclass or ``CString``.

Calling a spec builds a typed value that ``serialize`` accepts:

    >>> from lebin import serialize, uint16, int8, float32
    >>> buf = bytearray(7)
    >>> serialize(uint16(1234), int8(-5), float32(3.5)).to(buf)
    7

Enum and Record classes build members and instances when called, so use
``typed(spec, value)`` to bind an explicit enum value such as a raw int.
"""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Type, TypeVar

from ..exceptions import EncodeError, SchemaError, UnsupportedTypeError

E = TypeVar("E", bound=enum.Enum)

# Attribute set on IntEnum classes by @underlying
UNDERLYING_ATTR = "__lebin_underlying__"


@dataclass(frozen=True)
class Typed:
    """A value bound to the type spec it is encoded with.

    Attributes:
        spec: Type spec (ScalarType, ArrayType, CString, enum or Record class)
        value: Value already checked against the spec
    """

    spec: Any
    value: Any


@dataclass(frozen=True)
class ScalarType:
    """A fixed-width arithmetic type.

    Attributes:
        name: C-style name (``int32``, ``float64``, ...)
        fmt: ``struct`` format character
        kind: One of ``bool``, ``char``, ``int``, ``uint``, ``float``
    """

    name: str
    fmt: str
    kind: str
    codec: struct.Struct = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "codec", struct.Struct("<" + self.fmt))

    @property
    def size(self) -> int:
        return self.codec.size

    @property
    def is_integer(self) -> bool:
        return self.kind in ("int", "uint")

    @property
    def min_value(self) -> int | None:
        if self.kind == "uint":
            return 0
        if self.kind == "int":
            return -(1 << (self.size * 8 - 1))
        return None

    @property
    def max_value(self) -> int | None:
        if self.kind == "uint":
            return (1 << (self.size * 8)) - 1
        if self.kind == "int":
            return (1 << (self.size * 8 - 1)) - 1
        return None

    def zero(self) -> Any:
        """Return the zero value of this type."""
        if self.kind == "bool":
            return False
        if self.kind == "char":
            return b"\x00"
        if self.kind == "float":
            return 0.0
        return 0

    def check(self, value: Any) -> Any:
        """Validate ``value`` and return it in the form ``struct`` packs.

        Raises:
            EncodeError: If the value has the wrong type or is out of range
        """
        if self.kind == "bool":
            if not isinstance(value, bool):
                raise EncodeError(f"{self.name}: expected bool, got {type(value).__name__}")
            return value

        if self.kind == "char":
            if isinstance(value, str):
                value = value.encode("utf-8")
            if not isinstance(value, (bytes, bytearray)) or len(value) != 1:
                raise EncodeError(f"{self.name}: expected a single byte, got {value!r}")
            return bytes(value)

        if self.kind == "float":
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise EncodeError(f"{self.name}: expected float, got {type(value).__name__}")
            try:
                packed = self.codec.pack(value)
            except (OverflowError, struct.error) as err:
                raise EncodeError(f"{self.name}: value {value} out of range") from err
            # Rounded to the wire precision, so decoding gives the same float
            return self.codec.unpack(packed)[0]

        # Integers (enum members are ints too and pass through as their value)
        if isinstance(value, bool) or not isinstance(value, int):
            raise EncodeError(f"{self.name}: expected int, got {type(value).__name__}")
        value = int(value)
        if value < self.min_value or value > self.max_value:  # type: ignore[operator]
            raise EncodeError(
                f"{self.name}: value {value} out of bounds [{self.min_value}, {self.max_value}]"
            )
        return value

    def __call__(self, value: Any) -> Typed:
        return Typed(self, self.check(value))

    def __repr__(self) -> str:
        return self.name


bool_ = ScalarType("bool", "?", "bool")
char = ScalarType("char", "c", "char")
int8 = ScalarType("int8", "b", "int")
uint8 = ScalarType("uint8", "B", "uint")
int16 = ScalarType("int16", "h", "int")
uint16 = ScalarType("uint16", "H", "uint")
int32 = ScalarType("int32", "i", "int")
uint32 = ScalarType("uint32", "I", "uint")
int64 = ScalarType("int64", "q", "int")
uint64 = ScalarType("uint64", "Q", "uint")
float32 = ScalarType("float32", "f", "float")
float64 = ScalarType("float64", "d", "float")

SCALARS: Dict[str, ScalarType] = {
    s.name: s
    for s in (
        bool_, char, int8, uint8, int16, uint16, int32, uint32, int64, uint64, float32, float64
    )
}
# C spellings accepted by the CLI
SCALARS.update({"float": float32, "double": float64, "byte": uint8})


@dataclass(frozen=True)
class ArrayType:
    """A fixed-size homogeneous array of ``length`` elements.

    Use ``Array(element, length)`` to build one; it validates its arguments.
    """

    element: Any
    length: int

    def __call__(self, value: Any) -> Typed:
        from .strategy import typed

        return typed(self, value)

    def __repr__(self) -> str:
        return f"Array({spec_name(self.element)}, {self.length})"


def Array(element: Any, length: int) -> ArrayType:
    """Create a fixed-size array spec.

    Args:
        element: Element type spec (any spec except CString)
        length: Number of elements, must be > 0

    Raises:
        SchemaError: If length is not a positive integer
        UnsupportedTypeError: If element is CString or not a type spec

    Example:
        >>> samples = Array(int16, 8)
        >>> callsign = Array(char, 8)  # decodes to bytes
    """
    if isinstance(length, bool) or not isinstance(length, int) or length <= 0:
        raise SchemaError(f"Array length must be a positive integer, got {length!r}")
    if element is CString:
        raise UnsupportedTypeError(
            "Arrays of CString are not supported; use Array(char, N) for fixed text"
        )
    from .strategy import classify

    classify(element)
    return ArrayType(element, length)


class CStringType:
    """Null-terminated text: content bytes followed by a single zero byte.

    The only variable-length spec, and serialize-only: a null-terminated run
    has no known bound on the read side. Use ``Array(char, N)`` for text that
    has to round-trip.
    """

    name = "cstring"

    def check(self, value: Any) -> bytes:
        if isinstance(value, str):
            value = value.encode("utf-8")
        if not isinstance(value, (bytes, bytearray)):
            raise EncodeError(f"cstring: expected str or bytes, got {type(value).__name__}")
        if b"\x00" in value:
            raise EncodeError("cstring: content contains an embedded NUL byte")
        return bytes(value)

    def __call__(self, value: Any) -> Typed:
        return Typed(self, self.check(value))

    def __repr__(self) -> str:
        return "CString"


CString = CStringType()


def underlying(scalar: ScalarType) -> Callable[[Type[E]], Type[E]]:
    """Declare the underlying integer type of an ``IntEnum``.

    Enums without a declaration are encoded as ``int32``.

    Example:
        >>> @underlying(uint8)
        ... class Mode(enum.IntEnum):
        ...     IDLE = 0
        ...     RUN = 1
    """
    if not isinstance(scalar, ScalarType) or not scalar.is_integer:
        raise UnsupportedTypeError(f"Enum underlying type must be an integer scalar, got {scalar!r}")

    def decorate(enum_cls: Type[E]) -> Type[E]:
        if not (isinstance(enum_cls, type) and issubclass(enum_cls, enum.Enum)):
            raise UnsupportedTypeError(f"@underlying applies to enum classes, got {enum_cls!r}")
        for member in enum_cls:
            scalar.check(int(member.value))
        setattr(enum_cls, UNDERLYING_ATTR, scalar)
        return enum_cls

    return decorate


def underlying_of(enum_cls: type) -> ScalarType:
    """Return the declared underlying type of an enum (``int32`` by default)."""
    return getattr(enum_cls, UNDERLYING_ATTR, int32)


def spec_name(spec: Any) -> str:
    """Return a short, readable name for a type spec."""
    if isinstance(spec, type):
        return spec.__name__
    return repr(spec)

"""lebin: Little-Endian Binary codec

A Python library that turns a fixed sequence of typed values (scalars, enums,
fixed-size arrays, fixed-layout records and C-strings) into a contiguous
little-endian byte buffer supplied by the caller, and reads the same sequence
back.

Key Features:
- Fixed, predictable layout: no framing, no length prefixes, no tags
- Caller-owned buffers: encoding writes into your bytearray/memoryview
- Sizes computable from types alone (encoded_size_of)
- Pydantic-based records with C struct layout (natural alignment or packed)
- Lenient decoding (zero-fill on truncation) with an opt-in strict mode

Quick Start:
    >>> from lebin import serialize, deserialize, uint16, int8, float32
    >>>
    >>> buf = bytearray(16)
    >>> written = serialize(uint16(1234), int8(-5), float32(3.5)).to(buf)
    >>> written
    7
    >>> deserialize(buf, written).to(uint16, int8, float32)
    (1234, -5, 3.5)

The wire format is exactly the concatenation of each value's encoding, so the
reader must know the type sequence the writer used.
"""

from __future__ import annotations

import logging

from .codec import (
    DecodeResult,
    Deserializer,
    RecordLayout,
    Serializer,
    Strategy,
    classify,
    deserialize,
    serialize,
    typed,
)
from .codec.types import (
    Array,
    CString,
    bool_,
    char,
    float32,
    float64,
    int8,
    int16,
    int32,
    int64,
    uint8,
    uint16,
    uint32,
    uint64,
    underlying,
)
from .config import CodecConfig, configured, get_config, set_config
from .exceptions import (
    DecodeError,
    EncodeError,
    InsufficientCapacityError,
    InsufficientSourceError,
    InvalidBufferError,
    InvalidSourceError,
    LebinError,
    SchemaError,
    UnsupportedTypeError,
)
from .models import Record
from .utils import encoded_size, encoded_size_of, field_offsets, field_sizes

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core API
    "serialize",
    "deserialize",
    "Serializer",
    "Deserializer",
    "DecodeResult",
    "typed",
    # Type specs
    "bool_",
    "char",
    "int8",
    "uint8",
    "int16",
    "uint16",
    "int32",
    "uint32",
    "int64",
    "uint64",
    "float32",
    "float64",
    "Array",
    "CString",
    "underlying",
    "Record",
    # Classification
    "Strategy",
    "classify",
    "RecordLayout",
    # Configuration
    "CodecConfig",
    "configured",
    "get_config",
    "set_config",
    # Exceptions
    "LebinError",
    "SchemaError",
    "UnsupportedTypeError",
    "EncodeError",
    "InsufficientCapacityError",
    "InvalidBufferError",
    "DecodeError",
    "InvalidSourceError",
    "InsufficientSourceError",
    # Sizing
    "encoded_size",
    "encoded_size_of",
    "field_sizes",
    "field_offsets",
    # Version
    "__version__",
]

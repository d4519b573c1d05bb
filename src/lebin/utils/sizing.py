"""Encoded size calculation utilities.

This module provides functions to calculate encoded sizes from type specs
alone, without touching any buffer, so a destination can be sized before a
single byte is written.
"""

from __future__ import annotations

from typing import Any

from ..codec.schema import RecordLayout
from ..codec.strategy import bind, classify, codec_for
from ..codec.types import Typed
from ..exceptions import SchemaError, UnsupportedTypeError


def encoded_size_of(*specs: Any) -> int:
    """Calculate the encoded size of a sequence of type specs in bytes.

    The result is the sum of the individual sizes, in argument order, and does
    not depend on any runtime value.

    Args:
        *specs: One or more type specs

    Returns:
        Size in bytes

    Raises:
        ValueError: If no spec is given
        SchemaError: If a spec is CString (its size depends on content)
        UnsupportedTypeError: If a spec matches no strategy

    Example:
        >>> encoded_size_of(uint16, int8, float32)
        7
        >>> encoded_size_of(Array(int32, 4))
        16
    """
    if not specs:
        raise ValueError("encoded_size_of() requires at least one type")
    total = 0
    for spec in specs:
        size = codec_for(spec).size
        if size is None:
            raise SchemaError(
                f"{spec!r} has no static size; use encoded_size() on a value instead"
            )
        total += size
    return total


def encoded_size(value_or_spec: Any) -> int:
    """Calculate the encoded size of a single value or spec in bytes.

    Values are sized the way serialize() sizes them, so C-strings are probed
    (content length + 1).

    Example:
        >>> encoded_size(CString("abc"))
        4
        >>> encoded_size(int64)
        8
    """
    if isinstance(value_or_spec, Typed) or not _is_spec(value_or_spec):
        codec, value = bind(value_or_spec)
        return codec.encoded_size(value)
    return encoded_size_of(value_or_spec)


def field_sizes(record: Any) -> dict[str, int]:
    """Get the size in bytes of each field of a record.

    Args:
        record: Record class or instance

    Returns:
        Dictionary mapping field names to their size in bytes

    Example:
        >>> field_sizes(Position)
        {'vehicle_id': 1, 'depth_cm': 4, 'heading': 4}
    """
    return {f.name: f.size for f in _layout(record).fields}


def field_offsets(record: Any) -> dict[str, int]:
    """Get the byte offset of each field of a record.

    Example:
        >>> field_offsets(Position)
        {'vehicle_id': 0, 'depth_cm': 4, 'heading': 8}
    """
    return {f.name: f.offset for f in _layout(record).fields}


def _layout(record: Any) -> RecordLayout:
    record_class = record if isinstance(record, type) else type(record)
    return RecordLayout.from_model(record_class)


def _is_spec(obj: Any) -> bool:
    try:
        classify(obj)
    except UnsupportedTypeError:
        return False
    return True

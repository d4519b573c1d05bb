"""Record layout introspection.

This module analyzes ``Record`` models and computes their in-memory layout:
field order, offsets, natural alignment and padding. The layout is the wire
format of a record, so two sides exchanging records must agree on it.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, List, Optional, Type

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ..exceptions import SchemaError, UnsupportedTypeError
from .types import ArrayType, CStringType, ScalarType, bool_, float64


def _align(offset: int, alignment: int) -> int:
    return (offset + alignment - 1) // alignment * alignment


@dataclass(frozen=True)
class FieldLayout:
    """Layout of a single record field.

    Attributes:
        name: Field name
        spec: Type spec the field is encoded with
        codec: Codec of the spec
        offset: Byte offset from the start of the record
        size: Encoded size in bytes
        padding: Padding bytes inserted before this field
    """

    name: str
    spec: Any
    codec: Any
    offset: int
    size: int
    padding: int


class RecordLayout:
    """Layout of an entire record.

    Fields are placed in declaration order, each at the next offset that is a
    multiple of its alignment, and the total size is rounded up to the
    record's alignment (the largest field alignment). Records declaring
    ``lebin_packed = True`` use alignment 1 everywhere.

    Example:
        >>> layout = RecordLayout.from_model(Position)
        >>> for field in layout.fields:
        ...     print(f"{field.name}: {field.size} bytes at {field.offset}")
    """

    def __init__(self, model_class: Type[BaseModel]) -> None:
        """Initialize layout from a Record model.

        Args:
            model_class: Record class to introspect
        """
        self.model_class = model_class
        self.packed = bool(getattr(model_class, "lebin_packed", False))
        self.fields: List[FieldLayout] = []
        self.size = 0
        self.alignment = 1
        self._introspect()

    @classmethod
    def from_model(cls, model_class: Type[BaseModel]) -> RecordLayout:
        """Create a layout from a Record model.

        Args:
            model_class: Record class

        Returns:
            RecordLayout instance
        """
        return cls(model_class)

    def _introspect(self) -> None:
        """Introspect the model and place its fields."""
        from .strategy import Strategy, codec_for

        model_fields = self.model_class.model_fields
        if not model_fields:
            raise SchemaError(f"Record {self.model_class.__name__} has no fields")

        offset = 0
        for name, field_info in model_fields.items():
            spec = self._extract_spec(name, field_info)
            if spec is self.model_class:
                raise SchemaError(f"Field {name}: record {self.model_class.__name__} contains itself")
            codec = codec_for(spec)
            if codec.strategy is Strategy.CSTRING:
                raise UnsupportedTypeError(
                    f"Field {name}: CString has no fixed size; use Array(char, N)"
                )
            alignment = 1 if self.packed else codec.alignment
            start = _align(offset, alignment)
            self.fields.append(
                FieldLayout(
                    name=name,
                    spec=spec,
                    codec=codec,
                    offset=start,
                    size=codec.size,
                    padding=start - offset,
                )
            )
            offset = start + codec.size
            self.alignment = max(self.alignment, alignment)

        self.size = _align(offset, self.alignment)

    def _extract_spec(self, name: str, field_info: FieldInfo) -> Any:
        """Find the type spec of a field.

        The spec is taken from ``Annotated`` metadata first (``Annotated[int,
        int16]``); IntEnum and Record annotations are their own spec, and plain
        ``bool``/``float`` map to ``bool_``/``float64``.
        """
        from .strategy import classify

        for item in field_info.metadata:
            if isinstance(item, (ScalarType, ArrayType, CStringType)):
                return item

        annotation = field_info.annotation
        if annotation is None:
            raise SchemaError(f"Field {name} has no type annotation")
        if annotation is bool:
            return bool_
        if annotation is float:
            return float64
        if isinstance(annotation, type) and issubclass(annotation, (enum.Enum, BaseModel)):
            classify(annotation)
            return annotation

        raise UnsupportedTypeError(
            f"Field {name}: cannot derive a wire type from {annotation!r}. "
            f"Annotate it, e.g. Annotated[int, int32]."
        )

    @property
    def padding(self) -> int:
        """Total padding bytes, including trailing padding."""
        return self.size - sum(f.size for f in self.fields)

    def field(self, name: str) -> Optional[FieldLayout]:
        for f in self.fields:
            if f.name == name:
                return f
        return None

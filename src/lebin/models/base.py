"""Record base class and lebin-specific Pydantic configuration.

This module provides the Record class that all trivially-copyable aggregates
should inherit from.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, model_validator


class Record(BaseModel):
    """Base class for fixed-layout records.

    A record is encoded as its raw in-memory image: every field at its
    C-aligned offset, padding bytes included. Fields are annotated with their
    wire type using ``typing.Annotated``; enum and record fields use the class
    itself.

    Example:
        >>> from typing import Annotated, ClassVar
        >>> class Position(Record):
        ...     vehicle_id: Annotated[int, uint8]
        ...     depth_cm: Annotated[int, int32]
        ...     heading: Annotated[float, float32]
        ...
        ...     lebin_packed: ClassVar[bool] = False

    With natural alignment ``Position`` takes 12 bytes (3 padding bytes after
    ``vehicle_id``); with ``lebin_packed = True`` it takes 9.

    Attributes:
        lebin_packed: Lay fields out without padding (like ``#pragma pack(1)``).
            Set it in the class body: the layout is fixed on first use.
    """

    model_config = ConfigDict(
        # Coerce compatible inputs, e.g. an int for a float field
        strict=False,
        # Re-run the wire checks when a field is assigned
        validate_assignment=True,
        # Every declared field is part of the layout
        extra="forbid",
    )

    lebin_packed: ClassVar[bool] = False

    @model_validator(mode="after")
    def _check_wire_ranges(self) -> Record:
        """Reject values that do not fit their wire types.

        Accepted values are stored in their wire form: float32 fields hold the
        nearest float32, char arrays are NUL-padded and enum fields hold
        members. A record therefore compares equal to its decoded copy.
        """
        from ..codec.strategy import codec_for

        for f in codec_for(type(self)).layout.fields:
            # Direct write, assignment validation would re-enter this validator
            self.__dict__[f.name] = f.codec.check(getattr(self, f.name))
        return self

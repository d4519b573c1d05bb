#!/usr/bin/env python3
"""Fixed-layout records.

Run ``lebin --analyze examples/records.py`` to print the layouts below.
"""

from __future__ import annotations

import enum
from typing import Annotated, ClassVar

from lebin import Array, Record, char, deserialize, float32, int32, serialize, uint8, underlying


@underlying(uint8)
class Mode(enum.IntEnum):
    """Vehicle mode, one byte on the wire."""

    IDLE = 0
    TRANSIT = 1
    SURVEY = 2


class Position(Record):
    """Naturally aligned: 3 padding bytes after ``vehicle_id``."""

    vehicle_id: Annotated[int, uint8]
    depth_cm: Annotated[int, int32]
    heading: Annotated[float, float32]


class PackedPosition(Record):
    """The same fields without padding."""

    vehicle_id: Annotated[int, uint8]
    depth_cm: Annotated[int, int32]
    heading: Annotated[float, float32]

    lebin_packed: ClassVar[bool] = True


class Status(Record):
    """Nested record, enum and text fields."""

    callsign: Annotated[bytes, Array(char, 6)]
    mode: Mode
    position: Position


def main() -> None:
    status = Status(
        callsign=b"AUV01",
        mode=Mode.SURVEY,
        position=Position(vehicle_id=7, depth_cm=1500, heading=90.0),
    )
    data = serialize(status).to_bytes()
    print(f"{len(data)} bytes: {data.hex(' ')}")
    print(deserialize(data).to(Status))


if __name__ == "__main__":
    main()

"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Iterator

import pytest
from sample_records import Mode, Position, Status

from lebin import set_config


@pytest.fixture
def scenario_bytes() -> bytes:
    """Encoding of (uint16(1234), int8(-5), float32(3.5))."""
    return bytes([0xD2, 0x04, 0xFB, 0x00, 0x00, 0x60, 0x40])


@pytest.fixture
def position() -> Position:
    """Sample naturally aligned record."""
    return Position(vehicle_id=7, depth_cm=1500, heading=90.0)


@pytest.fixture
def status(position: Position) -> Status:
    """Sample nested record."""
    return Status(callsign=b"AUV-01", mode=Mode.SURVEY, samples=[1, -2, 300], position=position)


@pytest.fixture(autouse=True)
def default_config() -> Iterator[None]:
    """Restore the process-wide codec configuration after each test."""
    previous = set_config()
    yield
    set_config(previous)

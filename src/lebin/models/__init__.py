"""Pydantic record modeling for lebin.

This module provides the Record class used to define trivially-copyable
aggregates with a fixed binary layout.
"""

from __future__ import annotations

from .base import Record

__all__ = [
    "Record",
]

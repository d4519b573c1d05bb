"""Utility functions for lebin.

This module provides size calculation utilities.
"""

from __future__ import annotations

from .sizing import encoded_size, encoded_size_of, field_offsets, field_sizes

__all__ = [
    "encoded_size",
    "encoded_size_of",
    "field_offsets",
    "field_sizes",
]

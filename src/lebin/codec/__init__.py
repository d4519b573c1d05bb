"""Little-endian binary codec for lebin.

This module provides the type specs, the per-strategy codecs and the
serialize/deserialize entry points.
"""

from __future__ import annotations

from .decoder import DecodeResult, Deserializer, deserialize
from .encoder import Serializer, serialize
from .schema import FieldLayout, RecordLayout
from .strategy import Strategy, classify, codec_for, typed

__all__ = [
    "serialize",
    "deserialize",
    "Serializer",
    "Deserializer",
    "DecodeResult",
    "Strategy",
    "classify",
    "codec_for",
    "typed",
    "RecordLayout",
    "FieldLayout",
]

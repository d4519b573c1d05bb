#!/usr/bin/env python3
"""Basic usage example for lebin.

This example demonstrates:
1. Sizing a type sequence before encoding
2. Encoding typed values into a caller-owned buffer
3. Decoding the same sequence back
4. What happens with a buffer that is too small or data that is truncated
"""

from __future__ import annotations

from lebin import (
    Array,
    CString,
    deserialize,
    encoded_size_of,
    float32,
    int8,
    int32,
    serialize,
    uint16,
)


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("lebin Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Sizing (uint16, int8, float32)...")
    needed = encoded_size_of(uint16, int8, float32)
    print(f"   {needed} bytes")
    print()

    print("2. Encoding into a 16-byte buffer...")
    buffer = bytearray(16)
    written = serialize(uint16(1234), int8(-5), float32(3.5)).to(buffer)
    print(f"   Wrote {written} bytes: {buffer[:written].hex(' ')}")
    print()

    print("3. Decoding...")
    value, offset, gain = deserialize(buffer, written).to(uint16, int8, float32)
    print(f"   {value}, {offset}, {gain}")
    print()

    print("4. Too-small buffer and truncated data...")
    small = bytearray(needed - 1)
    print(f"   Into {len(small)} bytes: wrote {serialize(uint16(1), int8(2), float32(3.0)).to(small)}")

    samples = serialize(Array(int32, 4)([10, 20, 30, 40])).to_bytes()
    reader = deserialize(samples, 10)
    result = reader.try_to(Array(int32, 4))
    print(f"   int32[4] from 10 bytes: {result.values} (truncated={result.truncated})")
    print(f"   {reader.remaining} bytes left unread")
    print()

    print("5. C-strings are encode-only...")
    text = serialize(CString("sonar"), uint16(7)).to_bytes()
    print(f"   {text!r}")


if __name__ == "__main__":
    main()

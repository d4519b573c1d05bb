"""Unit tests for serialize/deserialize."""

from __future__ import annotations

import pytest
from sample_records import Mode, Priority

from lebin import (
    Array,
    CodecConfig,
    CString,
    InsufficientCapacityError,
    InsufficientSourceError,
    InvalidBufferError,
    InvalidSourceError,
    UnsupportedTypeError,
    bool_,
    char,
    deserialize,
    float32,
    float64,
    int8,
    int16,
    int32,
    int64,
    serialize,
    uint8,
    uint16,
    uint32,
    uint64,
)


class TestEncode:
    """Test basic encoding."""

    def test_scenario(self, scenario_bytes: bytes) -> None:
        """Test the reference mixed-type encoding."""
        buf = bytearray(16)
        written = serialize(uint16(1234), int8(-5), float32(3.5)).to(buf)

        assert written == 7
        assert bytes(buf[:7]) == scenario_bytes

    def test_little_endian(self) -> None:
        """Test multi-byte values are least-significant byte first."""
        data = serialize(
            uint32(0x01020304), int16(-2), uint64(0x0102030405060708)
        ).to_bytes()

        assert data == (
            b"\x04\x03\x02\x01" + b"\xfe\xff" + b"\x08\x07\x06\x05\x04\x03\x02\x01"
        )

    def test_bare_values(self) -> None:
        """Test unambiguous bare values are inferred."""
        data = serialize(True, 1.0, "hi", Mode.TRANSIT).to_bytes()

        assert data == b"\x01" + b"\x00\x00\x00\x00\x00\x00\xf0\x3f" + b"hi\x00" + b"\x01"

    def test_enum_underlying(self) -> None:
        """Test enums write only their underlying bit pattern."""
        assert serialize(Mode.SURVEY).to_bytes() == b"\x02"
        assert serialize(Priority.HIGH).to_bytes() == b"\x03\x00\x00\x00"

    def test_array(self) -> None:
        """Test arrays are index-ascending with no length prefix."""
        data = serialize(Array(int16, 3)([1, -1, 258])).to_bytes()

        assert data == b"\x01\x00\xff\xff\x02\x01"

    def test_char_array(self) -> None:
        """Test char arrays write their bytes, NUL-padded."""
        assert serialize(Array(char, 4)("ab")).to_bytes() == b"ab\x00\x00"

    def test_cstring(self) -> None:
        """Test C-strings write content plus one terminator."""
        serializer = serialize(CString("sonar"), uint8(9))

        assert serializer.size() == 7
        assert serializer.to_bytes() == b"sonar\x00\x09"

    def test_empty_cstring(self) -> None:
        """Test the empty C-string is a lone terminator."""
        assert serialize(CString("")).to_bytes() == b"\x00"

    def test_len(self) -> None:
        """Test a serializer knows how many values it holds."""
        assert len(serialize(uint8(1), uint8(2))) == 2

    def test_reusable(self, scenario_bytes: bytes) -> None:
        """Test the same serializer writes the same bytes every time."""
        serializer = serialize(uint16(1234), int8(-5), float32(3.5))
        first, second = bytearray(7), bytearray(7)

        assert serializer.to(first) == serializer.to(second) == 7
        assert first == second == scenario_bytes


class TestEncodeErrors:
    """Test encoding error handling."""

    def test_no_values(self) -> None:
        """Test at least one value is required."""
        with pytest.raises(ValueError, match="at least one"):
            serialize()

    def test_bare_int(self) -> None:
        """Test bare ints are rejected at construction."""
        with pytest.raises(UnsupportedTypeError):
            serialize(uint8(1), 5)

    def test_unsupported_value(self) -> None:
        """Test dynamic collections are rejected at construction."""
        with pytest.raises(UnsupportedTypeError):
            serialize([1, 2, 3])

    def test_read_only_destination(self) -> None:
        """Test read-only destinations are rejected."""
        with pytest.raises(InvalidBufferError):
            serialize(uint8(1)).to(b"\x00")


class TestCapacity:
    """Test destination capacity handling."""

    def test_exact_capacity(self, scenario_bytes: bytes) -> None:
        """Test a buffer of exactly the needed size succeeds."""
        buf = bytearray(7)
        assert serialize(uint16(1234), int8(-5), float32(3.5)).to(buf) == 7
        assert buf == scenario_bytes

    def test_one_short(self) -> None:
        """Test one byte short reports 0 and writes nothing."""
        buf = bytearray(b"\xaa" * 6)
        assert serialize(uint16(1234), int8(-5), float32(3.5)).to(buf) == 0
        assert buf == b"\xaa" * 6

    def test_capacity_argument(self) -> None:
        """Test an explicit capacity limits a larger buffer."""
        buf = bytearray(b"\xaa" * 16)
        assert serialize(uint16(1234), int8(-5), float32(3.5)).to(buf, 6) == 0
        assert buf == b"\xaa" * 16

    def test_tail_untouched(self) -> None:
        """Test bytes past the written region are not zeroed."""
        buf = bytearray(b"\xaa" * 10)
        assert serialize(uint16(1), uint8(2)).to(buf) == 3
        assert buf[3:] == b"\xaa" * 7

    def test_cstring_probed(self) -> None:
        """Test C-string length is probed before writing."""
        buf = bytearray(b"\xaa" * 5)
        assert serialize(CString("hello")).to(buf) == 0
        assert buf == b"\xaa" * 5

    def test_strict_raises(self) -> None:
        """Test strict mode raises instead of reporting 0."""
        with pytest.raises(InsufficientCapacityError) as exc_info:
            serialize(uint32(1), config=CodecConfig(strict=True)).to(bytearray(3))

        assert exc_info.value.needed == 4
        assert exc_info.value.capacity == 3

    def test_without_precheck(self) -> None:
        """Test the degraded policy writes whole values, then reports 0."""
        buf = bytearray(b"\xaa" * 6)
        config = CodecConfig(precheck=False)
        written = serialize(uint16(1234), int8(-5), float32(3.5), config=config).to(buf)

        assert written == 0
        # Whole values before the overflow stay, no partial float
        assert buf == b"\xd2\x04\xfb\xaa\xaa\xaa"

    def test_without_precheck_fits(self, scenario_bytes: bytes) -> None:
        """Test the degraded policy matches the normal one when data fits."""
        buf = bytearray(7)
        config = CodecConfig(precheck=False)

        assert serialize(uint16(1234), int8(-5), float32(3.5), config=config).to(buf) == 7
        assert buf == scenario_bytes


class TestDecode:
    """Test basic decoding."""

    def test_scenario(self, scenario_bytes: bytes) -> None:
        """Test the reference mixed-type decoding."""
        assert deserialize(scenario_bytes).to(uint16, int8, float32) == (1234, -5, 3.5)

    def test_single_value(self) -> None:
        """Test a single spec returns the bare value."""
        assert deserialize(b"\x2a\x00\x00\x00").to(int32) == 42

    def test_multiple_calls(self, scenario_bytes: bytes) -> None:
        """Test consecutive calls continue where the last one stopped."""
        reader = deserialize(scenario_bytes)

        assert reader.to(uint16) == 1234
        assert reader.to(int8, float32) == (-5, 3.5)
        assert reader.exhausted

    def test_enum(self) -> None:
        """Test enums decode to members."""
        assert deserialize(b"\x01\x02\x00\x00\x00").to(Mode, Priority) == (
            Mode.TRANSIT,
            Priority.MEDIUM,
        )

    def test_enum_unknown_value(self) -> None:
        """Test bit patterns without a member decode to the raw int."""
        assert deserialize(b"\x07").to(Mode) == 7

    def test_array(self) -> None:
        """Test arrays decode to lists."""
        data = b"\x2a\x00\x00\x00\xd6\xff\xff\xff\xe8\x03\x00\x00\x02\x01"

        assert deserialize(data).to(Array(int32, 3), Array(int16, 1)) == ([42, -42, 1000], [258])

    def test_char_array(self) -> None:
        """Test char arrays decode to bytes."""
        assert deserialize(b"abc\x00").to(Array(char, 4)) == b"abc\x00"

    def test_bool_and_char(self) -> None:
        """Test one-byte scalars."""
        assert deserialize(b"X\x01\x00").to(char, bool_, bool_) == (b"X", True, False)

    def test_length_argument(self, scenario_bytes: bytes) -> None:
        """Test an explicit length limits the readable region."""
        reader = deserialize(scenario_bytes, 3)

        assert reader.to(uint16, int8) == (1234, -5)
        assert reader.exhausted

    def test_memoryview_source(self, scenario_bytes: bytes) -> None:
        """Test any bytes-like source is accepted."""
        assert deserialize(memoryview(scenario_bytes)).to(uint16) == 1234

    def test_invalid_source(self) -> None:
        """Test a missing source is a precondition violation."""
        with pytest.raises(InvalidSourceError):
            deserialize(None)

    def test_no_specs(self) -> None:
        """Test at least one type is required."""
        with pytest.raises(ValueError, match="at least one"):
            deserialize(b"\x00").to()

    def test_cstring_not_decodable(self) -> None:
        """Test C-strings are serialize-only."""
        with pytest.raises(UnsupportedTypeError, match="serialize-only"):
            deserialize(b"abc\x00").to(CString)

    def test_unsupported_spec(self) -> None:
        """Test unsupported specs are rejected before reading."""
        reader = deserialize(b"\x00\x00\x00\x00")
        with pytest.raises(UnsupportedTypeError):
            reader.to(int)
        assert reader.remaining == 4


class TestDegradePolicy:
    """Test decoding from insufficient data."""

    def test_scalar_short(self) -> None:
        """Test a scalar that does not fit decodes to zero and consumes nothing."""
        reader = deserialize(b"\x01\x02")

        assert reader.to(int32) == 0
        assert reader.remaining == 2
        assert reader.truncated

    def test_scalar_then_smaller(self) -> None:
        """Test a later smaller value still reads the unconsumed bytes."""
        reader = deserialize(b"\x01\x02")

        assert reader.to(int32, uint16) == (0, 0x0201)
        assert reader.exhausted

    def test_array_partial(self) -> None:
        """Test int32[4] from 10 bytes: 2 elements, 2 zeros, 8 bytes consumed."""
        data = serialize(Array(int32, 4)([11, -22, 33, 44])).to_bytes()
        reader = deserialize(data, 10)

        assert reader.to(Array(int32, 4)) == [11, -22, 0, 0]
        assert reader.remaining == 2

    def test_char_array_partial(self) -> None:
        """Test char arrays zero-pad their tail."""
        assert deserialize(b"ab").to(Array(char, 4)) == b"ab\x00\x00"

    def test_float_zero(self) -> None:
        """Test floats degrade to 0.0."""
        assert deserialize(b"\x00").to(float64) == 0.0

    def test_enum_zero(self) -> None:
        """Test enums degrade to their zero bit pattern."""
        assert deserialize(b"").to(Mode) is Mode.IDLE
        assert deserialize(b"").to(Priority) == 0

    def test_exhausted_reads(self) -> None:
        """Test an exhausted reader keeps returning zero values."""
        reader = deserialize(b"\x05")
        assert reader.to(uint8) == 5
        assert reader.exhausted
        assert reader.to(uint8, int64, bool_) == (0, 0, False)

    def test_not_truncated(self, scenario_bytes: bytes) -> None:
        """Test complete reads do not set the truncated flag."""
        reader = deserialize(scenario_bytes)
        reader.to(uint16, int8, float32)
        assert not reader.truncated


class TestStrictDecode:
    """Test strict decoding."""

    def test_scalar_short(self) -> None:
        """Test strict mode raises instead of zero-filling."""
        reader = deserialize(b"\x01\x02", strict=True)

        with pytest.raises(InsufficientSourceError) as exc_info:
            reader.to(int32)

        assert exc_info.value.needed == 4
        assert exc_info.value.remaining == 2
        assert reader.remaining == 2

    def test_array_short(self) -> None:
        """Test strict mode rejects partial arrays without consuming."""
        reader = deserialize(b"\x00" * 10, config=CodecConfig(strict=True))

        with pytest.raises(InsufficientSourceError):
            reader.to(Array(int32, 4))
        assert reader.remaining == 10

    def test_strict_flag_overrides_config(self) -> None:
        """Test the strict argument wins over the config."""
        reader = deserialize(b"", strict=False, config=CodecConfig(strict=True))
        assert reader.to(uint8) == 0


class TestTryTo:
    """Test the status-carrying decode variant."""

    def test_complete(self) -> None:
        """Test a literal zero is reported as not truncated."""
        result = deserialize(b"\x00\x00\x00\x00").try_to(int32)

        assert result.values == 0
        assert result.truncated is False

    def test_truncated(self) -> None:
        """Test a zero-filled result is reported as truncated."""
        result = deserialize(b"\x00\x00").try_to(int32)

        assert result.values == 0
        assert result.truncated is True

    def test_per_call(self) -> None:
        """Test the flag covers only the current call."""
        reader = deserialize(b"\x01")
        assert reader.try_to(uint16).truncated
        assert not reader.try_to(uint8).truncated
        assert reader.truncated

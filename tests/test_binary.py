"""Tests for the little-endian byte primitives."""

import struct

import pytest

from wavecodec.binary import ByteReader, ByteWriter
from wavecodec.errors import TagMismatch, UnexpectedEndOfInput


class TestByteReader:
    """Tests for ByteReader."""

    def test_reads_unsigned_little_endian(self):
        reader = ByteReader(b"\x01\x02\x01\x78\x56\x34\x12")
        assert reader.read_u8() == 1
        assert reader.read_u16() == 0x0102
        assert reader.read_u32() == 0x12345678
        assert reader.at_end

    def test_reads_signed_values(self):
        reader = ByteReader(b"\xff\xfe\xff\x00\x00\x00\x80")
        assert reader.read_s8() == -1
        assert reader.read_s16() == -2
        assert reader.read_s32() == -(2 ** 31)

    def test_read_sample_by_width(self):
        reader = ByteReader(b"\x80" + b"\xff\x7f" + b"\x01\x00\x00\x00")
        assert reader.read_sample(8) == -128
        assert reader.read_sample(16) == 32767
        assert reader.read_sample(32) == 1

    def test_position_and_remaining(self):
        reader = ByteReader(b"abcdef")
        reader.read_bytes(2)
        assert reader.position == 2
        assert reader.remaining == 4
        assert len(reader) == 6

    def test_read_past_end_fails(self):
        reader = ByteReader(b"\x01\x02\x03")
        with pytest.raises(UnexpectedEndOfInput) as exc:
            reader.read_u32()
        assert exc.value.offset == 0
        assert exc.value.needed == 4
        assert exc.value.available == 3
        assert reader.position == 0

    def test_expect_tag_consumes_on_match(self):
        reader = ByteReader(b"RIFFrest")
        assert reader.expect_tag(b"RIFF") == b"RIFF"
        assert reader.position == 4

    def test_expect_tag_mismatch_does_not_advance(self):
        reader = ByteReader(b"RIFXrest")
        with pytest.raises(TagMismatch) as exc:
            reader.expect_tag(b"RIFF")
        assert exc.value.expected == b"RIFF"
        assert exc.value.actual == b"RIFX"
        assert exc.value.offset == 0
        assert reader.position == 0

    def test_expect_tag_on_short_prefix_is_end_of_input(self):
        reader = ByteReader(b"RI")
        with pytest.raises(UnexpectedEndOfInput):
            reader.expect_tag(b"RIFF")

    def test_expect_tag_on_short_garbage_is_mismatch(self):
        reader = ByteReader(b"XY")
        with pytest.raises(TagMismatch):
            reader.expect_tag(b"RIFF")


class TestByteWriter:
    """Tests for ByteWriter."""

    def test_writes_little_endian(self):
        writer = ByteWriter()
        writer.write_tag(b"data")
        writer.write_u8(1)
        writer.write_u16(0x0102)
        writer.write_u32(0x12345678)
        assert writer.getvalue() == b"data\x01\x02\x01\x78\x56\x34\x12"
        assert len(writer) == 11

    def test_writes_signed_and_samples(self):
        writer = ByteWriter()
        writer.write_s8(-1)
        writer.write_s16(-2)
        writer.write_s32(-3)
        writer.write_sample(16, 16383)
        assert writer.getvalue() == (
            b"\xff" + b"\xfe\xff" + b"\xfd\xff\xff\xff" + b"\xff\x3f"
        )

    def test_patch_u32(self):
        writer = ByteWriter()
        writer.write_tag(b"fmt ")
        writer.write_u32(0)
        writer.write_bytes(b"\x00" * 16)
        writer.patch_u32(4, len(writer) - 8)
        assert ByteReader(writer.getvalue()[4:8]).read_u32() == 16

    def test_out_of_range_sample_is_rejected(self):
        writer = ByteWriter()
        with pytest.raises(struct.error):
            writer.write_sample(8, 200)

"""Tests for the WAVE decoder stages and orchestrator."""

import pytest

from wavecodec.binary import ByteReader
from wavecodec.errors import (
    InvalidBlockAlign,
    InvalidByteRate,
    InvalidChunkSize,
    InvalidFileSize,
    MisalignedDataChunk,
    TagMismatch,
    TrailingBytes,
    UnexpectedEndOfInput,
    UnsupportedAudioFormat,
    UnsupportedBitDepth,
    WaveError,
)
from wavecodec.wav import (
    decode_wave,
    read_data_chunk,
    read_fmt_chunk,
    read_riff_header,
)


class TestRiffHeader:
    """Tests for read_riff_header."""

    def test_reads_header(self, make_raw_wave):
        buffer = make_raw_wave()
        reader = ByteReader(buffer)
        header = read_riff_header(reader, len(buffer))
        assert header.magic == b"RIFF"
        assert header.format == b"WAVE"
        assert header.file_size == len(buffer) - 8
        assert reader.position == 12

    def test_bad_magic_consumes_nothing(self, make_raw_wave):
        reader = ByteReader(make_raw_wave(riff=b"RIFX"))
        with pytest.raises(TagMismatch) as exc:
            read_riff_header(reader, len(reader))
        assert exc.value.expected == b"RIFF"
        assert exc.value.actual == b"RIFX"
        assert reader.position == 0

    @pytest.mark.parametrize("delta", [-1, 1])
    def test_file_size_off_by_one(self, make_raw_wave, delta):
        good = make_raw_wave()
        buffer = make_raw_wave(file_size=len(good) - 8 + delta)
        with pytest.raises(InvalidFileSize) as exc:
            decode_wave(buffer)
        assert exc.value.declared == len(good) - 8 + delta
        assert exc.value.expected == len(good) - 8

    def test_bad_form_type(self, make_raw_wave):
        buffer = bytearray(make_raw_wave())
        buffer[8:12] = b"AVI "
        with pytest.raises(TagMismatch) as exc:
            decode_wave(bytes(buffer))
        assert exc.value.expected == b"WAVE"
        assert exc.value.offset == 8


class TestFmtChunk:
    """Tests for read_fmt_chunk."""

    def test_reads_fields_in_wire_order(self, make_raw_wave):
        reader = ByteReader(make_raw_wave(num_channels=2, sample_rate=22050, bits_per_sample=8,
                                          samples=(1, 2)))
        reader.read_bytes(12)
        fmt = read_fmt_chunk(reader)
        assert fmt.id == b"fmt "
        assert fmt.chunk_size == 16
        assert fmt.audio_format == 1
        assert fmt.num_channels == 2
        assert fmt.sample_rate == 22050
        assert fmt.byte_rate == 44100
        assert fmt.block_align == 2
        assert fmt.bits_per_sample == 8
        assert reader.position == 36

    def test_invalid_byte_rate(self, make_raw_wave):
        with pytest.raises(InvalidByteRate) as exc:
            decode_wave(make_raw_wave(byte_rate=1234))
        assert exc.value.declared == 1234
        assert exc.value.expected == 16000

    def test_invalid_block_align(self, make_raw_wave):
        with pytest.raises(InvalidBlockAlign) as exc:
            decode_wave(make_raw_wave(block_align=4))
        assert exc.value.declared == 4
        assert exc.value.expected == 2

    def test_non_pcm_format(self, make_raw_wave):
        with pytest.raises(UnsupportedAudioFormat) as exc:
            decode_wave(make_raw_wave(audio_format=3))
        assert exc.value.value == 3

    def test_extended_fmt_chunk_rejected(self, make_raw_wave):
        with pytest.raises(InvalidChunkSize) as exc:
            decode_wave(make_raw_wave(chunk_size=18))
        assert exc.value.declared == 18
        assert exc.value.expected == 16


class TestDataChunk:
    """Tests for read_data_chunk."""

    def test_deinterleaves_frames(self):
        # Two channels, 16-bit: frames (1, -1), (2, -2), (3, -3)
        payload = b"".join(
            s.to_bytes(2, "little", signed=True) for s in (1, -1, 2, -2, 3, -3)
        )
        reader = ByteReader(b"data" + len(payload).to_bytes(4, "little") + payload)
        chunk = read_data_chunk(reader, num_channels=2, bits_per_sample=16)
        assert chunk.id == b"data"
        assert chunk.size == 12
        assert chunk.channel_data == ((1, 2, 3), (-1, -2, -3))
        assert reader.at_end

    @pytest.mark.parametrize("bits,samples", [
        (8, (-128, 0, 127)),
        (16, (-32768, 0, 32767)),
        (32, (-(2 ** 31), 0, 2 ** 31 - 1)),
    ])
    def test_sample_widths(self, make_raw_wave, bits, samples):
        wave = decode_wave(make_raw_wave(samples=samples, bits_per_sample=bits))
        assert wave.data.channel_data == (samples,)
        assert wave.data.size == len(samples) * bits // 8

    def test_unsupported_bit_depth(self, make_raw_wave):
        # 24-bit with consistent derived fields reaches the data stage
        buffer = make_raw_wave(bits_per_sample=24, samples=(1, 2))
        with pytest.raises(UnsupportedBitDepth) as exc:
            decode_wave(buffer)
        assert exc.value.value == 24

    def test_truncated_payload(self, make_raw_wave):
        buffer = make_raw_wave(samples=(1, 2, 3, 4), data_size=16)
        with pytest.raises(UnexpectedEndOfInput):
            decode_wave(buffer)

    def test_misaligned_size(self, make_raw_wave):
        buffer = make_raw_wave(samples=(1, 2, 3, 4), data_size=7, trailing=b"")
        with pytest.raises(MisalignedDataChunk) as exc:
            decode_wave(buffer)
        assert exc.value.size == 7
        assert exc.value.block_align == 2

    def test_missing_data_tag(self, make_raw_wave):
        buffer = bytearray(make_raw_wave())
        buffer[36:40] = b"LIST"
        with pytest.raises(TagMismatch) as exc:
            decode_wave(bytes(buffer))
        assert exc.value.expected == b"data"
        assert exc.value.offset == 36

    def test_empty_payload(self, make_raw_wave):
        wave = decode_wave(make_raw_wave(samples=()))
        assert wave.data.channel_data == ((),)
        assert wave.samples_per_channel == 0


class TestDecodeWave:
    """Tests for the decode_wave orchestrator."""

    def test_decodes_complete_file(self, make_raw_wave):
        wave = decode_wave(make_raw_wave(samples=(5, -5, 7), sample_rate=8000))
        assert wave.num_channels == 1
        assert wave.sample_rate == 8000
        assert wave.data.channel_data == ((5, -5, 7),)

    def test_trailing_bytes(self, make_raw_wave):
        with pytest.raises(TrailingBytes) as exc:
            decode_wave(make_raw_wave(trailing=b"\x00\x00\x00"))
        assert exc.value.remaining == 3

    def test_empty_buffer(self):
        with pytest.raises(UnexpectedEndOfInput):
            decode_wave(b"")

    def test_errors_share_base_and_kind(self, make_raw_wave):
        with pytest.raises(WaveError) as exc:
            decode_wave(make_raw_wave(byte_rate=1))
        assert exc.value.kind == "InvalidByteRate"
        assert exc.value.details() == {"declared": 1, "expected": 16000}

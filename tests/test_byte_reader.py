import io

import pytest

from nix8820.exceptions import ParseError
from nix8820.stream.controls import (
    escape_byte,
    expand_spaces,
    is_column,
    is_printable,
)
from nix8820.stream.reader import ByteReader


class TestByteReader:
    def test_read_byte_sequence(self):
        reader = ByteReader.from_bytes(b"ab")
        assert reader.read_byte() == 0x61
        assert reader.read_byte() == 0x62
        assert reader.read_byte() is None
        assert reader.position == 2

    def test_empty_input(self):
        reader = ByteReader.from_bytes(b"")
        assert reader.peek() is None
        assert reader.read_byte() is None
        assert reader.read_fixed(3) == b""

    def test_peek_does_not_consume(self):
        reader = ByteReader.from_bytes(b"xy")
        assert reader.peek() == 0x78
        assert reader.peek() == 0x78
        assert reader.position == 0
        assert reader.read_byte() == 0x78
        assert reader.position == 1

    def test_advance_is_read_byte(self):
        reader = ByteReader.from_bytes(b"q")
        assert reader.advance() == ord("q")
        assert reader.advance() is None

    def test_pushback(self):
        reader = ByteReader.from_bytes(b"\x00A")
        byte = reader.read_byte()
        reader.pushback(byte)
        assert reader.position == 0
        assert reader.read_fixed(2) == b"\x00A"

    def test_second_pushback_rejected(self):
        reader = ByteReader.from_bytes(b"AB")
        reader.pushback(reader.read_byte())
        with pytest.raises(ParseError) as exc_info:
            reader.pushback(0x41)
        assert exc_info.value.get_context("byte") == "0x41"

    def test_pushback_after_peek_rejected(self):
        reader = ByteReader.from_bytes(b"AB")
        reader.read_byte()
        reader.peek()
        with pytest.raises(ParseError):
            reader.pushback(0x41)

    def test_read_fixed_short_at_end(self):
        reader = ByteReader.from_bytes(b"abcd")
        assert reader.read_fixed(3) == b"abc"
        assert reader.read_fixed(3) == b"d"
        assert reader.read_fixed(3) == b""

    def test_wraps_stream_without_overreading(self):
        src = io.BytesIO(b"abcdef")
        reader = ByteReader(src)
        reader.read_fixed(2)
        assert src.read() == b"cdef"


class TestControls:
    @pytest.mark.parametrize("byte", [0x20, 0x41, 0x7E])
    def test_printable(self, byte):
        assert is_printable(byte)

    @pytest.mark.parametrize("byte", [0x00, 0x1F, 0x7F, 0x80, 0xFF])
    def test_not_printable(self, byte):
        assert not is_printable(byte)

    def test_column_ranges(self):
        assert is_column(0x80)
        assert is_column(0xC7)
        assert not is_column(0xC8)
        assert not is_column(0x7F)
        assert is_column(0x88, 0x88)
        assert not is_column(0x89, 0x88)

    def test_expand_spaces(self):
        assert expand_spaces(0x95) == b" " * 21
        assert expand_spaces(0x80) == b""
        assert expand_spaces(0x10) == b""

    def test_escape_byte(self):
        assert escape_byte(0xD0) == b"[d0]"
        assert escape_byte(0x05) == b"[05]"

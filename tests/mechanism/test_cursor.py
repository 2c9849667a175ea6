"""Tests for the byte cursor used by the message parser."""

import pytest

from oauthbearer.mechanism.cursor import ByteCursor, CursorExhaustedError


class TestByteCursor:
    """Tests for ByteCursor reads."""

    def test_next_byte_returns_bytes_in_order(self) -> None:
        cursor = ByteCursor(b"n,")

        assert cursor.next_byte() == ord("n")
        assert cursor.next_byte() == ord(",")
        assert not cursor.has_next()

    def test_next_byte_raises_when_exhausted(self) -> None:
        cursor = ByteCursor(b"")

        with pytest.raises(CursorExhaustedError):
            cursor.next_byte()

    def test_read_until_leaves_delimiter_unread(self) -> None:
        cursor = ByteCursor(b"admin,rest")

        assert cursor.read_until(ord(",")) == b"admin"
        assert cursor.position == 5
        assert cursor.next_byte() == ord(",")

    def test_read_until_without_delimiter_drains_buffer(self) -> None:
        cursor = ByteCursor(b"admin")

        assert cursor.read_until(ord(",")) == b"admin"
        assert not cursor.has_next()
        with pytest.raises(CursorExhaustedError):
            cursor.next_byte()

    def test_read_until_at_delimiter_returns_empty(self) -> None:
        cursor = ByteCursor(b",x")

        assert cursor.read_until(ord(",")) == b""
        assert cursor.position == 0

    def test_read_utf8_until_decodes_multibyte_text(self) -> None:
        cursor = ByteCursor("josé,".encode("utf-8"))

        assert cursor.read_utf8_until(ord(",")) == "josé"

    def test_drain_utf8_returns_rest(self) -> None:
        cursor = ByteCursor(b"n,,auth=Bearer x")
        cursor.next_byte()

        assert cursor.drain_utf8() == ",,auth=Bearer x"
        assert cursor.drain_utf8() == ""

    def test_drain_utf8_rejects_invalid_utf8(self) -> None:
        cursor = ByteCursor(b"\xff\xfe")

        with pytest.raises(UnicodeDecodeError):
            cursor.drain_utf8()

    def test_cursor_copies_input(self) -> None:
        data = bytearray(b"abc")
        cursor = ByteCursor(data)
        data[0] = ord("z")

        assert cursor.next_byte() == ord("a")

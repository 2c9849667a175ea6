"""Sequential reader over the bytes of a client message."""

from __future__ import annotations


class CursorExhaustedError(Exception):
    """Raised when a read needs more bytes than remain in the buffer."""


class ByteCursor:
    """Forward-only cursor over an immutable byte buffer.

    Example:
        >>> cursor = ByteCursor(b"a=admin,rest")
        >>> chr(cursor.next_byte())
        'a'
        >>> cursor.next_byte() == ord("=")
        True
        >>> cursor.read_until(ord(","))
        b'admin'
        >>> cursor.drain_utf8()
        ',rest'
    """

    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    def has_next(self) -> bool:
        return self._pos < len(self._data)

    def next_byte(self) -> int:
        """Return the next byte as an int and advance.

        Raises:
            CursorExhaustedError: If no bytes remain.
        """
        if self._pos >= len(self._data):
            raise CursorExhaustedError(f"no byte at offset {self._pos}")
        value = self._data[self._pos]
        self._pos += 1
        return value

    def read_until(self, delimiter: int) -> bytes:
        """Return bytes up to (not including) ``delimiter``.

        The delimiter itself is left unread. When it never occurs the rest
        of the buffer is returned and the cursor ends up exhausted.
        """
        end = self._data.find(bytes((delimiter,)), self._pos)
        if end == -1:
            end = len(self._data)
        chunk = self._data[self._pos : end]
        self._pos = end
        return chunk

    def read_utf8_until(self, delimiter: int) -> str:
        """Like read_until, decoded as UTF-8.

        Raises:
            UnicodeDecodeError: If the bytes are not valid UTF-8.
        """
        return self.read_until(delimiter).decode("utf-8")

    def drain(self) -> bytes:
        """Return all remaining bytes (possibly empty) and exhaust the cursor."""
        chunk = self._data[self._pos :]
        self._pos = len(self._data)
        return chunk

    def drain_utf8(self) -> str:
        """Return all remaining bytes decoded as UTF-8.

        Raises:
            UnicodeDecodeError: If the bytes are not valid UTF-8.
        """
        return self.drain().decode("utf-8")

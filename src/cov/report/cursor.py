"""Forward-only byte cursor used by the line-oriented report parsers.

The cursor never copies the underlying buffer; every read returns a slice of
the wrapped ``bytes``. A single mark slot allows one level of lookahead.
"""

from __future__ import annotations


class EndOfInput(Exception):
    """Cursor exhausted where running out of data is a normal stop."""

    def __str__(self) -> str:
        return "end of input"


class UnexpectedEndOfInput(Exception):
    """Cursor exhausted while a separator was still expected."""

    def __str__(self) -> str:
        return "unexpected end of input"


_NEWLINE = ord("\n")
_CARRIAGE_RETURN = ord("\r")


class Cursor:
    """Byte scanner over an immutable buffer."""

    __slots__ = ("_data", "_pos", "_mark")

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0
        self._mark: int | None = None

    @property
    def position(self) -> int:
        return self._pos

    @property
    def at_end(self) -> bool:
        return not self._can_read(1)

    def mark(self) -> None:
        """Remember the current position, replacing any previous mark."""
        self._mark = self._pos

    def reset(self) -> None:
        """Rewind to the marked position and clear the mark.

        Does nothing when no mark is set.
        """
        if self._mark is None:
            return
        self._pos = self._mark
        self._mark = None

    def peek(self) -> int:
        """Return the next unread byte without advancing."""
        if not self._can_read(1):
            raise EndOfInput
        return self._data[self._pos]

    def read_byte(self) -> int:
        if not self._can_read(1):
            raise EndOfInput
        b = self._data[self._pos]
        self._pos += 1
        return b

    def read_line(self) -> bytes:
        """Read up to the next ``\\n`` and step over it.

        The line ending is not included, and a trailing ``\\r`` is dropped so
        CRLF input reads the same as LF input. The last line of the buffer is
        returned even if it has no terminator.

        Raises:
            EndOfInput: Nothing at all is left to read.
        """
        if not self._can_read(1):
            raise EndOfInput

        start = self._pos
        end = self._data.find(_NEWLINE, start)
        if end == -1:
            end = len(self._data)
            self._pos = end
        else:
            self._pos = end + 1

        line = self._data[start:end]
        if line and line[-1] == _CARRIAGE_RETURN:
            line = line[:-1]
        return line

    def read_till(self, separator: int) -> bytes:
        """Read up to ``separator`` and step over it.

        Raises:
            EndOfInput: Nothing is left to read at call time.
            UnexpectedEndOfInput: The buffer ran out before ``separator``.
        """
        if not self._can_read(1):
            raise EndOfInput

        start = self._pos
        end = self._data.find(separator, start)
        if end == -1:
            raise UnexpectedEndOfInput

        self._pos = end + 1
        return self._data[start:end]

    def _can_read(self, n: int) -> bool:
        return self._pos + n <= len(self._data)

    def __repr__(self) -> str:
        return f"Cursor(pos={self._pos}, len={len(self._data)}, mark={self._mark})"

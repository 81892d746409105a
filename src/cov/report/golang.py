"""Go coverage profile parser.

``go test -coverprofile`` writes profiles in the format:

    mode: set|count|atomic
    <file>:<startline>.<startcol>,<endline>.<endcol> <numstmt> <count>

Example:

    mode: set
    github.com/user/pkg/main.go:10.2,12.16 3 1
    github.com/user/pkg/main.go:15.2,20.16 5 0

- mode: set (0/1), count (hit count), atomic (thread-safe count)
- numstmt: number of statements in the block
- count: execution count (0 = not covered)

The parser is strict: a bad mode line or a single malformed block line fails
the whole profile. Only blank lines are skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from cov.report.ctxerr import ContextualError
from cov.report.cursor import Cursor, EndOfInput, UnexpectedEndOfInput


class ReportMode(IntEnum):
    """How the ``executed`` column of a profile counts."""

    UNKNOWN = 0
    # Was the block executed at all?
    SET = 1
    # How many times was the block executed? Racy under concurrency.
    COUNT = 2
    # How many times was the block executed? Safe under concurrency.
    ATOMIC = 3

    @property
    def is_valid(self) -> bool:
        return self is not ReportMode.UNKNOWN

    def __str__(self) -> str:
        return self.name.lower()


_MODE_LINES: dict[bytes, ReportMode] = {
    b"mode: set": ReportMode.SET,
    b"mode: count": ReportMode.COUNT,
    b"mode: atomic": ReportMode.ATOMIC,
}


class InvalidReportError(Exception):
    """The input is not a valid Go coverage profile.

    Both the wrapped cause and the context label are optional.
    """

    def __init__(self, cause: BaseException | None = None, context: str = "") -> None:
        super().__init__(cause, context)
        self._cause = cause
        self._context = context
        if cause is not None:
            self.__cause__ = cause

    @property
    def context(self) -> str:
        return self._context

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    def unwrap(self) -> BaseException | None:
        return self._cause

    def __str__(self) -> str:
        msg = "invalid report"
        if self._context:
            msg += f" ({self._context})"
        if self._cause is not None:
            msg += f": {self._cause}"
        return msg


# Everything parse_report can raise for bad input.
PARSE_ERRORS: tuple[type[Exception], ...] = (ContextualError, InvalidReportError)


@dataclass(frozen=True, slots=True)
class Region:
    """A single block line of a Go profile.

    Lines are 1-based. ``executed`` is 0/1 in set mode and a raw count in
    count and atomic modes; it is not bounded by ``statements``.
    """

    file: str
    start_line: int
    start_column: int
    end_line: int
    end_column: int
    statements: int
    executed: int


@dataclass(frozen=True, slots=True)
class Report:
    mode: ReportMode
    regions: tuple[Region, ...] = ()


def parse_report(data: bytes) -> Report:
    """Parse a Go coverage profile.

    Raises:
        ContextualError: The mode line is missing or invalid. The wrapped
            cause is a ``ContextualError`` over ``EndOfInput`` for an empty
            buffer and an ``InvalidReportError`` otherwise.
        InvalidReportError: A block line is malformed.
    """
    c = Cursor(data)

    try:
        mode = _parse_mode(c)
    except (ContextualError, InvalidReportError) as e:
        raise ContextualError(e, "parsing mode string") from e

    regions: list[Region] = []
    while True:
        # Look at the whole line first so blank lines (and \r\n) are handled in
        # one place, then rewind and parse the fields from the stream.
        c.mark()
        try:
            line = c.read_line()
        except EndOfInput:
            break
        if not line:
            continue
        c.reset()

        try:
            regions.append(_parse_region(c))
        except ContextualError as e:
            raise InvalidReportError(e, "parsing region") from e

    return Report(mode=mode, regions=tuple(regions))


def _parse_mode(c: Cursor) -> ReportMode:
    try:
        line = c.read_line()
    except EndOfInput as e:
        raise ContextualError(e, "reading mode line") from e

    mode = _MODE_LINES.get(line)
    if mode is None:
        raise InvalidReportError(context="mode line is not valid")
    return mode


def _parse_int(raw: bytes, *, minimum: int) -> int:
    # int() accepts signs, whitespace and underscores; the profile grammar
    # only allows plain ASCII digits.
    if not raw or not raw.isdigit():
        raise ValueError(f"invalid integer {raw!r}")
    value = int(raw)
    if value < minimum:
        raise ValueError(f"value {value} is below {minimum}")
    return value


def _read_field(c: Cursor, separator: bytes | None, name: str) -> bytes:
    try:
        if separator is None:
            return c.read_line()
        raw = c.read_till(separator[0])
        # A field never spans lines; the separator must show up before the
        # line ends.
        if b"\n" in raw:
            raise UnexpectedEndOfInput
        return raw
    except (EndOfInput, UnexpectedEndOfInput) as e:
        raise ContextualError(e, f"reading {name}") from e


def _int_field(c: Cursor, separator: bytes | None, name: str, *, minimum: int) -> int:
    raw = _read_field(c, separator, name)
    try:
        return _parse_int(raw, minimum=minimum)
    except ValueError as e:
        raise ContextualError(e, f"parsing {name}") from e


def _parse_region(c: Cursor) -> Region:
    # format: "file_path:start_line.start_column,end_line.end_column statements executed"
    # e.g.:   "pkg/foo.go:1.2,3.4 5 6"
    raw_path = _read_field(c, b":", "file path")
    try:
        file_path = raw_path.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ContextualError(e, "decoding file path") from e

    start_line = _int_field(c, b".", "start line", minimum=1)
    start_column = _int_field(c, b",", "start column", minimum=1)
    end_line = _int_field(c, b".", "end line", minimum=1)
    if end_line < start_line:
        err = ValueError(f"end line {end_line} is before start line {start_line}")
        raise ContextualError(err, "parsing end line")
    end_column = _int_field(c, b" ", "end column", minimum=1)
    statements = _int_field(c, b" ", "statements", minimum=0)
    executed = _int_field(c, None, "executed", minimum=0)

    return Region(
        file=file_path,
        start_line=start_line,
        start_column=start_column,
        end_line=end_line,
        end_column=end_column,
        statements=statements,
        executed=executed,
    )

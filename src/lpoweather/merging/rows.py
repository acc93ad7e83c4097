"""
Merged row model and the interchange line format.

A merged row is one timestamped record combining the three quantities:

    2015_02_03 09:02:34 38.86 30.07 3.00
    date       time     air   press wind

Lines are tokenized on whitespace and read by field position, so field
widths never matter.
"""

import math
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from lpoweather.config.settings import Quantity
from lpoweather.exceptions import ParseError

DATE_WIDTH = 10
FEED_DATE_SEPARATOR = "_"
ISO_DATE_SEPARATOR = "-"

# Decimal floats only: no nan/inf, no digit separators
_FLOAT_TOKEN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class MergedRow:
    """
    One date/time-stamped record combining all three quantities.

    Attributes:
        date: Record date as YYYY-MM-DD.
        time: Record time as it appears in the feed (HH:MM:SS).
        value1: Air temperature.
        value2: Barometric pressure.
        value3: Wind speed.
        tokens: Raw value tokens the row was read from, used to write the
            row back out unchanged.
    """

    date: str
    time: str
    value1: float
    value2: float
    value3: float
    tokens: tuple[str, str, str] | None = field(
        default=None, compare=False, repr=False
    )

    @property
    def values(self) -> tuple[float, float, float]:
        """The three values in quantity order."""
        return (self.value1, self.value2, self.value3)

    def value(self, quantity: Quantity) -> float:
        """Value for a single quantity."""
        return self.values[list(Quantity).index(quantity)]


def format_date(date_field: str) -> str:
    """
    Convert a feed date field to ISO form.

    Only the first ten characters are used; underscores become hyphens.

    Example:
        >>> format_date("2015_02_03")
        '2015-02-03'
    """
    return date_field[:DATE_WIDTH].replace(FEED_DATE_SEPARATOR, ISO_DATE_SEPARATOR)


def feed_date(iso_date: str) -> str:
    """Convert an ISO date back to the feed's YYYY_MM_DD form."""
    return iso_date[:DATE_WIDTH].replace(ISO_DATE_SEPARATOR, FEED_DATE_SEPARATOR)


def parse_float(token: str, *, source: str, offset: int) -> float:
    """
    Parse a single floating-point token.

    Raises:
        ParseError: If the token is not a decimal floating-point number
            or overflows to infinity.
    """
    if not _FLOAT_TOKEN.fullmatch(token):
        raise ParseError(
            "Not a floating-point value", source=source, offset=offset, text=token
        )
    value = float(token)
    if not math.isfinite(value):
        raise ParseError(
            "Value out of range", source=source, offset=offset, text=token
        )
    return value


def parse_values(
    tokens: list[str], *, source: str, offset: int
) -> list[tuple[str, float]]:
    """
    Parse consecutive value tokens following the date and time fields.

    Args:
        tokens: All whitespace-delimited fields of one line.
        source: Source name for error reporting.
        offset: Byte offset of the line for error reporting.

    Returns:
        (raw token, value) pairs, in line order.

    Raises:
        ParseError: If the line has no value field or a value is malformed.
    """
    value_tokens = tokens[2:]
    if not value_tokens:
        raise ParseError(
            "Missing value field",
            source=source,
            offset=offset,
            text=" ".join(tokens),
        )
    return [
        (token, parse_float(token, source=source, offset=offset))
        for token in value_tokens
    ]


def format_row(row: MergedRow) -> str:
    """
    Render a row in the interchange format (without line terminator).

    Values keep their original spelling when the row was parsed from text.
    """
    if row.tokens is not None:
        values = row.tokens
    else:
        values = tuple(repr(float(v)) for v in row.values)
    return " ".join((feed_date(row.date), row.time, *values))


def parse_row(line: str, *, source: str = "<stdin>", offset: int = 0) -> MergedRow:
    """
    Parse one interchange line into a MergedRow.

    Args:
        line: Line of text, with or without terminator.
        source: Source name for error reporting.
        offset: Position of the line for error reporting.

    Returns:
        Parsed row.

    Raises:
        ParseError: If the line has fewer than five fields or a value
            is not a floating-point number.
    """
    tokens = line.split()
    if len(tokens) < 5:
        raise ParseError(
            "Expected date, time and three values",
            source=source,
            offset=offset,
            text=line.rstrip("\r\n"),
        )

    date_field, time_field, *value_tokens = tokens[:5]
    v1, v2, v3 = (
        parse_float(token, source=source, offset=offset) for token in value_tokens
    )
    return MergedRow(
        date=format_date(date_field),
        time=time_field,
        value1=v1,
        value2=v2,
        value3=v3,
        tokens=(value_tokens[0], value_tokens[1], value_tokens[2]),
    )


def decode_line(line: str | bytes, *, source: str, offset: int) -> str:
    """
    Decode one raw interchange line as UTF-8.

    Text lines are returned unchanged.

    Raises:
        ParseError: If the bytes are not valid UTF-8.
    """
    if isinstance(line, str):
        return line
    try:
        return line.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(
            "Not valid UTF-8",
            source=source,
            offset=offset,
            text=line.decode("utf-8", errors="replace").rstrip("\r\n"),
        ) from e


def byte_length(line: str | bytes) -> int:
    """Length of a line in bytes, for offset tracking."""
    return len(line) if isinstance(line, bytes) else len(line.encode("utf-8"))


def read_rows(
    lines: Iterable[str | bytes], *, source: str = "<stdin>"
) -> Iterator[MergedRow]:
    """
    Parse interchange lines lazily, skipping blank ones.

    Args:
        lines: Text or UTF-8 byte lines, with or without terminators.
        source: Source name for error reporting.

    Yields:
        Parsed rows in line order.

    Raises:
        ParseError: On the first malformed line; offset is the line's
            byte offset.
    """
    offset = 0
    for raw in lines:
        line = decode_line(raw, source=source, offset=offset)
        if line.strip():
            yield parse_row(line, source=source, offset=offset)
        offset += byte_length(raw)

"""
Row merger: aligns the three daily feeds into one row sequence.

The air temperature feed is the primary source. Its lines carry the date,
time and value; the pressure and wind feeds carry the same record layout and
contribute only their value. Records are paired by position: the n-th line of
every feed belongs to the n-th merged row.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

from lpoweather.config.settings import Quantity
from lpoweather.exceptions import AlignmentError
from lpoweather.merging.rows import MergedRow, format_date, parse_values
from lpoweather.utils.logging import get_logger

log = get_logger(__name__)

LINE_TERMINATOR = b"\n"


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace").rstrip("\r\n")


def _split_records(content: bytes) -> list[tuple[int, bytes]]:
    """Split a buffer into (byte offset, raw line) records."""
    records: list[tuple[int, bytes]] = []
    offset = 0
    while offset < len(content):
        end = content.find(LINE_TERMINATOR, offset)
        end = len(content) if end == -1 else end + 1
        records.append((offset, content[offset:end]))
        offset = end
    return records


@dataclass(frozen=True)
class RawSource:
    """
    One unparsed text feed for a single quantity.

    Attributes:
        quantity: Quantity carried by the feed.
        content: Raw page bytes.
        url: Where the feed was fetched from, if anywhere.
    """

    quantity: Quantity
    content: bytes = field(repr=False)
    url: str | None = None

    @property
    def name(self) -> str:
        """Source name used in error messages."""
        return self.quantity.value

    def __len__(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class MergeCursor:
    """
    Position of the merge in the primary source.

    Attributes:
        offset: Byte offset of the next primary line.
        row: Record index of the next primary line.
    """

    offset: int = 0
    row: int = 0

    def advance(self, consumed: int) -> "MergeCursor":
        """Cursor after consuming one line of `consumed` bytes."""
        return MergeCursor(offset=self.offset + consumed, row=self.row + 1)


class RowMerger:
    """
    Merges a primary and two secondary feeds into MergedRows.

    The merge is driven by an explicit MergeCursor, so it can be stepped
    one record at a time or consumed lazily with rows().
    """

    def __init__(
        self,
        primary: RawSource,
        pressure: RawSource,
        wind: RawSource,
    ) -> None:
        """
        Initialize merger.

        Args:
            primary: Air temperature feed (supplies date and time).
            pressure: Barometric pressure feed.
            wind: Wind speed feed.
        """
        self.primary = primary
        self.secondaries = (pressure, wind)
        self._secondary_records = [
            _split_records(source.content) for source in self.secondaries
        ]

    def exhausted(self, cursor: MergeCursor) -> bool:
        """Whether the cursor has reached the end of the primary source."""
        return cursor.offset >= len(self.primary)

    def step(self, cursor: MergeCursor) -> tuple[MergedRow | None, MergeCursor]:
        """
        Merge the record at the cursor.

        Args:
            cursor: Current position; must not be exhausted.

        Returns:
            The merged row (None for a blank primary line) and the
            advanced cursor.

        Raises:
            IndexError: If the cursor is past the end of the primary source.
            AlignmentError: If a secondary feed has no usable record here.
            ParseError: If a value field is not a floating-point number.
        """
        if self.exhausted(cursor):
            msg = f"Cursor at offset {cursor.offset} is past the primary source"
            raise IndexError(msg)

        content = self.primary.content
        end = content.find(LINE_TERMINATOR, cursor.offset)
        end = len(content) if end == -1 else end + 1
        next_cursor = cursor.advance(end - cursor.offset)

        tokens = _decode(content[cursor.offset : end]).split()
        if not tokens:
            return None, next_cursor

        token1, value1 = parse_values(
            tokens, source=self.primary.name, offset=cursor.offset
        )[0]
        token2, value2 = self._secondary_value(0, cursor)
        token3, value3 = self._secondary_value(1, cursor)

        row = MergedRow(
            date=format_date(tokens[0]),
            time=tokens[1],
            value1=value1,
            value2=value2,
            value3=value3,
            tokens=(token1, token2, token3),
        )
        return row, next_cursor

    def rows(self, cursor: MergeCursor | None = None) -> Iterator[MergedRow]:
        """
        Lazily merge all remaining records.

        Args:
            cursor: Where to start; defaults to the beginning.

        Yields:
            MergedRow per non-blank primary line.

        Raises:
            AlignmentError: If the feeds disagree on their record count.
            ParseError: If a value field is malformed.
        """
        if cursor is None:
            cursor = MergeCursor()
        emitted = 0
        while not self.exhausted(cursor):
            row, cursor = self.step(cursor)
            if row is not None:
                emitted += 1
                yield row

        self._check_trailing(cursor)
        log.debug(
            "Merged sources",
            rows=emitted,
            primary_bytes=len(self.primary),
        )

    def __iter__(self) -> Iterator[MergedRow]:
        return self.rows()

    def _secondary_value(self, index: int, cursor: MergeCursor) -> tuple[str, float]:
        source = self.secondaries[index]
        records = self._secondary_records[index]

        if cursor.row >= len(records):
            raise AlignmentError(
                "Secondary source ended before the primary source",
                row=cursor.row,
                source=source.name,
            )

        offset, raw = records[cursor.row]
        tokens = _decode(raw).split()
        if len(tokens) < 3:
            raise AlignmentError(
                "Secondary source has no value at this record",
                row=cursor.row,
                source=source.name,
            )
        return parse_values(tokens, source=source.name, offset=offset)[0]

    def _check_trailing(self, cursor: MergeCursor) -> None:
        """Reject secondary feeds that hold records past the primary's end."""
        for source, records in zip(self.secondaries, self._secondary_records):
            leftover = [raw for _, raw in records[cursor.row :] if raw.strip()]
            if leftover:
                raise AlignmentError(
                    f"Secondary source has {len(leftover)} record(s) "
                    "past the end of the primary source",
                    row=cursor.row,
                    source=source.name,
                )


def merge_sources(
    primary: RawSource,
    pressure: RawSource,
    wind: RawSource,
) -> Iterator[MergedRow]:
    """
    Merge three feeds into a lazy row sequence.

    Args:
        primary: Air temperature feed.
        pressure: Barometric pressure feed.
        wind: Wind speed feed.

    Returns:
        Iterator over merged rows.
    """
    return RowMerger(primary, pressure, wind).rows()

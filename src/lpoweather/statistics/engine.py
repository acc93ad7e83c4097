"""
Statistics engine for merged rows.

Accumulates one column per quantity and computes mean and median.
Both statistics refuse empty input instead of returning 0 or NaN.
"""

import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

import numpy as np

from lpoweather.config.settings import Quantity
from lpoweather.exceptions import AllocationError, EmptyInputError
from lpoweather.merging.rows import MergedRow
from lpoweather.utils.logging import get_logger

log = get_logger(__name__)


class Column:
    """
    Growable ordered sequence of values for one quantity.

    Values are kept in insertion order; summary statistics never reorder
    the stored values.
    """

    def __init__(self, name: str, values: Iterable[float] = ()) -> None:
        self.name = name
        self._values: list[float] = []
        for value in values:
            self.append(value)

    def append(self, value: float) -> None:
        """Append a value (amortized O(1))."""
        try:
            self._values.append(float(value))
        except MemoryError as e:
            msg = f"Unable to grow column {self.name!r} past {len(self._values)} values"
            raise AllocationError(msg) from e

    def truncate(self, length: int) -> None:
        """Drop values past the first `length`."""
        del self._values[length:]

    def clear(self) -> None:
        """Release all stored values."""
        self._values = []

    @property
    def values(self) -> tuple[float, ...]:
        """Snapshot of the stored values in insertion order."""
        return tuple(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[float]:
        return iter(self._values)

    def __getitem__(self, index: int) -> float:
        return self._values[index]

    def __repr__(self) -> str:
        return f"Column(name={self.name!r}, count={len(self)})"


def _column_name(column: Sequence[float] | Column) -> str:
    return column.name if isinstance(column, Column) else "column"


def _as_array(column: Sequence[float] | Column) -> np.ndarray:
    return np.fromiter(column, dtype=np.float64, count=len(column))


def mean(column: Sequence[float] | Column) -> float:
    """
    Arithmetic mean of a column.

    Args:
        column: Values to average.

    Returns:
        sum / count in float64 precision.

    Raises:
        EmptyInputError: If the column is empty.
    """
    if len(column) == 0:
        raise EmptyInputError(_column_name(column))

    values = _as_array(column)
    with np.errstate(over="ignore"):
        result = float(np.mean(values))
    if math.isinf(result):
        # the running sum overflowed; scale each value down first
        result = float(np.sum(values / len(values)))
    return result


def median(column: Sequence[float] | Column) -> float:
    """
    Median of a column.

    For an odd count the middle value is returned; for an even count, the
    mean of the two middle values.

    Args:
        column: Values to take the median of. Left unmodified.

    Returns:
        Median value.

    Raises:
        EmptyInputError: If the column is empty.
    """
    if len(column) == 0:
        raise EmptyInputError(_column_name(column))

    values = _as_array(column)
    with np.errstate(over="ignore"):
        result = float(np.median(values))
    if math.isinf(result):
        # the two middle values overflowed when added
        result = float(np.median(values / 2.0)) * 2.0
    return result


@dataclass(frozen=True)
class ColumnSummary:
    """Mean and median of one quantity."""

    mean: float
    median: float

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary."""
        return {"mean": self.mean, "median": self.median}


@dataclass(frozen=True)
class SummaryRecord:
    """
    Per-date summary of the three quantities.

    Attributes:
        date: Date of the summarized rows (YYYY-MM-DD).
        air_temperature: Air temperature mean/median.
        barometric_pressure: Barometric pressure mean/median.
        wind_speed: Wind speed mean/median.
        count: Number of rows summarized.
    """

    date: str
    air_temperature: ColumnSummary
    barometric_pressure: ColumnSummary
    wind_speed: ColumnSummary
    count: int

    def summary(self, quantity: Quantity) -> ColumnSummary:
        """Summary for one quantity."""
        return getattr(self, quantity.value)

    def items(self) -> list[tuple[Quantity, ColumnSummary]]:
        """(quantity, summary) pairs in interchange column order."""
        return [(quantity, self.summary(quantity)) for quantity in Quantity]

    def to_dict(self) -> dict[str, dict[str, dict[str, float]]]:
        """Convert to the nested dictionary used for JSON output."""
        return {
            self.date: {
                quantity.json_key: summary.to_dict()
                for quantity, summary in self.items()
            }
        }


class StatisticsEngine:
    """
    Accumulates merged rows and summarizes them.

    The first accumulated row fixes the summary date.
    """

    def __init__(self) -> None:
        self.date: str | None = None
        self.columns: dict[Quantity, Column] = {
            quantity: Column(quantity.value) for quantity in Quantity
        }

    @property
    def count(self) -> int:
        """Number of rows accumulated."""
        return len(self.columns[Quantity.AIR_TEMPERATURE])

    def accumulate(self, row: MergedRow) -> None:
        """
        Append one row's values to their columns.

        Either all three columns grow or none does.

        Args:
            row: Merged row to accumulate.

        Raises:
            AllocationError: If a column cannot grow. Values already
                appended for this row are removed first.
        """
        if self.date is not None and row.date != self.date:
            log.warning(
                "Row date differs from summary date",
                summary_date=self.date,
                row_date=row.date,
                time=row.time,
            )

        count = self.count
        try:
            for quantity in Quantity:
                self.columns[quantity].append(row.value(quantity))
        except AllocationError:
            for column in self.columns.values():
                column.truncate(count)
            raise

        if self.date is None:
            self.date = row.date

    def accumulate_all(self, rows: Iterable[MergedRow]) -> int:
        """
        Accumulate every row of an iterable.

        Returns:
            Number of rows accumulated by this call.
        """
        before = self.count
        for row in rows:
            self.accumulate(row)
        added = self.count - before
        log.info("Accumulated rows", rows=added, total=self.count)
        return added

    def summarize(self) -> SummaryRecord:
        """
        Compute mean and median for every column.

        Raises:
            EmptyInputError: If no rows were accumulated.
        """
        if self.date is None or self.count == 0:
            raise EmptyInputError("input")

        summaries = {
            quantity: ColumnSummary(mean=mean(column), median=median(column))
            for quantity, column in self.columns.items()
        }
        return SummaryRecord(
            date=self.date,
            air_temperature=summaries[Quantity.AIR_TEMPERATURE],
            barometric_pressure=summaries[Quantity.BAROMETRIC_PRESSURE],
            wind_speed=summaries[Quantity.WIND_SPEED],
            count=self.count,
        )

    def reset(self) -> None:
        """Release column storage and forget the summary date."""
        for column in self.columns.values():
            column.clear()
        self.date = None


def summarize_rows(rows: Iterable[MergedRow]) -> SummaryRecord:
    """
    Summarize a row sequence in one pass.

    Args:
        rows: Merged rows for one date.

    Returns:
        Summary record.

    Raises:
        EmptyInputError: If the sequence is empty.
    """
    engine = StatisticsEngine()
    engine.accumulate_all(rows)
    record = engine.summarize()
    engine.reset()
    return record

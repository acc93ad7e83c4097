"""
Pandera schema for the merged row dataset.

One row per timestamp, one float column per quantity.
"""

from collections.abc import Iterable

import pandas as pd
import pandera.pandas as pa
from pandera.typing import Series

from lpoweather.config.settings import Quantity
from lpoweather.merging.rows import MergedRow

MERGED_COLUMNS = ["date", "time", *(quantity.value for quantity in Quantity)]


class MergedRowSchema(pa.DataFrameModel):
    """
    Schema for merged station readings.

    Dates are ISO formatted; values are plain floats with no range
    constraints since the feeds carry raw sensor output.
    """

    date: Series[str] = pa.Field(
        str_matches=r"^\d{4}-\d{2}-\d{2}$",
        description="Reading date (YYYY-MM-DD)",
    )
    time: Series[str] = pa.Field(
        str_matches=r"^\d{2}:\d{2}:\d{2}$",
        description="Reading time (HH:MM:SS)",
    )
    air_temperature: Series[float] = pa.Field(
        nullable=False,
        description="Air temperature",
    )
    barometric_pressure: Series[float] = pa.Field(
        nullable=False,
        description="Barometric pressure",
    )
    wind_speed: Series[float] = pa.Field(
        nullable=False,
        description="Wind speed",
    )

    class Config:
        """Schema configuration."""

        name = "MergedRowSchema"
        strict = True
        coerce = True


def rows_to_frame(rows: Iterable[MergedRow]) -> pd.DataFrame:
    """
    Build a DataFrame from merged rows.

    Args:
        rows: Merged rows.

    Returns:
        DataFrame with MERGED_COLUMNS, not yet validated.
    """
    records = [(row.date, row.time, *row.values) for row in rows]
    return pd.DataFrame.from_records(records, columns=MERGED_COLUMNS)

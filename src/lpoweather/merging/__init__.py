"""
Row merging layer.

Aligns the three per-quantity feeds into synchronized MergedRows and
reads/writes the space-separated interchange format.
"""

from lpoweather.merging.merger import MergeCursor, RawSource, RowMerger, merge_sources
from lpoweather.merging.rows import (
    MergedRow,
    format_date,
    format_row,
    parse_row,
    read_rows,
)

__all__ = [
    "MergeCursor",
    "MergedRow",
    "RawSource",
    "RowMerger",
    "format_date",
    "format_row",
    "merge_sources",
    "parse_row",
    "read_rows",
]

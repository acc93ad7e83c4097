"""
Statistics layer.

Accumulates merged rows per quantity and summarizes them with
mean and median, rendered as tabular or JSON text.
"""

from lpoweather.statistics.engine import (
    Column,
    ColumnSummary,
    StatisticsEngine,
    SummaryRecord,
    mean,
    median,
    summarize_rows,
)
from lpoweather.statistics.report import render, render_json, render_table

__all__ = [
    "Column",
    "ColumnSummary",
    "StatisticsEngine",
    "SummaryRecord",
    "mean",
    "median",
    "render",
    "render_json",
    "render_table",
    "summarize_rows",
]

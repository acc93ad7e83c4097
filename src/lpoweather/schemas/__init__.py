"""
Schema definitions using Pandera for data validation.

Defines the contract of the merged dataset exchanged between the
fetch and crunch stages.
"""

from lpoweather.schemas.merged import MERGED_COLUMNS, MergedRowSchema, rows_to_frame

__all__ = ["MERGED_COLUMNS", "MergedRowSchema", "rows_to_frame"]

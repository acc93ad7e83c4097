"""
Data ingestion layer for retrieving the raw station feeds.

All network access happens through this module; the merging and
statistics layers only see in-memory RawSources.
"""

from lpoweather.ingestion.fetch import (
    SourceFetcher,
    build_source_url,
    parse_target_date,
)

__all__ = ["SourceFetcher", "build_source_url", "parse_target_date"]

"""
Error types raised by the merging, statistics and fetching layers.

All errors derive from LpoWeatherError so the CLI can map them to a
single exit code. None of them is handled inside the core.
"""


class LpoWeatherError(Exception):
    """Base class for all lpoweather errors."""


class AlignmentError(LpoWeatherError):
    """A secondary source has no record at the position the primary expects."""

    def __init__(self, message: str, *, row: int, source: str) -> None:
        super().__init__(f"{message} (source={source}, row={row})")
        self.row = row
        self.source = source


class ParseError(LpoWeatherError):
    """A field could not be parsed as the expected token."""

    def __init__(self, message: str, *, source: str, offset: int, text: str) -> None:
        super().__init__(f"{message}: {text!r} (source={source}, offset={offset})")
        self.source = source
        self.offset = offset
        self.text = text


class EmptyInputError(LpoWeatherError):
    """Mean or median requested over an empty column."""

    def __init__(self, column: str = "column") -> None:
        super().__init__(f"Cannot summarize empty {column}")
        self.column = column


class AllocationError(LpoWeatherError):
    """A column could not grow to hold another value."""


class FetchError(LpoWeatherError):
    """An upstream feed could not be retrieved or reported an error page."""

    def __init__(self, message: str, *, url: str) -> None:
        super().__init__(f"{message} ({url})")
        self.url = url


class DateFormatError(LpoWeatherError, ValueError):
    """The target date argument is not YYYYMMDD."""

"""Interchange file validation module."""

from lpoweather.validation.core import (
    InterchangeCheckResult,
    LineIssue,
    check_interchange,
)
from lpoweather.validation.reporter import ConsoleReporter

__all__ = [
    "ConsoleReporter",
    "InterchangeCheckResult",
    "LineIssue",
    "check_interchange",
]

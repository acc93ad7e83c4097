"""
Validation of merged-row interchange files.

Parses every line of an interchange file, then validates the parsed
rows against MergedRowSchema.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

import pandera.pandas as pa

from lpoweather.exceptions import ParseError
from lpoweather.merging.rows import MergedRow, byte_length, decode_line, parse_row
from lpoweather.schemas.merged import MergedRowSchema, rows_to_frame
from lpoweather.utils.logging import get_logger

log = get_logger(__name__)


@dataclass
class LineIssue:
    """A line that could not be parsed."""

    line: int
    error: ParseError


@dataclass
class InterchangeCheckResult:
    """Result of checking one interchange file."""

    source: str
    line_count: int
    row_count: int
    issues: list[LineIssue] = field(default_factory=list)
    dates: list[str] = field(default_factory=list)
    schema_valid: bool | None = None
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        """Whether every line parsed and the rows passed the schema."""
        return not self.issues and self.schema_valid is True


def _format_schema_error(error: pa.errors.SchemaErrors) -> str:
    cases = error.failure_cases
    lines = [
        f"{case['column']}: {case['check']} (value={case['failure_case']!r})"
        for case in cases.head(5).to_dict("records")
    ]
    if len(cases) > 5:
        lines.append(f"... and {len(cases) - 5} more")
    return "\n".join(lines)


def check_interchange(
    lines: Iterable[str | bytes], *, source: str = "<stdin>"
) -> InterchangeCheckResult:
    """
    Check an interchange file line by line and against the schema.

    Unlike read_rows, malformed lines are collected rather than raised.

    Args:
        lines: Text or UTF-8 byte lines of the file.
        source: Source name for reporting.

    Returns:
        Check result.
    """
    rows: list[MergedRow] = []
    issues: list[LineIssue] = []
    line_count = 0
    offset = 0

    for number, raw in enumerate(lines, start=1):
        line_count = number
        try:
            line = decode_line(raw, source=source, offset=offset)
            if line.strip():
                rows.append(parse_row(line, source=source, offset=offset))
        except ParseError as e:
            issues.append(LineIssue(line=number, error=e))
        offset += byte_length(raw)

    result = InterchangeCheckResult(
        source=source,
        line_count=line_count,
        row_count=len(rows),
        issues=issues,
        dates=sorted({row.date for row in rows}),
    )

    if not rows:
        result.error_message = "No rows to validate"
        log.warning("Interchange file has no rows", source=source)
        return result

    try:
        MergedRowSchema.validate(rows_to_frame(rows), lazy=True)
        result.schema_valid = True
        log.info("Validation passed", source=source, rows=len(rows))
    except pa.errors.SchemaErrors as e:
        result.schema_valid = False
        result.error_message = _format_schema_error(e)
        log.error("Schema validation failed", source=source, error=result.error_message)

    return result

"""Tests for merged row parsing and formatting."""

import pytest

from lpoweather.config.settings import Quantity
from lpoweather.exceptions import ParseError
from lpoweather.merging.rows import (
    MergedRow,
    feed_date,
    format_date,
    format_row,
    parse_float,
    parse_row,
    parse_values,
    read_rows,
)


class TestDates:
    """Tests for date field conversion."""

    def test_format_date(self) -> None:
        """Test underscores become hyphens."""
        assert format_date("2015_02_03") == "2015-02-03"

    def test_format_date_uses_first_ten_characters(self) -> None:
        """Test that anything past the date width is dropped."""
        assert format_date("2015_02_03T09") == "2015-02-03"

    def test_feed_date(self) -> None:
        """Test ISO dates convert back to the feed form."""
        assert feed_date("2015-02-03") == "2015_02_03"


class TestParseFloat:
    """Tests for value token parsing."""

    @pytest.mark.parametrize(
        ("token", "expected"),
        [("38.86", 38.86), ("-4.5", -4.5), ("3", 3.0), (".5", 0.5), ("1e3", 1000.0)],
    )
    def test_valid_tokens(self, token: str, expected: float) -> None:
        """Test decimal float tokens are accepted."""
        assert parse_float(token, source="air_temperature", offset=0) == expected

    @pytest.mark.parametrize(
        "token", ["abc", "nan", "inf", "1_000", "3.0.1", "", "1e400", "-1e400"]
    )
    def test_invalid_tokens(self, token: str) -> None:
        """Test non-decimal tokens raise ParseError with context."""
        with pytest.raises(ParseError) as exc_info:
            parse_float(token, source="wind_speed", offset=42)
        assert exc_info.value.source == "wind_speed"
        assert exc_info.value.offset == 42
        assert exc_info.value.text == token

    def test_parse_values_reads_all_trailing_tokens(self) -> None:
        """Test consecutive value tokens after date and time are parsed."""
        tokens = ["2015_02_03", "00:01:52", "38.86", "1.5"]
        result = parse_values(tokens, source="s", offset=0)
        assert result == [("38.86", 38.86), ("1.5", 1.5)]

    def test_parse_values_missing_value(self) -> None:
        """Test a line without a value field is a parse error."""
        with pytest.raises(ParseError, match="Missing value field"):
            parse_values(["2015_02_03", "00:01:52"], source="s", offset=7)


class TestParseRow:
    """Tests for reading interchange lines."""

    def test_parse_row(self) -> None:
        """Test a well-formed line yields all fields."""
        row = parse_row("2015_02_03 09:02:34 38.86 30.07 3.00\n")
        assert row.date == "2015-02-03"
        assert row.time == "09:02:34"
        assert row.values == (38.86, 30.07, 3.0)

    def test_parse_row_tolerates_field_widths(self) -> None:
        """Test that extra whitespace between fields is ignored."""
        row = parse_row("2015_02_03 09:02:34 38.86  30.07   3.00\r\n")
        assert row.values == (38.86, 30.07, 3.0)

    def test_parse_row_too_few_fields(self) -> None:
        """Test short lines raise ParseError."""
        with pytest.raises(ParseError, match="Expected date, time and three values"):
            parse_row("2015_02_03 09:02:34 38.86 30.07", offset=12)

    def test_parse_row_bad_value(self) -> None:
        """Test a non-numeric value raises ParseError."""
        with pytest.raises(ParseError) as exc_info:
            parse_row("2015_02_03 09:02:34 38.86 n/a 3.00", source="in.txt")
        assert exc_info.value.text == "n/a"
        assert exc_info.value.source == "in.txt"

    def test_value_by_quantity(self) -> None:
        """Test per-quantity value access."""
        row = parse_row("2015_02_03 09:02:34 38.86 30.07 3.00")
        assert row.value(Quantity.AIR_TEMPERATURE) == 38.86
        assert row.value(Quantity.BAROMETRIC_PRESSURE) == 30.07
        assert row.value(Quantity.WIND_SPEED) == 3.0


class TestFormatRow:
    """Tests for writing interchange lines."""

    def test_parsed_row_round_trips_exactly(self) -> None:
        """Test that original value spelling is preserved."""
        line = "2015_02_03 09:02:34 38.86 30.07 3.00"
        assert format_row(parse_row(line)) == line

    def test_constructed_row(self) -> None:
        """Test rows built in code are written with float repr."""
        row = MergedRow(
            date="2015-02-03", time="09:02:34", value1=38.86, value2=30.07, value3=3.0
        )
        assert format_row(row) == "2015_02_03 09:02:34 38.86 30.07 3.0"

    def test_tokens_do_not_affect_equality(self) -> None:
        """Test that rows compare by value only."""
        parsed = parse_row("2015_02_03 09:02:34 38.86 30.07 3.00")
        built = MergedRow("2015-02-03", "09:02:34", 38.86, 30.07, 3.0)
        assert parsed == built


class TestReadRows:
    """Tests for lazy interchange reading."""

    def test_skips_blank_lines(self, interchange_text: str) -> None:
        """Test blank lines are ignored."""
        lines = interchange_text.splitlines(keepends=True)
        lines.insert(1, "\n")
        rows = list(read_rows(lines))
        assert len(rows) == 3

    def test_error_offset_is_byte_offset(self) -> None:
        """Test ParseError reports where the bad line starts."""
        lines = ["2015_02_03 09:02:34 38.86 30.07 3.00\n", "garbage\n"]
        with pytest.raises(ParseError) as exc_info:
            list(read_rows(lines, source="in.txt"))
        assert exc_info.value.offset == len(lines[0])

    def test_reads_byte_lines(self, interchange_text: str) -> None:
        """Test UTF-8 byte lines parse like text lines."""
        lines = interchange_text.encode("utf-8").splitlines(keepends=True)
        assert list(read_rows(lines)) == list(
            read_rows(interchange_text.splitlines(keepends=True))
        )

    def test_invalid_utf8(self) -> None:
        """Test undecodable bytes raise ParseError at the line's offset."""
        first = b"2015_02_03 09:02:34 38.86 30.07 3.00\r\n"
        lines = [first, b"\xff\xfe 00:00:01 1 2 3\r\n"]
        with pytest.raises(ParseError, match="Not valid UTF-8") as exc_info:
            list(read_rows(lines, source="in.txt"))
        assert exc_info.value.offset == len(first)
        assert exc_info.value.source == "in.txt"

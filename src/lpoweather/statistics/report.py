"""
Text renderings of a SummaryRecord.

Both layouts are consumed by existing scripts and are kept byte-for-byte:
values use six decimal places, the tabular form is tab-indented, and the
JSON form keeps its irregular spacing.
"""

from lpoweather.config.settings import Quantity
from lpoweather.statistics.engine import SummaryRecord


def _fixed(value: float) -> str:
    return f"{value:f}"


def render_table(record: SummaryRecord) -> str:
    """
    Render the tabular summary.

    Example:
        2015-02-03
        <TAB>Air Temperature
        <TAB><TAB>Mean<TAB>38.453333
        <TAB><TAB>Median<TAB>38.860000
        ...
    """
    lines = [record.date]
    for quantity, summary in record.items():
        lines.append(f"\t{quantity.label}")
        lines.append(f"\t\tMean\t{_fixed(summary.mean)}")
        lines.append(f"\t\tMedian\t{_fixed(summary.median)}")
    return "\n".join(lines) + "\n"


def render_json(record: SummaryRecord) -> str:
    """Render the JSON summary."""
    first = Quantity.AIR_TEMPERATURE
    entries = []
    for quantity, summary in record.items():
        # first entry has no space after the opening brace
        opening = "{" if quantity is first else "{ "
        entries.append(
            f'  "{quantity.json_key}": {opening}"mean": {_fixed(summary.mean)}, '
            f'"median": {_fixed(summary.median)} }}'
        )
    body = ",\n".join(entries)
    return f'{{ "{record.date}": {{\n{body}\n}}\n}}\n'


def render(record: SummaryRecord, *, json_output: bool = False) -> str:
    """Render a summary in the requested layout."""
    return render_json(record) if json_output else render_table(record)

"""Command-line interface for the lpoweather pipeline."""

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, BinaryIO

import typer
from rich.console import Console
from rich.markup import escape

from lpoweather.exceptions import LpoWeatherError

if TYPE_CHECKING:
    from lpoweather.config.settings import AppConfig
    from lpoweather.merging.rows import MergedRow
    from lpoweather.statistics.engine import SummaryRecord

app = typer.Typer(
    name="lpoweather",
    help="Fetch, merge and summarize Lake Pend Oreille weather readings.",
    no_args_is_help=True,
)

# stdout carries merged rows and summaries; messages go to stderr
console = Console()
err_console = Console(stderr=True)

DateArgument = Annotated[
    str | None,
    typer.Argument(
        metavar="[YYYYMMDD]",
        help="Date to fetch (YYYYMMDD or 'today'). Defaults to today.",
        show_default=False,
    ),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", help="Output the summary in JSON format."),
]

InputOption = Annotated[
    Path | None,
    typer.Option(
        "--input",
        "-i",
        help="Merged-row file to read. Reads standard input if not specified.",
        exists=True,
        dir_okay=False,
    ),
]


def _fail(error: Exception) -> typer.Exit:
    err_console.print(f"[red]Error: {escape(str(error))}[/red]")
    return typer.Exit(code=1)


def _app_config(ctx: typer.Context) -> "AppConfig":
    from lpoweather.config.settings import AppConfig

    return ctx.obj if isinstance(ctx.obj, AppConfig) else AppConfig()


def _open_input(input_path: Path | None) -> tuple[BinaryIO, str]:
    # bytes, so undecodable lines surface as ParseError with an offset
    if input_path is None:
        return sys.stdin.buffer, "<stdin>"
    return input_path.open("rb"), str(input_path)


def _fetch_rows(ctx: typer.Context, date_arg: str | None) -> list["MergedRow"]:
    """Fetch and merge the three feeds for a date."""
    from lpoweather.ingestion.fetch import SourceFetcher, parse_target_date
    from lpoweather.merging.merger import merge_sources
    from lpoweather.utils.logging import log_context

    app_config = _app_config(ctx)
    day = parse_target_date(date_arg)

    with log_context(day=day.isoformat()):
        with SourceFetcher(app_config.fetch) as fetcher:
            air, pressure, wind = fetcher.fetch_all(day)
        # materialize so a misaligned feed produces no partial output
        return list(merge_sources(air, pressure, wind))


def _summarize_input(input_path: Path | None) -> "SummaryRecord":
    from lpoweather.merging.rows import read_rows
    from lpoweather.statistics.engine import summarize_rows

    stream, source = _open_input(input_path)
    try:
        return summarize_rows(read_rows(stream, source=source))
    finally:
        if input_path is not None:
            stream.close()


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration YAML file.",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Log level (DEBUG, INFO, WARNING, ERROR). Overrides the config file.",
        ),
    ] = None,
    log_json: Annotated[
        bool,
        typer.Option("--log-json", help="Write logs as JSON lines to stderr."),
    ] = False,
) -> None:
    """Fetch, merge and summarize Lake Pend Oreille weather readings."""
    from lpoweather.config.loader import load_config
    from lpoweather.utils.logging import configure_logging

    try:
        app_config = load_config(config)
    except (OSError, ValueError) as e:
        raise _fail(e) from e

    configure_logging(
        level=log_level or app_config.logging.level,
        json_output=log_json or app_config.logging.json_output,
    )
    ctx.obj = app_config


@app.command()
def fetch(ctx: typer.Context, date: DateArgument = None) -> None:
    """
    Fetch air temperature, barometric pressure and wind speed for a day.

    Output is one line per reading:
    Date Time Air_temp Bar_press Wind_speed
    """
    from lpoweather.merging.rows import format_row

    try:
        rows = _fetch_rows(ctx, date)
    except LpoWeatherError as e:
        raise _fail(e) from e

    for row in rows:
        typer.echo(format_row(row))


@app.command()
def crunch(json_output: JsonOption = False, input_path: InputOption = None) -> None:
    """
    Compute mean and median of each quantity from merged rows.

    Reads the output of the fetch command.
    """
    from lpoweather.statistics.report import render

    try:
        record = _summarize_input(input_path)
    except LpoWeatherError as e:
        raise _fail(e) from e

    typer.echo(render(record, json_output=json_output), nl=False)


@app.command()
def summary(
    ctx: typer.Context,
    date: DateArgument = None,
    json_output: JsonOption = False,
) -> None:
    """Fetch a day of readings and print its summary."""
    from lpoweather.statistics.engine import summarize_rows
    from lpoweather.statistics.report import render

    try:
        record = summarize_rows(_fetch_rows(ctx, date))
    except LpoWeatherError as e:
        raise _fail(e) from e

    typer.echo(render(record, json_output=json_output), nl=False)


@app.command()
def check(input_path: InputOption = None) -> None:
    """Validate a merged-row file against the interchange schema."""
    from lpoweather.validation import ConsoleReporter, check_interchange

    stream, source = _open_input(input_path)
    try:
        result = check_interchange(stream, source=source)
    finally:
        if input_path is not None:
            stream.close()

    reporter = ConsoleReporter(console)
    reporter.print_result(result)

    if not result.ok:
        raise typer.Exit(code=1)


@app.command()
def version() -> None:
    """Show version information."""
    from lpoweather import __version__

    console.print(f"lpoweather version {__version__}")


if __name__ == "__main__":
    app()

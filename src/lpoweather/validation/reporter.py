"""
Console reporter for interchange check results.

Formats check results using Rich for clear, colored output.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from lpoweather.validation.core import InterchangeCheckResult

MAX_ISSUES_SHOWN = 10


class ConsoleReporter:
    """Formats and displays check results to the console."""

    def __init__(self, console: Console) -> None:
        """
        Initialize console reporter.

        Args:
            console: Rich Console instance for output.
        """
        self.console = console

    def print_result(self, result: InterchangeCheckResult) -> None:
        """
        Print a check result as a table followed by any line issues.

        Args:
            result: Check result to display.
        """
        table = Table(title="Interchange Check", show_header=True)
        table.add_column("Source", style="cyan", no_wrap=True)
        table.add_column("Lines", justify="right")
        table.add_column("Rows", justify="right")
        table.add_column("Bad lines", justify="right")
        table.add_column("Dates", style="blue")
        table.add_column("Schema", justify="center")

        table.add_row(
            result.source,
            str(result.line_count),
            str(result.row_count),
            str(len(result.issues)),
            ", ".join(result.dates) or "-",
            self._format_status(result),
        )
        self.console.print(table)

        if len(result.dates) > 1:
            self.console.print(
                "[yellow]Input spans several dates; "
                "summaries are labelled with the first one.[/yellow]"
            )

        self._print_issues(result)

        if result.schema_valid is False and result.error_message:
            self.console.print()
            self.console.print("[bold red]Schema Errors:[/bold red]")
            for line in result.error_message.split("\n"):
                self.console.print(f"  {escape(line)}")

    def _format_status(self, result: InterchangeCheckResult) -> str:
        """
        Format schema status with color.

        Args:
            result: Check result.

        Returns:
            Formatted status string with color markup.
        """
        if result.schema_valid is None:
            return "[yellow]Skipped[/yellow]"
        if result.schema_valid:
            return "[green]Pass[/green]"
        return "[red]Fail[/red]"

    def _print_issues(self, result: InterchangeCheckResult) -> None:
        if not result.issues:
            return

        self.console.print()
        self.console.print("[bold red]Unparseable lines:[/bold red]")
        for issue in result.issues[:MAX_ISSUES_SHOWN]:
            self.console.print(f"  line {issue.line}: {issue.error}", markup=False)
        if len(result.issues) > MAX_ISSUES_SHOWN:
            self.console.print(
                f"  ... and {len(result.issues) - MAX_ISSUES_SHOWN} more"
            )

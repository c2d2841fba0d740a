"""Terminal reporter with rich output formatting."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from jswaste.models.finding import WasteAuditResult

console = Console()

_BYTES_PER_KIB = 1024
_HIGH_WASTE_PERCENT = 50.0
_MODERATE_WASTE_PERCENT = 25.0

# Display limits for truncation
_MAX_URL_LENGTH = 70


def format_bytes(value: int | None) -> str:
    """Format a byte count as KiB, or ``unknown`` when missing."""
    if value is None:
        return "unknown"
    return f"{value / _BYTES_PER_KIB:,.1f} KiB"


def _truncate_url(url: str) -> str:
    if len(url) > _MAX_URL_LENGTH:
        return "..." + url[-(_MAX_URL_LENGTH - 3) :]
    return url


def _waste_color(percent: float) -> str:
    """Return a Rich color name for a wasted percentage."""
    if percent >= _HIGH_WASTE_PERCENT:
        return "red"
    if percent >= _MODERATE_WASTE_PERCENT:
        return "yellow"
    return "green"


class CLIReporter:
    """Rich terminal output reporter for audit results."""

    def __init__(self) -> None:
        """Initialize the CLI reporter."""
        self.console = console

    def print_header(self, title: str) -> None:
        """Print a bold header."""
        self.console.print(f"\n[bold cyan]{title}[/bold cyan]\n")

    def print_success(self, message: str) -> None:
        """Print a success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def print_error(self, message: str) -> None:
        """Print an error message."""
        self.console.print(f"[red]✗[/red] {message}")

    def print_info(self, message: str) -> None:
        """Print an info message."""
        self.console.print(f"[dim]{message}[/dim]")

    def print_waste_findings(
        self, result: WasteAuditResult, title: str = "Unused JavaScript"
    ) -> None:
        """Print a table of findings, largest waste first.

        Bundle breakdown rows are indented beneath the script they belong to.
        """
        if not result.items:
            self.print_success("No significant unused JavaScript found")
            return

        table = Table(title=title, title_style="bold cyan")
        for heading in result.headings:
            table.add_column(
                heading.label,
                style="bold" if heading.value_type == "url" else None,
                justify="left" if heading.value_type == "url" else "right",
            )
        table.add_column("Wasted", justify="right")

        for item in result.sorted_items():
            color = _waste_color(item.wasted_percent)
            table.add_row(
                _truncate_url(item.url),
                format_bytes(item.total_bytes),
                format_bytes(item.wasted_bytes),
                f"[{color}]{item.wasted_percent:.1f}%[/{color}]",
            )
            if item.multi is None:
                continue
            for source_url, total_bytes, wasted_bytes in item.multi.rows():
                table.add_row(
                    f"  [dim]↳ {_truncate_url(source_url)}[/dim]",
                    f"[dim]{format_bytes(total_bytes)}[/dim]",
                    f"[dim]{format_bytes(wasted_bytes)}[/dim]",
                    "",
                )

        self.console.print(table)
        if result.display_value:
            self.console.print(f"\n[bold]{result.display_value}[/bold]")


# Singleton instance for easy import
reporter = CLIReporter()

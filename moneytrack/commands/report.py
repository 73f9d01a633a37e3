"""Statistics and export commands."""

import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from moneytrack.commands.expenses import (
    count_label,
    format_amount,
    load_ledger_or_exit,
    parse_month_or_exit,
)
from moneytrack.config import Settings
from moneytrack.dates import format_month_display
from moneytrack.domain.ledger import ExpenseLedger
from moneytrack.domain.models import Month
from moneytrack.domain.statistics import MonthlyStatistics
from moneytrack.errors import ExportError
from moneytrack.export import export_expenses
from moneytrack.logging_utils import get_logger

console = Console()
logger = get_logger(__name__)


def render_statistics(stats: MonthlyStatistics) -> None:
    """Render a month's category breakdown.

    Args:
        stats: Statistics for a month with non-zero total.
    """
    table = Table(title=f"Expenses - {format_month_display(stats.month)}")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right")
    table.add_column("Share", justify="right")

    for share in stats.categories:
        style = None if share.total else "dim"
        table.add_row(share.category, format_amount(share.total), f"{share.percentage:.2f}%", style=style)

    console.print(table)
    console.print(f"\n[bold]Total expenses:[/bold] {format_amount(stats.total)}")


def show_statistics(ledger: ExpenseLedger, month: Month) -> bool:
    """Print statistics for a month.

    Returns:
        True if the month had data, False if it was empty.
    """
    stats = ledger.statistics_for_month(month)
    if stats is None:
        console.print(f"[yellow]No expenses recorded for {format_month_display(month)}[/yellow]")
        return False

    render_statistics(stats)
    return True


def run_export(ledger: ExpenseLedger, output_path: Path) -> bool:
    """Export the ledger and report the outcome.

    Failures are reported, never raised.

    Returns:
        True if a workbook was written.
    """
    try:
        months = export_expenses(ledger.all_expenses(), output_path)
    except ExportError as e:
        logger.warning("Export failed: %s", e)
        console.print(f"[red]Export failed: {escape(str(e))}[/red]")
        return False

    if not months:
        console.print("[yellow]No expenses to export[/yellow]")
        return False

    console.print(f"[green]✓[/green] Exported {count_label(len(months), 'month')} to {escape(str(output_path))}")
    return True


def stats_command(settings: Settings, month: str | None = None) -> None:
    """Show category statistics for a month (default: current month)."""
    month_typed = parse_month_or_exit(month)
    ledger = load_ledger_or_exit(settings.db_path)
    show_statistics(ledger, month_typed)


def export_command(settings: Settings, output: str | None = None) -> None:
    """Export all expenses to a workbook."""
    output_path = Path(output).expanduser() if output else settings.export_path
    ledger = load_ledger_or_exit(settings.db_path)
    exported = run_export(ledger, output_path)
    if not exported and len(ledger):
        sys.exit(1)

"""Expense commands (add, list, delete) and ledger load/save helpers."""

import math
import sys
from datetime import date
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from moneytrack.config import Settings
from moneytrack.dates import current_month, format_month_display, normalize_date, parse_month
from moneytrack.domain.ledger import AddOutcome, ExpenseLedger
from moneytrack.domain.models import CATEGORIES, Month, resolve_category
from moneytrack.errors import InvalidCategoryError, MalformedDateError, StorageError
from moneytrack.logging_utils import get_logger
from moneytrack.store.queries import load_expenses, save_expenses

console = Console()
logger = get_logger(__name__)


def parse_amount(amount_str: str) -> float | None:
    """Parse an amount typed by the user.

    Args:
        amount_str: Amount text; a comma is accepted as decimal separator.

    Returns:
        Amount as float, or None if invalid.
    """
    try:
        amount = float(amount_str.strip().replace(",", "."))
    except ValueError:
        return None
    if not math.isfinite(amount):
        return None
    return amount


def format_amount(amount: float) -> str:
    return f"{amount:,.2f}"


def count_label(count: int, noun: str) -> str:
    """Count with a singular or plural noun, e.g. "1 expense", "3 expenses"."""
    return f"{count} {noun if count == 1 else noun + 's'}"


def load_ledger_or_exit(db_path: Path) -> ExpenseLedger:
    """Load the ledger for a one-shot command, exiting on storage errors."""
    try:
        return ExpenseLedger(load_expenses(db_path))
    except StorageError as e:
        logger.warning("Load failed: %s", e)
        console.print(f"[red]Storage error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def save_ledger_or_exit(ledger: ExpenseLedger, db_path: Path) -> None:
    """Save the ledger for a one-shot command, exiting on storage errors."""
    try:
        save_expenses(ledger.all_expenses(), db_path)
    except StorageError as e:
        logger.warning("Save failed: %s", e)
        console.print(f"[red]Storage error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def parse_month_or_exit(month: str | None) -> Month:
    """Parse a --month style option, defaulting to the current month."""
    if not month:
        return current_month()
    try:
        return parse_month(month)
    except MalformedDateError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)


def add_command(
    settings: Settings,
    amount: float,
    category: str,
    date_text: str | None = None,
) -> None:
    """Add an expense.

    Args:
        settings: Resolved settings.
        amount: Expense amount. Zero cancels.
        category: Category label or 1-based index.
        date_text: Expense date in a day-first format. Defaults to today.
    """
    try:
        category_name = resolve_category(category)
    except InvalidCategoryError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        console.print(f"[dim]Categories: {', '.join(CATEGORIES)}[/dim]")
        sys.exit(1)

    try:
        day = normalize_date(date_text) if date_text else date.today()
    except MalformedDateError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        console.print("[dim]Accepted formats: DD.MM.YYYY, YYYY-MM-DD, DD/MM/YYYY, etc.[/dim]")
        sys.exit(1)

    ledger = load_ledger_or_exit(settings.db_path)
    outcome = ledger.add(amount, category_name, day)

    if outcome is AddOutcome.CANCELLED:
        console.print("[yellow]Amount is zero, nothing added[/yellow]")
        return

    save_ledger_or_exit(ledger, settings.db_path)
    console.print("[green]✓[/green] Expense added:")
    console.print(f"  Date: {day.isoformat()}")
    console.print(f"  Category: {category_name}")
    console.print(f"  Amount: {format_amount(amount)}")


def list_command(settings: Settings, month: str | None = None) -> None:
    """List expenses, optionally for one month."""
    ledger = load_ledger_or_exit(settings.db_path)

    if month:
        month_typed = parse_month_or_exit(month)
        expenses = ledger.expenses_for_month(month_typed)
        title = f"Expenses - {format_month_display(month_typed)} ({len(expenses)})"
    else:
        expenses = ledger.all_expenses()
        title = f"Expenses (showing all {len(expenses)})"

    if not expenses:
        console.print("[yellow]No expenses found[/yellow]")
        return

    table = Table(title=title)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right")

    for idx, expense in enumerate(expenses, 1):
        table.add_row(str(idx), expense.date.isoformat(), expense.category, format_amount(expense.amount))

    console.print(table)
    console.print(f"\n[bold]Total:[/bold] {format_amount(sum(expense.amount for expense in expenses))}")


def delete_command(settings: Settings, month: str, yes: bool = False) -> None:
    """Delete every expense of a month."""
    month_typed = parse_month_or_exit(month)
    label = format_month_display(month_typed)
    ledger = load_ledger_or_exit(settings.db_path)

    matching = len(ledger.expenses_for_month(month_typed))
    if matching == 0:
        console.print(f"[yellow]No expenses recorded for {label}[/yellow]")
        return

    if not yes and not typer.confirm(f"Delete {count_label(matching, 'expense')} for {label}?", default=False):
        console.print("[dim]Nothing deleted[/dim]")
        return

    removed = ledger.delete_month(month_typed)
    save_ledger_or_exit(ledger, settings.db_path)
    console.print(f"[green]✓[/green] Deleted {count_label(removed, 'expense')} for {label}")

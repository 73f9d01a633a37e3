"""Interactive numeric menu.

The menu owns all prompting and retry loops and calls the ledger only with
validated arguments. Entering 0 at any prompt returns to the menu. The
ledger is loaded once at start and saved once on exit; storage failures
are reported as warnings and never end the session early.
"""

from datetime import date
from pathlib import Path

import typer
from rich.columns import Columns
from rich.console import Console
from rich.markup import escape

from moneytrack.commands.expenses import count_label, format_amount, parse_amount
from moneytrack.commands.report import run_export, show_statistics
from moneytrack.config import Settings
from moneytrack.dates import format_month_display, parse_date, parse_month
from moneytrack.domain.ledger import AddOutcome, ExpenseLedger
from moneytrack.domain.models import CATEGORIES, CategoryName, Month, resolve_category
from moneytrack.errors import InvalidCategoryError, MalformedDateError, StorageError
from moneytrack.logging_utils import get_logger
from moneytrack.store.queries import load_expenses, save_expenses

console = Console()
logger = get_logger(__name__)

CANCEL = "0"

MENU_OPTIONS = (
    ("1", "Add expense"),
    ("2", "Show statistics"),
    ("3", "Delete month"),
    ("4", "Export to Excel"),
    ("5", "Exit"),
)


def back_to_menu() -> None:
    console.print("[dim]Back to menu[/dim]")


def open_ledger(db_path: Path) -> ExpenseLedger:
    """Load the stored ledger, starting empty if that fails."""
    try:
        expenses = load_expenses(db_path)
    except StorageError as e:
        logger.warning("Load failed: %s", e)
        console.print(f"[red]Could not load saved expenses: {escape(str(e))}[/red]")
        console.print("[yellow]Starting with an empty ledger[/yellow]")
        return ExpenseLedger()

    if expenses:
        console.print(f"[dim]Loaded {count_label(len(expenses), 'expense')}[/dim]")
    return ExpenseLedger(expenses)


def close_ledger(ledger: ExpenseLedger, db_path: Path) -> bool:
    """Save the ledger on exit. Returns False (after reporting) on failure."""
    try:
        save_expenses(ledger.all_expenses(), db_path)
    except StorageError as e:
        logger.warning("Save failed: %s", e)
        console.print(f"[red]Could not save expenses: {escape(str(e))}[/red]")
        return False

    console.print("[green]✓[/green] Expenses saved")
    return True


def prompt_amount() -> float:
    """Prompt until a number is entered. 0 means cancel."""
    while True:
        amount = parse_amount(typer.prompt("Amount (0 to cancel)", type=str))
        if amount is not None:
            return amount
        console.print("[red]Invalid amount, enter a number[/red]")


def prompt_category() -> CategoryName | None:
    """Show the numbered categories and read a choice.

    Returns:
        Chosen category, or None if cancelled or invalid.
    """
    console.print("[cyan]Categories:[/cyan]")
    category_items = [f"{idx}. {cat}" for idx, cat in enumerate(CATEGORIES, 1)]
    console.print(Columns(category_items, equal=True, expand=False, column_first=True))
    console.print(f"  {CANCEL}. Back to menu")

    choice = typer.prompt(f"Select category (1-{len(CATEGORIES)})", type=str).strip()
    if choice == CANCEL:
        back_to_menu()
        return None

    try:
        return resolve_category(choice)
    except InvalidCategoryError:
        console.print("[red]Invalid category[/red]")
        return None


def prompt_date() -> date | None:
    """Prompt until a valid DD.MM.YYYY date is entered. None if cancelled."""
    while True:
        text = typer.prompt("Date (DD.MM.YYYY, 0 to cancel)", type=str).strip()
        if text == CANCEL:
            back_to_menu()
            return None
        try:
            return parse_date(text)
        except MalformedDateError:
            console.print("[red]Invalid format or non-existent date, try again[/red]")


def prompt_month(action: str) -> Month | None:
    """Read a MM.YYYY period. None if cancelled or malformed."""
    text = typer.prompt(f"Month and year for {action} (MM.YYYY, 0 to cancel)", type=str).strip()
    if text == CANCEL:
        back_to_menu()
        return None

    try:
        return parse_month(text)
    except MalformedDateError:
        console.print("[red]Invalid month and year format[/red]")
        return None


def add_expense_interactive(ledger: ExpenseLedger) -> None:
    amount = prompt_amount()
    if amount == 0:
        back_to_menu()
        return

    category = prompt_category()
    if category is None:
        return

    day = prompt_date()
    if day is None:
        return

    if ledger.add(amount, category, day) is AddOutcome.ADDED:
        console.print(f"[green]✓[/green] Added {format_amount(amount)} for {category} on {day.strftime('%d.%m.%Y')}")


def show_statistics_interactive(ledger: ExpenseLedger) -> None:
    month = prompt_month("statistics")
    if month is not None:
        show_statistics(ledger, month)


def delete_month_interactive(ledger: ExpenseLedger) -> None:
    month = prompt_month("deletion")
    if month is None:
        return

    label = format_month_display(month)
    removed = ledger.delete_month(month)
    if removed:
        console.print(f"[green]✓[/green] Deleted {count_label(removed, 'expense')} for {label}")
    else:
        console.print(f"[yellow]No expenses recorded for {label}[/yellow]")


def show_menu() -> None:
    console.print("\n[bold cyan]Expense tracker[/bold cyan]")
    for key, label in MENU_OPTIONS:
        console.print(f"  {key}. {label}")


def run_menu_loop(ledger: ExpenseLedger, export_path: Path) -> None:
    """Dispatch menu choices until the user picks Exit."""
    while True:
        show_menu()
        choice = typer.prompt("Choose an option", type=str).strip()

        if choice == "1":
            add_expense_interactive(ledger)
        elif choice == "2":
            show_statistics_interactive(ledger)
        elif choice == "3":
            delete_month_interactive(ledger)
        elif choice == "4":
            run_export(ledger, export_path)
        elif choice == "5":
            return
        else:
            console.print("[red]Invalid choice, try again[/red]")


def menu_command(settings: Settings) -> None:
    """Run the interactive session: load, menu loop, save."""
    ledger = open_ledger(settings.db_path)

    try:
        run_menu_loop(ledger, settings.export_path)
    except typer.Abort:
        # Ctrl-C / end of input
        console.print()
    finally:
        close_ledger(ledger, settings.db_path)
        console.print("Goodbye!")

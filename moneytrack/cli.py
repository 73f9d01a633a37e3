"""CLI entry point for moneytrack."""

import typer
from rich.console import Console
from rich.markup import escape

from moneytrack.commands.admin import backup_command, init_command
from moneytrack.commands.expenses import add_command, delete_command, list_command
from moneytrack.commands.menu import menu_command
from moneytrack.commands.report import export_command, stats_command
from moneytrack.config import DEFAULT_LOG_LEVEL, Settings, load_settings
from moneytrack.errors import ConfigError
from moneytrack.logging_utils import configure_logging

console = Console()

app = typer.Typer(
    name="moneytrack",
    help="Personal expense tracker with monthly statistics and Excel export",
    add_completion=False,
)


def _settings(ctx: typer.Context) -> Settings:
    settings: Settings = ctx.obj
    return settings


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Personal expense tracker. Starts the interactive menu when no command is given."""
    if ctx.invoked_subcommand == "init":
        # init rewrites the config, so it must not depend on reading it
        configure_logging("DEBUG" if verbose else DEFAULT_LOG_LEVEL)
        return

    try:
        settings = load_settings()
    except ConfigError as e:
        console.print(f"[red]Config error: {escape(str(e))}[/red]", style="bold")
        raise typer.Exit(1)

    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings

    if ctx.invoked_subcommand is None:
        menu_command(settings)


@app.command()
def menu(ctx: typer.Context) -> None:
    """Start the interactive menu."""
    menu_command(_settings(ctx))


@app.command()
def add(
    ctx: typer.Context,
    amount: float,
    category: str = typer.Argument(..., help="Category name or number (1-10)"),
    date: str = typer.Option(None, "--date", "-d", help="Expense date, e.g. 05.03.2024 (default: today)"),
) -> None:
    """Add an expense."""
    add_command(_settings(ctx), amount, category, date)


@app.command(name="list")
def list_expenses(
    ctx: typer.Context,
    month: str = typer.Option(None, "--month", "-m", help="Only this month (MM.YYYY or YYYY-MM)"),
) -> None:
    """List your expenses."""
    list_command(_settings(ctx), month)


@app.command()
def stats(
    ctx: typer.Context,
    month: str = typer.Option(None, "--month", "-m", help="Month (MM.YYYY or YYYY-MM, default: current)"),
) -> None:
    """Show spending per category for a month."""
    stats_command(_settings(ctx), month)


@app.command()
def delete(
    ctx: typer.Context,
    month: str = typer.Argument(..., help="Month to delete (MM.YYYY or YYYY-MM)"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete every expense of a month."""
    delete_command(_settings(ctx), month, yes)


@app.command()
def export(
    ctx: typer.Context,
    output: str = typer.Option(None, "--output", "-o", help="Workbook path (default from config)"),
) -> None:
    """Export expenses to an Excel workbook, one sheet per month."""
    export_command(_settings(ctx), output)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Create the default configuration file."""
    init_command(force)


@app.command(name="backup")
def backup(
    ctx: typer.Context,
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: next to the database)"),
) -> None:
    """Backup your expenses and configuration files."""
    backup_command(_settings(ctx), output_dir)


if __name__ == "__main__":
    app()

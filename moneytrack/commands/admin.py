"""Admin commands for init and backup."""

import shutil
import sys
from datetime import datetime
from pathlib import Path

from rich.console import Console

from moneytrack.config import Settings, create_default_config, get_config_path
from moneytrack.store.schema import get_db_path, init_database

console = Console()


def init_command(force: bool = False) -> None:
    """Create the default config file and an empty database.

    Works from default paths so that a broken config can be replaced.
    """
    config_path = get_config_path()
    db_path = get_db_path()

    if config_path.exists() and not force:
        console.print("[red]Initialization failed:[/red]", style="bold")
        console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'moneytrack init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

        if not db_path.exists():
            init_database(db_path)
            console.print(f"[green]✓[/green] Database initialized at {db_path}")

    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("\n[green]Initialization complete![/green]", style="bold")


def backup_command(settings: Settings, output_dir: str | None = None) -> None:
    """Copy the database and config into a backup directory."""
    db_path = settings.db_path
    config_path = get_config_path()

    if not db_path.exists():
        console.print("[red]No saved expenses to back up[/red]", style="bold")
        sys.exit(1)

    if output_dir:
        backup_dir = Path(output_dir).expanduser()
    else:
        backup_dir = db_path.parent / "backups"

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    try:
        backup_dir.mkdir(parents=True, exist_ok=True)

        db_backup = backup_dir / f"expenses_{timestamp}.db"
        shutil.copy2(db_path, db_backup)
        console.print(f"[green]✓[/green] Database backed up to: {db_backup}")

        if config_path.exists():
            config_backup = backup_dir / f"config_{timestamp}.toml"
            shutil.copy2(config_path, config_backup)
            console.print(f"[green]✓[/green] Config backed up to: {config_backup}")

    except OSError as e:
        console.print(f"[red]Backup failed: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("\n[green]Backup complete![/green]", style="bold")

"""Load and save the full expense list."""

import sqlite3
from collections.abc import Sequence
from datetime import date
from pathlib import Path

from moneytrack.domain.models import CategoryName, Expense, Money
from moneytrack.errors import StorageError
from moneytrack.logging_utils import get_logger
from moneytrack.store.schema import SCHEMA_VERSION, get_db_path, get_schema_version, init_database

logger = get_logger(__name__)


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def _check_version(conn: sqlite3.Connection, db_path: Path) -> None:
    version = get_schema_version(conn)
    if version > SCHEMA_VERSION:
        raise StorageError(f"{db_path} was written by a newer version (schema {version}, supported {SCHEMA_VERSION})")


def _row_to_expense(row: sqlite3.Row) -> Expense:
    return Expense(
        amount=Money(float(row["amount"])),
        category=CategoryName(row["category"]),
        date=date.fromisoformat(row["date"]),
    )


def load_expenses(db_path: Path | None = None) -> list[Expense]:
    """Load every stored expense in its saved order.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        List of expenses. Empty if no database exists yet.

    Raises:
        StorageError: If the database cannot be read or holds malformed rows.
    """
    if db_path is None:
        db_path = get_db_path()

    if not db_path.exists():
        logger.debug("No database at %s, starting empty", db_path)
        return []

    conn = _connect(db_path)
    try:
        _check_version(conn, db_path)
        table = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'expenses'").fetchone()
        if table is None:
            return []
        rows = conn.execute("SELECT date, category, amount FROM expenses ORDER BY position").fetchall()
        expenses = [_row_to_expense(row) for row in rows]
    except sqlite3.Error as e:
        raise StorageError(f"Unable to read {db_path}: {e}") from e
    except (TypeError, ValueError) as e:
        raise StorageError(f"Malformed expense data in {db_path}: {e}") from e
    finally:
        conn.close()

    logger.debug("Loaded %d expenses from %s", len(expenses), db_path)
    return expenses


def save_expenses(expenses: Sequence[Expense], db_path: Path | None = None) -> None:
    """Replace the stored expenses with the given list.

    The replacement runs in a single transaction, so the previous contents
    survive any failure.

    Args:
        expenses: Expenses to store, in ledger order.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        StorageError: If the database cannot be written.
    """
    if db_path is None:
        db_path = get_db_path()

    try:
        init_database(db_path)
        conn = _connect(db_path)
    except (sqlite3.Error, OSError) as e:
        raise StorageError(f"Unable to open {db_path}: {e}") from e

    try:
        _check_version(conn, db_path)
        with conn:
            conn.execute("DELETE FROM expenses")
            conn.executemany(
                "INSERT INTO expenses (position, date, category, amount) VALUES (?, ?, ?, ?)",
                [
                    (position, expense.date.isoformat(), expense.category, float(expense.amount))
                    for position, expense in enumerate(expenses)
                ],
            )
    except sqlite3.Error as e:
        raise StorageError(f"Unable to write {db_path}: {e}") from e
    finally:
        conn.close()

    logger.debug("Saved %d expenses to %s", len(expenses), db_path)

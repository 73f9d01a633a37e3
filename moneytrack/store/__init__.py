"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from moneytrack.store.queries import load_expenses, save_expenses
from moneytrack.store.schema import SCHEMA_VERSION, database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "SCHEMA_VERSION",
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "load_expenses",
    "save_expenses",
]

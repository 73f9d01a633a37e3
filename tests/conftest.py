"""Shared fixtures."""

from datetime import date
from pathlib import Path

import pytest

from moneytrack.domain.models import CategoryName, Expense, Money


@pytest.fixture
def xdg_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG data/config dirs and the working directory at tmp_path."""
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def db_path(xdg_home: Path) -> Path:
    """Default database location inside the isolated XDG data dir."""
    return xdg_home / "data" / "moneytrack" / "expenses.db"


@pytest.fixture
def sample_expenses() -> list[Expense]:
    """Two March food expenses and one April transport expense."""
    return [
        Expense(Money(50.0), CategoryName("Food"), date(2024, 3, 5)),
        Expense(Money(30.0), CategoryName("Food"), date(2024, 3, 12)),
        Expense(Money(20.0), CategoryName("Transport"), date(2024, 4, 1)),
    ]

"""Tests for the one-shot CLI commands."""

from datetime import date
from pathlib import Path

from openpyxl import load_workbook
from typer.testing import CliRunner

from moneytrack.cli import app
from moneytrack.config import get_config_path, load_settings, save_config
from moneytrack.domain.models import CategoryName, Expense, Money
from moneytrack.store.queries import load_expenses, save_expenses

runner = CliRunner()


class TestAddCommand:
    """Tests for `moneytrack add`."""

    def test_add_by_name(self, db_path: Path) -> None:
        """Should persist the expense immediately."""
        result = runner.invoke(app, ["add", "12.5", "Food", "--date", "05.03.2024"])

        assert result.exit_code == 0
        assert "Expense added" in result.output
        assert load_expenses(db_path) == [Expense(Money(12.5), CategoryName("Food"), date(2024, 3, 5))]

    def test_add_by_index_with_iso_date(self, db_path: Path) -> None:
        """Should resolve category numbers and ISO dates."""
        result = runner.invoke(app, ["add", "800", "9", "--date", "2024-04-01"])

        assert result.exit_code == 0
        assert load_expenses(db_path) == [Expense(Money(800.0), CategoryName("Rent"), date(2024, 4, 1))]

    def test_add_defaults_to_today(self, db_path: Path) -> None:
        """Should date the expense today when no date is given."""
        runner.invoke(app, ["add", "3", "Other"])

        assert load_expenses(db_path)[0].date == date.today()

    def test_add_appends(self, db_path: Path, sample_expenses: list[Expense]) -> None:
        """Should keep existing expenses and add at the end."""
        save_expenses(sample_expenses, db_path)

        runner.invoke(app, ["add", "7", "Travel", "--date", "02.04.2024"])

        stored = load_expenses(db_path)
        assert stored[:3] == sample_expenses
        assert stored[3].category == "Travel"

    def test_invalid_category(self, db_path: Path) -> None:
        """Should exit with an error and store nothing."""
        result = runner.invoke(app, ["add", "5", "Groceries"])

        assert result.exit_code == 1
        assert "Unknown category" in result.output
        assert load_expenses(db_path) == []

    def test_invalid_date(self, db_path: Path) -> None:
        """Should exit with an error."""
        result = runner.invoke(app, ["add", "5", "Food", "--date", "someday"])

        assert result.exit_code == 1
        assert "Invalid date" in result.output

    def test_zero_amount(self, db_path: Path) -> None:
        """Should add nothing."""
        result = runner.invoke(app, ["add", "0", "Food"])

        assert result.exit_code == 0
        assert "nothing added" in result.output
        assert load_expenses(db_path) == []


class TestListCommand:
    """Tests for `moneytrack list`."""

    def test_list_all(self, db_path: Path, sample_expenses: list[Expense]) -> None:
        """Should show every expense and the total."""
        save_expenses(sample_expenses, db_path)

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "2024-03-05" in result.output
        assert "2024-04-01" in result.output
        assert "Total: 100.00" in result.output

    def test_list_month(self, db_path: Path, sample_expenses: list[Expense]) -> None:
        """Should filter by month."""
        save_expenses(sample_expenses, db_path)

        result = runner.invoke(app, ["list", "--month", "04.2024"])

        assert "2024-04-01" in result.output
        assert "2024-03-05" not in result.output
        assert "Total: 20.00" in result.output

    def test_list_empty(self, db_path: Path) -> None:
        """Should say there is nothing."""
        result = runner.invoke(app, ["list"])
        assert "No expenses found" in result.output


class TestStatsCommand:
    """Tests for `moneytrack stats`."""

    def test_stats_for_month(self, db_path: Path, sample_expenses: list[Expense]) -> None:
        """Should print the breakdown."""
        save_expenses(sample_expenses, db_path)

        result = runner.invoke(app, ["stats", "--month", "2024-03"])

        assert result.exit_code == 0
        assert "Total expenses: 80.00" in result.output

    def test_stats_empty_month(self, db_path: Path, sample_expenses: list[Expense]) -> None:
        """Should report the empty month."""
        save_expenses(sample_expenses, db_path)

        result = runner.invoke(app, ["stats", "--month", "05.2024"])

        assert result.exit_code == 0
        assert "No expenses recorded for May 2024" in result.output

    def test_stats_bad_month(self, db_path: Path) -> None:
        """Should exit with an error."""
        result = runner.invoke(app, ["stats", "--month", "13.2024"])
        assert result.exit_code == 1

    def test_storage_error(self, db_path: Path) -> None:
        """Should report unreadable data and exit 1."""
        db_path.parent.mkdir(parents=True)
        db_path.write_bytes(b"not a database" * 200)

        result = runner.invoke(app, ["stats", "--month", "03.2024"])

        assert result.exit_code == 1
        assert "Storage error" in result.output


class TestDeleteCommand:
    """Tests for `moneytrack delete`."""

    def test_delete_with_yes(self, db_path: Path, sample_expenses: list[Expense]) -> None:
        """Should delete without asking."""
        save_expenses(sample_expenses, db_path)

        result = runner.invoke(app, ["delete", "03.2024", "--yes"])

        assert result.exit_code == 0
        assert "Deleted 2 expenses for March 2024" in result.output
        assert load_expenses(db_path) == sample_expenses[2:]

    def test_delete_single_expense_wording(self, db_path: Path, sample_expenses: list[Expense]) -> None:
        """Should use the singular for one deleted expense."""
        save_expenses(sample_expenses, db_path)

        result = runner.invoke(app, ["delete", "04.2024", "--yes"])

        assert "Deleted 1 expense for April 2024" in result.output
        assert "1 expenses" not in result.output

    def test_delete_declined(self, db_path: Path, sample_expenses: list[Expense]) -> None:
        """Should keep everything when the prompt is declined."""
        save_expenses(sample_expenses, db_path)

        result = runner.invoke(app, ["delete", "2024-03"], input="n\n")

        assert "Nothing deleted" in result.output
        assert load_expenses(db_path) == sample_expenses

    def test_delete_confirmed(self, db_path: Path, sample_expenses: list[Expense]) -> None:
        """Should delete after confirmation."""
        save_expenses(sample_expenses, db_path)

        runner.invoke(app, ["delete", "2024-04"], input="y\n")

        assert load_expenses(db_path) == sample_expenses[:2]

    def test_delete_empty_month(self, db_path: Path, sample_expenses: list[Expense]) -> None:
        """Should not prompt when nothing matches."""
        save_expenses(sample_expenses, db_path)

        result = runner.invoke(app, ["delete", "01.2024"])

        assert result.exit_code == 0
        assert "No expenses recorded for January 2024" in result.output


class TestExportCommand:
    """Tests for `moneytrack export`."""

    def test_export_to_path(self, tmp_path: Path, db_path: Path, sample_expenses: list[Expense]) -> None:
        """Should write the workbook where asked."""
        save_expenses(sample_expenses, db_path)
        output = tmp_path / "out" / "report.xlsx"

        result = runner.invoke(app, ["export", "--output", str(output)])

        assert result.exit_code == 0
        assert load_workbook(output).sheetnames == ["2024-03", "2024-04"]

    def test_export_path_from_config(self, xdg_home: Path, db_path: Path, sample_expenses: list[Expense]) -> None:
        """Should use the configured export path."""
        save_expenses(sample_expenses, db_path)
        save_config({"export": {"path": str(xdg_home / "configured.xlsx")}}, get_config_path())

        result = runner.invoke(app, ["export"])

        assert result.exit_code == 0
        assert (xdg_home / "configured.xlsx").exists()

    def test_export_failure(self, tmp_path: Path, db_path: Path, sample_expenses: list[Expense]) -> None:
        """Should report the failure and exit 1."""
        save_expenses(sample_expenses, db_path)
        blocker = tmp_path / "blocker"
        blocker.write_text("file")

        result = runner.invoke(app, ["export", "--output", str(blocker / "x.xlsx")])

        assert result.exit_code == 1
        assert "Export failed" in result.output


class TestAdminCommands:
    """Tests for `moneytrack init` and `moneytrack backup`."""

    def test_init_creates_config_and_database(self, xdg_home: Path, db_path: Path) -> None:
        """Should write the default config and an empty database."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert get_config_path().exists()
        assert db_path.exists()

    def test_init_refuses_to_overwrite(self, xdg_home: Path) -> None:
        """Should require --force when config exists."""
        runner.invoke(app, ["init"])

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "already exists" in result.output
        assert runner.invoke(app, ["init", "--force"]).exit_code == 0

    def test_init_force_replaces_broken_config(self, xdg_home: Path) -> None:
        """Should rewrite a config that cannot be parsed."""
        config_path = get_config_path()
        config_path.parent.mkdir(parents=True)
        config_path.write_text("[logging\nlevel = 'LOUD'\n")

        result = runner.invoke(app, ["init", "--force"])

        assert result.exit_code == 0
        assert "Config error" not in result.output
        assert load_settings().log_level == "WARNING"
        assert runner.invoke(app, ["list"]).exit_code == 0

    def test_backup(self, tmp_path: Path, db_path: Path, sample_expenses: list[Expense]) -> None:
        """Should copy the database into the backup directory."""
        save_expenses(sample_expenses, db_path)
        backup_dir = tmp_path / "backups"

        result = runner.invoke(app, ["backup", "--output", str(backup_dir)])

        assert result.exit_code == 0
        backups = list(backup_dir.glob("expenses_*.db"))
        assert len(backups) == 1
        assert load_expenses(backups[0]) == sample_expenses

    def test_backup_without_data(self, db_path: Path) -> None:
        """Should fail when nothing was saved yet."""
        result = runner.invoke(app, ["backup"])
        assert result.exit_code == 1

    def test_invalid_config(self, xdg_home: Path) -> None:
        """Should report config errors and exit 1."""
        config_path = get_config_path()
        config_path.parent.mkdir(parents=True)
        config_path.write_text("[logging]\nlevel = 'LOUD'\n")

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 1
        assert "Config error" in result.output

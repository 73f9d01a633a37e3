"""Spreadsheet export of expenses, one worksheet per month."""

from collections.abc import Sequence
from pathlib import Path

import pandas as pd
from openpyxl.styles import Font

from moneytrack.domain.models import Expense, Month
from moneytrack.domain.statistics import group_by_month
from moneytrack.errors import ExportError
from moneytrack.logging_utils import get_logger

logger = get_logger(__name__)

EXPORT_COLUMNS = ["Date", "Category", "Amount"]
COLUMN_WIDTHS = {"A": 12, "B": 16, "C": 12}
BOLD = Font(bold=True)


def build_month_frame(expenses: Sequence[Expense]) -> pd.DataFrame:
    """Build the sheet contents for one month.

    Args:
        expenses: Expenses of a single month, in ledger order.

    Returns:
        DataFrame with Date (ISO text), Category and Amount (numeric) columns.
    """
    rows = [
        {"Date": expense.date.isoformat(), "Category": expense.category, "Amount": float(expense.amount)}
        for expense in expenses
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_expenses(expenses: Sequence[Expense], output_path: Path) -> list[Month]:
    """Write expenses to an .xlsx workbook grouped by month.

    Args:
        expenses: Read-only snapshot of the ledger.
        output_path: Workbook file to create or overwrite.

    Returns:
        Months written, one sheet each, oldest first. Empty if there was
        nothing to export, in which case no file is written.

    Raises:
        ExportError: If the workbook cannot be written.
    """
    groups = group_by_month(expenses)
    if not groups:
        return []

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            for month, month_expenses in groups.items():
                build_month_frame(month_expenses).to_excel(writer, sheet_name=month, index=False)

                sheet = writer.sheets[month]
                for column, width in COLUMN_WIDTHS.items():
                    sheet.column_dimensions[column].width = width
                for cell in sheet[1]:
                    cell.font = BOLD
                logger.debug("Wrote %d rows to sheet %s", len(month_expenses), month)
    except OSError as e:
        raise ExportError(f"Unable to write {output_path}: {e}") from e

    logger.info("Exported %d months to %s", len(groups), output_path)
    return list(groups)

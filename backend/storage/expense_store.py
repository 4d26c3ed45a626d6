"""
Expense Store Module
Persists confirmed expenses in a flat CSV file.
"""

import csv
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

CSV_HEADERS = ['id', 'date', 'type', 'amount', 'comment']


class ExpenseStoreError(Exception):
    """Custom exception for expense file read/write errors."""
    pass


class ExpenseStore:
    """
    Reads and writes the whole expense list at once.

    The store has no notion of keys; callers load all records, change the
    list and save it back.
    """

    def __init__(self, csv_path):
        self.csv_path = Path(csv_path)

    def ensure_exists(self) -> bool:
        """
        Create the CSV file with only the header row if it is missing.

        Returns:
            True if the file was created
        """
        if self.csv_path.exists():
            logger.info(f"Using existing CSV file: {self.csv_path}")
            return False

        logger.info(f"CSV file not found. Creating {self.csv_path} with headers.")
        try:
            self.csv_path.parent.mkdir(parents=True, exist_ok=True)
            self.csv_path.write_text(','.join(CSV_HEADERS) + '\n', encoding='utf-8')
        except OSError as e:
            logger.error(f"Failed to create CSV file {self.csv_path}: {e}")
            raise ExpenseStoreError(f"Failed to create CSV file: {self.csv_path}") from e
        return True

    def load(self) -> list[dict[str, Any]]:
        """
        Read all expenses.

        Returns:
            Expense dicts in file order, amount as float and comment as str

        Raises:
            ExpenseStoreError: If the file cannot be read
        """
        if self.ensure_exists():
            return []

        try:
            with self.csv_path.open(newline='', encoding='utf-8') as f:
                reader = csv.DictReader(f)
                if reader.fieldnames:
                    reader.fieldnames = [name.strip() for name in reader.fieldnames]
                expenses = [self._parse_row(row, line_num) for line_num, row in enumerate(reader, 2)]
        except (OSError, csv.Error) as e:
            logger.error(f"Error reading expenses from {self.csv_path}: {e}")
            raise ExpenseStoreError(f"Failed to read expenses: {e}") from e

        logger.info(f"Parsed {len(expenses)} rows")
        return expenses

    @staticmethod
    def _parse_row(row: dict, line_num: int) -> dict[str, Any]:
        expense = {
            key: (value or '').strip()
            for key, value in row.items()
            if key is not None
        }
        expense['amount'] = ExpenseStore._parse_amount(expense.get('amount', ''), line_num)
        expense['comment'] = expense.get('comment') or ''
        return expense

    @staticmethod
    def _parse_amount(raw: str, line_num: int) -> Optional[float]:
        try:
            return float(raw)
        except ValueError:
            logger.warning(f"Line {line_num}: amount '{raw}' is not a number")
            return None

    def save(self, expenses: list[dict[str, Any]]) -> None:
        """
        Replace the file contents with the given expenses.

        Rows go to a temporary file in the same directory which then replaces
        the CSV, so readers never see a half-written file.

        Raises:
            ExpenseStoreError: If the file cannot be written
        """
        tmp_path = None
        try:
            self.csv_path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                'w', newline='', encoding='utf-8', dir=self.csv_path.parent,
                prefix=f".{self.csv_path.name}.", suffix='.tmp', delete=False
            ) as f:
                tmp_path = f.name
                writer = csv.DictWriter(
                    f, fieldnames=CSV_HEADERS, extrasaction='ignore', lineterminator='\n'
                )
                writer.writeheader()
                writer.writerows(expenses)
            os.replace(tmp_path, self.csv_path)
        except OSError as e:
            logger.error(f"Error writing expenses to {self.csv_path}: {e}")
            if tmp_path is not None:
                Path(tmp_path).unlink(missing_ok=True)
            raise ExpenseStoreError(f"Failed to write expenses: {e}") from e

        logger.debug(f"Wrote {len(expenses)} expenses to {self.csv_path}")

"""
Expense Validator Module
Validates new expense payloads before they are stored.
"""

import logging
import math
import uuid
from typing import Any

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Missing required fields: date, type, amount"
POSITIVE_AMOUNT_MESSAGE = "Amount must be a positive number"


class ValidationError(Exception):
    """Custom exception for validation errors."""
    pass


class ExpenseValidator:
    """Validates expense payloads submitted by clients."""

    def validate(self, payload: dict[str, Any]) -> None:
        """
        Validate a new expense payload.

        Args:
            payload: Request body with date, type, amount and optional comment

        Raises:
            ValidationError: If a required field is missing or amount is invalid
        """
        if not isinstance(payload, dict):
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)

        if not payload.get("date") or not payload.get("type") or payload.get("amount") is None:
            logger.warning(f"Rejected expense, missing fields: {sorted(payload)}")
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)

        if not self._is_positive_number(payload["amount"]):
            logger.warning(f"Rejected expense, bad amount: {payload['amount']!r}")
            raise ValidationError(POSITIVE_AMOUNT_MESSAGE)

    @staticmethod
    def _is_positive_number(amount: Any) -> bool:
        # bool is an int subclass but not an amount
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            return False
        # NaN and infinity cannot be rendered back as JSON
        if not math.isfinite(amount):
            return False
        return amount > 0

    def build_expense(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Validate a payload and turn it into a stored expense record.

        Returns:
            Dict with a fresh id, date, type, float amount and comment
        """
        self.validate(payload)
        return {
            "id": str(uuid.uuid4()),
            "date": payload["date"],
            "type": payload["type"],
            "amount": float(payload["amount"]),
            "comment": payload.get("comment") or "",
        }


def build_expense(payload: dict[str, Any]) -> dict[str, Any]:
    """
    Convenience function to validate a payload and build an expense.

    Raises:
        ValidationError: If the payload is invalid
    """
    return ExpenseValidator().build_expense(payload)

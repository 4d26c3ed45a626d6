"""
Validators Module - Expense payload validation.
"""

from .expense_validator import (
    ExpenseValidator,
    build_expense,
    ValidationError
)

__all__ = [
    'ExpenseValidator',
    'build_expense',
    'ValidationError',
]

"""
Storage Module - CSV persistence of confirmed expenses.
"""

from .expense_store import (
    ExpenseStore,
    ExpenseStoreError,
    CSV_HEADERS
)

__all__ = [
    'ExpenseStore',
    'ExpenseStoreError',
    'CSV_HEADERS',
]

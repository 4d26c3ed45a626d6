"""
Extractors Module - Line classification and transaction reconstruction.
"""

from .statement_extractor import (
    Transaction,
    TransactionAccumulator,
    TransactionExtractor,
    extract_transactions_from_text
)

from .line_rules import (
    ClassifiedLine,
    LineKind,
    classify_line,
    normalize_line
)

__all__ = [
    'Transaction',
    'TransactionAccumulator',
    'TransactionExtractor',
    'extract_transactions_from_text',
    'ClassifiedLine',
    'LineKind',
    'classify_line',
    'normalize_line',
]

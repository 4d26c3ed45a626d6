"""
Statement Extractor Module
Rebuilds debit transactions from bank statement text, one line at a time.

Statement text has no record delimiters: a transaction starts at a line
beginning with a DD-MM-YYYY date, picks up an amount line and description
continuation lines, and is closed by a line holding only DR or CR. Only DR
transactions are kept.
"""

import logging
from dataclasses import dataclass, replace
from typing import NamedTuple, Optional
from .line_rules import ClassifiedLine, LineKind, classify_line, normalize_line

logger = logging.getLogger(__name__)

DEBIT = "DR"
CREDIT = "CR"


@dataclass(frozen=True)
class Transaction:
    """An emitted debit transaction."""
    date: str
    description: str
    amount: str
    type: str

    def to_dict(self) -> dict:
        """Convert transaction to dictionary."""
        return {
            "date": self.date,
            "description": self.description,
            "amount": self.amount,
            "type": self.type,
        }

    def __repr__(self) -> str:
        return f"Transaction(date={self.date}, desc={self.description[:30]}, amount={self.amount}, type={self.type})"


@dataclass(frozen=True)
class Draft:
    """A transaction under construction."""
    date: str
    description: str = ""
    amount: str = ""
    type: str = ""

    def to_transaction(self, transaction_type: Optional[str] = None) -> Transaction:
        return Transaction(
            date=self.date,
            description=self.description.strip(),
            amount=self.amount,
            type=transaction_type or self.type,
        )


class Step(NamedTuple):
    """Outcome of feeding one classified line to the accumulator."""
    draft: Optional[Draft]
    emitted: Optional[Transaction] = None
    discarded: Optional[Draft] = None
    dropped: bool = False


class TransactionAccumulator:
    """
    Two-state machine over classified lines.

    The state is the open draft, or None when idle. Both methods are pure:
    they take the current state and return the next one, so a fold over the
    lines needs no shared mutable state.
    """

    @staticmethod
    def advance(draft: Optional[Draft], line: ClassifiedLine) -> Step:
        if line.kind is LineKind.DATE:
            emitted = discarded = None
            if draft is not None:
                if draft.type == DEBIT:
                    emitted = draft.to_transaction()
                else:
                    discarded = draft
            return Step(Draft(date=line.value, description=line.remainder), emitted, discarded)

        if draft is None:
            # Nothing open: amount, type and free text lines are dropped
            return Step(None, dropped=True)

        if line.kind is LineKind.AMOUNT:
            return Step(replace(draft, amount=line.value))

        if line.kind is LineKind.TYPE:
            typed = replace(draft, type=line.value)
            if typed.type == DEBIT:
                return Step(None, emitted=typed.to_transaction())
            return Step(None, discarded=typed)

        return Step(replace(draft, description=f"{draft.description} {line.value}"))

    @staticmethod
    def finish(draft: Optional[Draft], treat_untyped_as_debit: bool = False) -> Step:
        """
        Close the machine at end of input.

        Every DR/CR line already closes its draft, so a draft still open here
        has no type and is discarded, unless treat_untyped_as_debit is set.
        """
        if draft is None:
            return Step(None)
        if draft.type == DEBIT:
            return Step(None, emitted=draft.to_transaction())
        if treat_untyped_as_debit and not draft.type:
            return Step(None, emitted=draft.to_transaction(DEBIT))
        return Step(None, discarded=draft)


class TransactionExtractor:
    """
    Extracts debit transactions from bank statement text.
    Each instance tracks statistics for the last extraction run.
    """

    def __init__(self, treat_untyped_trailing_as_debit: bool = False):
        """
        Initialize extractor.

        Args:
            treat_untyped_trailing_as_debit: Emit a draft left open at end of
                text as a debit instead of discarding it.
        """
        self.treat_untyped_trailing_as_debit = treat_untyped_trailing_as_debit
        self.stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> dict:
        return {
            "lines_processed": 0,
            "transactions_found": 0,
            "drafts_discarded": 0,
            "lines_dropped": 0,
        }

    def extract_transactions(self, text: str) -> list[Transaction]:
        """
        Extract all debit transactions from statement text.

        Args:
            text: Full bank statement text

        Returns:
            List of Transaction objects in statement order
        """
        self.stats = self._empty_stats()
        lines = text.strip().split('\n')
        logger.info(f"Starting extraction from {len(lines)} lines")

        transactions = []
        draft = None
        for line in lines:
            self.stats["lines_processed"] += 1
            step = TransactionAccumulator.advance(draft, classify_line(normalize_line(line)))
            draft = self._record(step, transactions)

        self._record(
            TransactionAccumulator.finish(draft, self.treat_untyped_trailing_as_debit),
            transactions,
        )

        logger.info(
            f"Extraction complete: {self.stats['transactions_found']} transactions found, "
            f"{self.stats['drafts_discarded']} drafts discarded, "
            f"{self.stats['lines_dropped']} lines outside a transaction"
        )
        return transactions

    def _record(self, step: Step, transactions: list[Transaction]) -> Optional[Draft]:
        """Apply the side effects of a step and return the next state."""
        if step.emitted is not None:
            transactions.append(step.emitted)
            self.stats["transactions_found"] += 1
            logger.debug(f"Emitted: {step.emitted}")
        if step.discarded is not None:
            self.stats["drafts_discarded"] += 1
            logger.debug(
                f"Discarded draft: date={step.discarded.date}, "
                f"type={step.discarded.type or '<none>'}"
            )
        if step.dropped:
            self.stats["lines_dropped"] += 1
        return step.draft

    def get_stats(self) -> dict:
        """Get extraction statistics."""
        return self.stats.copy()


def extract_transactions_from_text(
    text: str,
    treat_untyped_trailing_as_debit: bool = False
) -> list[Transaction]:
    """
    Convenience function to extract transactions from text.

    Args:
        text: Bank statement text
        treat_untyped_trailing_as_debit: See TransactionExtractor

    Returns:
        List of Transaction objects
    """
    extractor = TransactionExtractor(treat_untyped_trailing_as_debit)
    return extractor.extract_transactions(text)

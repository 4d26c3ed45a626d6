"""
Bank Statement Expense Tracker - Command Line Extraction
Loads a statement PDF and prints its debit transactions as JSON.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from config import config
from extractors.statement_extractor import Transaction, TransactionExtractor
from loaders.pdf_loader import ExtractionError, load_pdf
from logging_config import get_logger, setup_logging

logger = get_logger(__name__)


class StatementProcessor:
    """Runs the load -> extract pipeline for one statement."""

    def __init__(self, treat_untyped_trailing_as_debit: Optional[bool] = None):
        if treat_untyped_trailing_as_debit is None:
            treat_untyped_trailing_as_debit = config.TREAT_UNTYPED_TRAILING_AS_DEBIT
        self.extractor = TransactionExtractor(treat_untyped_trailing_as_debit)

    def process(self, pdf_path: str) -> list[Transaction]:
        """
        Extract debit transactions from a PDF statement.

        Raises:
            ExtractionError: If the PDF cannot be read
        """
        logger.info(f"Step 1: Loading PDF - {pdf_path}")
        text = load_pdf(pdf_path)

        logger.info("Step 2: Extracting transactions from text")
        transactions = self.extractor.extract_transactions(text)
        if not transactions:
            logger.warning("No transactions found in PDF. Check if PDF contains transaction data in expected format.")
        return transactions


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="statement-extract",
        description="Extract debit transactions from a bank statement PDF.",
    )
    parser.add_argument("pdf", help="Path to the statement PDF")
    parser.add_argument("--json-indent", type=int, default=2, help="JSON indentation (default: 2)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL or INFO)")
    parser.add_argument("--log-file", default=None, help="Log file name inside LOG_DIR (default: LOG_FILE)")
    parser.add_argument(
        "--treat-untyped-trailing-as-debit",
        action="store_true",
        default=None,
        help="Emit a transaction left open at the end of the text as a debit",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(log_level=args.log_level, log_file=args.log_file)

    if not Path(args.pdf).exists():
        logger.error(f"PDF file not found: {args.pdf}")
        print(f"Error: PDF file not found: {args.pdf}", file=sys.stderr)
        return 1

    processor = StatementProcessor(args.treat_untyped_trailing_as_debit)
    try:
        transactions = processor.process(args.pdf)
    except ExtractionError as e:
        logger.error(f"Failed to load PDF: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps([txn.to_dict() for txn in transactions], indent=args.json_indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())

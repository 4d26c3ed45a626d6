"""
Line Rules Module
Normalizes raw statement lines and classifies them into date, amount,
type (DR/CR) or continuation lines.
"""

import re
import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

# U+FEFF (byte order mark) is not \s in Python but leads some extracted text
WHITESPACE_RUN = re.compile(r'[\s\ufeff]+')

# ASCII digits only; PDF text may carry other Unicode digits that must not count
DATE_PATTERN = re.compile(r'[0-9]{2}-[0-9]{2}-[0-9]{4}')
AMOUNT_PATTERN = re.compile(r'[0-9]+(?:\.[0-9]{2})?')
TYPE_PATTERN = re.compile(r'DR|CR')

DATE_TOKEN_LENGTH = 10


class LineKind(Enum):
    """Kind of a classified statement line."""
    DATE = "date"
    AMOUNT = "amount"
    TYPE = "type"
    CONTINUATION = "continuation"


@dataclass(frozen=True)
class ClassifiedLine:
    """
    A normalized line tagged with its kind.

    `value` holds the date token, amount token, type token or the free text
    depending on `kind`. `remainder` is only set for date lines and carries
    the text following the date.
    """
    kind: LineKind
    value: str
    remainder: str = ""


def normalize_line(line: str) -> str:
    """Collapse every whitespace run to a single space and trim the result."""
    return WHITESPACE_RUN.sub(' ', line).strip()


def _date_line(line: str) -> ClassifiedLine:
    return ClassifiedLine(
        LineKind.DATE,
        line[:DATE_TOKEN_LENGTH],
        line[DATE_TOKEN_LENGTH:].strip(),
    )


def _amount_line(line: str) -> ClassifiedLine:
    return ClassifiedLine(LineKind.AMOUNT, line)


def _type_line(line: str) -> ClassifiedLine:
    return ClassifiedLine(LineKind.TYPE, line)


# Evaluated top to bottom, first match wins. The date check must stay first so a
# date-shaped line is never mistaken for anything else.
LINE_RULES = (
    (DATE_PATTERN.match, _date_line),
    (AMOUNT_PATTERN.fullmatch, _amount_line),
    (TYPE_PATTERN.fullmatch, _type_line),
)


def classify_line(line: str) -> ClassifiedLine:
    """
    Classify a normalized line.

    Args:
        line: Line already passed through normalize_line

    Returns:
        ClassifiedLine; anything matching no rule is a continuation line
    """
    for matches, build in LINE_RULES:
        if matches(line):
            return build(line)
    return ClassifiedLine(LineKind.CONTINUATION, line)

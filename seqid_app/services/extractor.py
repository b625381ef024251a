"""
Identifier extraction.

An identifier is a run of ASCII digits of length exactly 11 or exactly 15
with no digit directly before or after it. A longer run (12 digits, 16
digits, ...) yields no match at all, never a truncated one.
"""

import re
from typing import List, NamedTuple

ELEVEN_DIGITS = 11
FIFTEEN_DIGITS = 15
IDENTIFIER_LENGTHS = (ELEVEN_DIGITS, FIFTEEN_DIGITS)

# [0-9] rather than \d: \d also matches non-ASCII digits in str patterns
_DIGIT_RUN = re.compile(r"[0-9]+")


class ExtractionResult(NamedTuple):
    eleven_digit: List[str]
    fifteen_digit: List[str]

    @property
    def total(self) -> int:
        return len(self.eleven_digit) + len(self.fifteen_digit)


def extract(text: str) -> ExtractionResult:
    """
    Scan text left to right and collect 11 and 15 digit identifiers.
    
    Order of occurrence is preserved. Repeats are kept; the caller
    collapses them before the sequential check.
    """
    eleven: List[str] = []
    fifteen: List[str] = []
    
    # Maximal runs are already bounded by non-digits or the string edges
    for match in _DIGIT_RUN.finditer(text):
        run = match.group()
        if len(run) == ELEVEN_DIGITS:
            eleven.append(run)
        elif len(run) == FIFTEEN_DIGITS:
            fifteen.append(run)
    
    return ExtractionResult(eleven_digit=eleven, fifteen_digit=fifteen)


def is_valid_identifier(value: str) -> bool:
    """True for a string of ASCII digits of length 11 or 15"""
    return (
        isinstance(value, str)
        and len(value) in IDENTIFIER_LENGTHS
        and all("0" <= ch <= "9" for ch in value)
    )

"""
Sequential identifier filter.

Identifiers are compared as Python ints (arbitrary precision), so 15 digit
values near 999,999,999,999,999 are exact. Length classes are never mixed.
"""

from typing import Iterable, List

from seqid_app.services.extractor import ExtractionResult


def filter_sequential(ids: Iterable[str]) -> List[str]:
    """
    Keep identifiers that have a neighbour at numeric distance exactly 1.
    
    The input must be a single length class. Exact repeats are collapsed
    first. The output is in ascending numeric order, not input order.
    
    Examples:
        >>> filter_sequential(["12345678902", "99999999999", "12345678901"])
        ['12345678901', '12345678902']
    """
    ordered = sorted(set(ids), key=int)
    values = [int(identifier) for identifier in ordered]
    
    sequential = []
    for i, value in enumerate(values):
        has_lower = i > 0 and values[i - 1] == value - 1
        has_upper = i < len(values) - 1 and values[i + 1] == value + 1
        if has_lower or has_upper:
            sequential.append(ordered[i])
    
    return sequential


def find_sequential(extraction: ExtractionResult) -> List[str]:
    """Filter each length class on its own; 11 digit results come first"""
    return (
        filter_sequential(extraction.eleven_digit)
        + filter_sequential(extraction.fifteen_digit)
    )

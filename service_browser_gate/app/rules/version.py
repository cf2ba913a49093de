"""
Dotted version comparison for browser rules.
"""

from enum import Enum
from itertools import zip_longest


class VersionComparison(str, Enum):
    """Outcome of comparing two version strings."""
    LESS = "less"
    EQUAL = "equal"
    GREATER = "greater"


def _compare_segments(left: str, right: str) -> int:
    """Compare one pair of segments, numerically when both are integers."""
    if left.isdecimal() and right.isdecimal():
        a, b = int(left), int(right)
    else:
        a, b = left, right

    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def compare_versions(a: str, b: str) -> VersionComparison:
    """Compare two dotted version strings segment by segment.

    The shorter version is padded with ``"0"`` segments, so ``"7"`` equals
    ``"7.0.0"``. Segments that are not both numeric are compared as
    strings, which keeps the ordering total for values like ``"10.0b2"``.

    >>> compare_versions("7.1.1", "7.1")
    <VersionComparison.GREATER: 'greater'>
    """
    for left, right in zip_longest(a.split("."), b.split("."), fillvalue="0"):
        result = _compare_segments(left, right)
        if result < 0:
            return VersionComparison.LESS
        if result > 0:
            return VersionComparison.GREATER
    return VersionComparison.EQUAL


def version_gte(a: str, b: str) -> bool:
    """Return True when version ``a`` meets the minimum ``b``."""
    return compare_versions(a, b) != VersionComparison.LESS

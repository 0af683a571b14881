from __future__ import annotations

"""
Numeric formatting helpers.

Rounding follows the half-up rule applied to the exact binary value of the
float, so 1.25 rounds to 1.3 while 1.15 (stored as 1.149999...) rounds to 1.1.
"""

from decimal import ROUND_HALF_UP, Decimal

from modsize.domain.constants import BYTES_PER_MB


def round_half_up(value: float, digits: int) -> float:
    """Round a non-negative float to a fixed number of decimals, ties upward."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def bytes_to_mb(size: int, digits: int = 1) -> float:
    """Convert a byte count to megabytes rounded to the given decimals."""
    return round_half_up(size / BYTES_PER_MB, digits)


def percentage_of(size: int, total: int) -> float:
    """Share of 'total' taken by 'size', as a percentage with one decimal."""
    if total <= 0:
        return 0.0
    return round_half_up((size / total) * 100, 1)


def format_fixed(value: float, digits: int) -> str:
    """Render an already-rounded value with a fixed number of decimals."""
    return f"{value:.{digits}f}"

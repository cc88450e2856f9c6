"""Cents rounding and percentage formatting shared by the calculators."""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def to_cents(value: float) -> int:
    """Round a float amount to integer cents, ties away from zero."""
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def format_pct(rate: float) -> str:
    """0.06 -> '6.00%'."""
    return f"{rate * 100:.2f}%"

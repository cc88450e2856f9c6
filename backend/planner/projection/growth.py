"""Interest and property appreciation calculators.

Both return ``(cents, CalculationStep)``; the step is always present so the
caller can show how every growth figure was reached.
"""
from __future__ import annotations

from typing import Optional

from planner.models.projection import CalculationStep
from planner.projection.rounding import format_pct, to_cents


def compound_interest(
    principal: float,
    annual_rate: Optional[float],
    compounds_per_year: int = 12,
    months: int = 1,
) -> tuple[int, CalculationStep]:
    """Interest earned (or charged, for a negative principal) over ``months``.

    A = P * (1 + r/n)^(n*t),  t = months / 12,  interest = A - P
    """
    if not annual_rate:
        return 0, CalculationStep(
            description="Compound Interest Calculation",
            formula="No rate set",
            values={"Principal (P)": principal, "Annual Rate (r)": format_pct(0.0)},
            result=0,
        )

    n = compounds_per_year or 12
    periodic_rate = annual_rate / n
    years = months / 12
    periods = n * years
    compounded = principal * (1 + periodic_rate) ** periods
    interest = to_cents(compounded - principal)

    return interest, CalculationStep(
        description="Compound Interest Calculation",
        formula="A = P × (1 + r/n)^(n×t), Interest = A - P",
        values={
            "Principal (P)": principal,
            "Annual Rate (r)": format_pct(annual_rate),
            "Compounds per year (n)": n,
            "Time in years (t)": round(years, 6),
            "Periodic Rate (r/n)": round(periodic_rate, 8),
            "Total periods (n×t)": round(periods, 6),
            "Compounded Amount (A)": round(compounded, 2),
        },
        result=interest,
    )


def property_appreciation(
    current_value: int,
    annual_rate: Optional[float],
    months: int = 1,
) -> tuple[int, CalculationStep]:
    """Appreciation over ``months``, always compounded monthly at ``rate / 12``."""
    if not annual_rate:
        return 0, CalculationStep(
            description="Property Appreciation Calculation",
            formula="No rate set",
            values={"Current Value (V)": current_value, "Annual Rate (r)": format_pct(0.0)},
            result=0,
        )

    monthly_rate = annual_rate / 12
    appreciated = current_value * (1 + monthly_rate) ** months
    gain = to_cents(appreciated - current_value)

    return gain, CalculationStep(
        description="Property Appreciation Calculation",
        formula="A = V × (1 + r/12)^months, Appreciation = A - V",
        values={
            "Current Value (V)": current_value,
            "Annual Rate (r)": format_pct(annual_rate),
            "Monthly Rate (r/12)": round(monthly_rate, 8),
            "Months": months,
            "Appreciated Value (A)": round(appreciated, 2),
        },
        result=gain,
    )

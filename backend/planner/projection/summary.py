"""Summary builder: whole-horizon statistics and per-month calculation summaries."""
from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Optional

from planner.models.account import Account
from planner.models.projection import (
    CalculationStep,
    MonthlyCalculationSummary,
    MonthlyProjection,
    ProjectionSummary,
)


def savings_rate(total_income: int, total_expenses: int) -> float:
    if total_income <= 0:
        return 0.0
    return (total_income - total_expenses) / total_income


def annualized_return(start: int, end: int, months: int) -> Optional[float]:
    """Net worth CAGR; None when either end is non-positive or nothing was projected."""
    if months <= 0 or start <= 0 or end <= 0:
        return None
    return (end / start) ** (12 / months) - 1


def build_summary(
    start_net_worth: int,
    months: list[MonthlyProjection],
    projection_date: datetime,
) -> ProjectionSummary:
    """Summarize a run.

    The average savings rate is a plain mean over months: a month without
    income contributes a rate of 0 and pulls the average down.
    """
    end_net_worth = months[-1].total_net_worth if months else start_net_worth
    average = sum(m.savings_rate for m in months) / len(months) if months else 0.0
    cagr = annualized_return(start_net_worth, end_net_worth, len(months))

    return ProjectionSummary(
        start_net_worth=start_net_worth,
        end_net_worth=end_net_worth,
        total_return=end_net_worth - start_net_worth,
        average_savings_rate=average,
        months_projected=len(months),
        annualized_return=round(cagr, 6) if cagr is not None else None,
        projection_date=projection_date,
    )


def monthly_calculation_summary(
    accounts: list[Account],
    balances: Mapping[str, int],
    total_income: int,
    total_expenses: int,
    total_net_worth: int,
    rate: float,
) -> MonthlyCalculationSummary:
    assets = sum(balances.get(a.id, 0) for a in accounts if not a.is_liability)
    liabilities = sum(abs(balances.get(a.id, 0)) for a in accounts if a.is_liability)

    return MonthlyCalculationSummary(
        total_income_calculation=CalculationStep(
            description="Total Income",
            formula="Sum of all income cash flows",
            values={"Total Income": total_income},
            result=total_income,
        ),
        total_expenses_calculation=CalculationStep(
            description="Total Expenses",
            formula="Sum of all expense cash flows",
            values={"Total Expenses": total_expenses},
            result=total_expenses,
        ),
        net_worth_calculation=CalculationStep(
            description="Net Worth",
            formula="Sum of assets minus liabilities",
            values={"Asset Balances": assets, "Liability Balances": liabilities},
            result=total_net_worth,
        ),
        savings_rate_calculation=CalculationStep(
            description="Savings Rate",
            formula="Savings Rate = (Income - Expenses) / Income",
            values={
                "Total Income": total_income,
                "Total Expenses": total_expenses,
                "Net Savings": total_income - total_expenses,
            },
            result=rate,
        ),
    )

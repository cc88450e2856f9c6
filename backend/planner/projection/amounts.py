"""Amount resolver: effective cents for a cash flow in a given month.

A cash flow's amount is either its base amount grown by annual indexation, or
a percentage of another value resolved for the same month:

  - another cash flow's indexed amount (never its percentage-derived amount)
  - an account's balance at the start of the month (absolute for liabilities)

Dependencies always read an already-known layer, so cycles need no special
handling: a flow that references itself or a dependent flow just sees that
flow's indexed base amount.
"""
from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Optional

from planner.models.account import Account
from planner.models.cashflow import Cashflow, SourceType
from planner.models.projection import CalculationStep
from planner.projection.recurrence import months_between
from planner.projection.rounding import format_pct, to_cents


def indexed_amount(cashflow: Cashflow, months_from_start: int) -> tuple[int, Optional[CalculationStep]]:
    """Base amount grown by ``(1 + pct) ^ (months / 12)``.

    Months before the flow's start are treated as zero elapsed months.
    """
    base = cashflow.amount_cents
    pct = cashflow.recurrence.annual_indexation_pct
    if not pct:
        return base, None

    years = max(months_from_start, 0) / 12
    factor = (1 + pct) ** years
    amount = to_cents(base * factor)
    if months_from_start <= 0:
        return amount, None

    step = CalculationStep(
        description=f"Annual Indexation: {cashflow.description or cashflow.id}",
        formula="Indexed Amount = Base Amount × (1 + rate)^years",
        values={
            "Base Amount": base,
            "Indexation Rate": format_pct(pct),
            "Years Elapsed": round(years, 4),
            "Indexation Factor": round(factor, 6),
        },
        result=amount,
    )
    return amount, step


def effective_amount(
    cashflow: Cashflow,
    cashflows_by_id: Mapping[str, Cashflow],
    accounts_by_id: Mapping[str, Account],
    balances: Mapping[str, int],
    month: date,
) -> tuple[int, Optional[CalculationStep]]:
    """Resolve the amount ``cashflow`` moves in ``month``, with provenance.

    Args:
        cashflow: The flow being resolved.
        cashflows_by_id: Every flow in the run, for percentage-of-cashflow lookups.
        accounts_by_id: Every account in the run, for percentage-of-account lookups.
        balances: Account balances at the start of ``month``.
        month: Any date inside the simulated month.

    Returns:
        ``(cents, step)`` where ``step`` is None when nothing worth explaining
        happened. An unresolvable source yields ``(0, None)``.
    """
    dependency = cashflow.percentage_of
    if dependency is None:
        return indexed_amount(cashflow, months_between(cashflow.recurrence.start_date, month))

    if dependency.source_type == SourceType.cashflow:
        source = cashflows_by_id.get(dependency.source_id)
        if source is None:
            return 0, None
        source_amount, _ = indexed_amount(source, months_between(source.recurrence.start_date, month))
        amount = to_cents(source_amount * dependency.percentage)
        step = CalculationStep(
            description=f"Percentage of {source.description or source.id}",
            formula="Amount = Source Amount × Percentage",
            values={
                "Source Amount": source_amount,
                "Percentage": format_pct(dependency.percentage),
            },
            result=amount,
        )
        return amount, step

    account = accounts_by_id.get(dependency.source_id)
    if account is None:
        return 0, None
    balance = balances.get(account.id, 0)
    if account.is_liability:
        balance = abs(balance)
    amount = to_cents(balance * dependency.percentage)
    step = CalculationStep(
        description=f"Percentage of {account.name} balance",
        formula="Amount = Account Balance × Percentage",
        values={
            "Account Balance": balance,
            "Percentage": format_pct(dependency.percentage),
            "Account Type": account.kind.value,
        },
        result=amount,
    )
    return amount, step

"""Deterministic projection engine.

Simulates account balances month by month from a snapshot of accounts and
recurring cash flows, producing a ProjectionResult with per-account detail,
calculation provenance, payoff projections and a summary.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Optional

from planner.models.account import Account, AccountKind
from planner.models.cashflow import Cashflow
from planner.models.projection import (
    AccountMonth,
    CalculationDetails,
    CalculationStep,
    MonthlyProjection,
    ProjectionResult,
)
from planner.models.scenario import Scenario
from planner.projection.amounts import effective_amount
from planner.projection.growth import compound_interest, property_appreciation
from planner.projection.payoff import build_payoff_projections, detect_payoff_events, net_worth
from planner.projection.recurrence import add_months, is_active, month_label
from planner.projection.scenarios import apply_scenario
from planner.projection.summary import build_summary, monthly_calculation_summary, savings_rate

ENGINE_VERSION = "1.0.0"

logger = logging.getLogger(__name__)


def _simulate_account(
    account: Account,
    owned: list[Cashflow],
    incoming: list[Cashflow],
    cashflows_by_id: Mapping[str, Cashflow],
    accounts_by_id: Mapping[str, Account],
    opening_balances: Mapping[str, int],
    month: date,
) -> AccountMonth:
    """One account, one month: cash flows, then interest and appreciation."""
    opening = opening_balances.get(account.id, 0)
    income = 0
    expenses = 0
    transfers_in = 0
    cashflow_steps: list[CalculationStep] = []

    def resolve(cf: Cashflow) -> int:
        amount, step = effective_amount(cf, cashflows_by_id, accounts_by_id, opening_balances, month)
        if step is not None:
            cashflow_steps.append(step)
        return amount

    for cf in owned:
        if not is_active(cf, month):
            continue
        amount = resolve(cf)
        # Transfers always leave the owner, whatever its kind
        if account.kind == AccountKind.income and not cf.is_transfer:
            income += amount
        else:
            expenses += amount

    for cf in incoming:
        if not is_active(cf, month):
            continue
        transfers_in += resolve(cf)

    net_cashflow = income - expenses + transfers_in

    details = CalculationDetails()
    interest = 0
    if account.annual_interest_rate is not None:
        # Interest accrues on the mid-month average balance
        principal = opening + net_cashflow / 2
        interest, details.interest_calculation = compound_interest(
            principal, account.annual_interest_rate, account.compounds_per_year, 1,
        )

    appreciation = 0
    if account.is_property and account.property_appreciation_rate:
        appreciation, details.appreciation_calculation = property_appreciation(
            opening, account.property_appreciation_rate, 1,
        )

    details.cashflow_calculations = cashflow_steps
    has_details = (
        details.interest_calculation is not None
        or details.appreciation_calculation is not None
        or bool(cashflow_steps)
    )

    return AccountMonth(
        opening_balance=opening,
        income=income,
        expenses=expenses,
        transfers_in=transfers_in,
        net_cashflow=net_cashflow,
        interest_earned=interest + appreciation,
        closing_balance=opening + net_cashflow + interest + appreciation,
        calculation_details=details if has_details else None,
    )


def project_finances(
    accounts: list[Account],
    cashflows: list[Cashflow],
    months_to_project: int,
    scenario: Optional[Scenario] = None,
    now: Optional[datetime] = None,
) -> ProjectionResult:
    """Project balances for ``months_to_project`` months starting with the current month.

    Pure with respect to its inputs: accounts, cash flows and scenario are never
    modified, and the same inputs with the same ``now`` give identical results.

    Args:
        accounts: Accounts in display order; also the per-month processing order.
        cashflows: Every cash flow, including transfers and percentage-based flows.
        months_to_project: Horizon length; 0 yields an empty month list.
        scenario: Optional spend adjustment applied once before simulation.
        now: Anchor for the first projected month. Taken from the clock once
            per run when omitted.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    start = now.date()

    adjusted_accounts, adjusted_cashflows = apply_scenario(accounts, cashflows, scenario)

    accounts_by_id = {a.id: a for a in adjusted_accounts}
    cashflows_by_id = {cf.id: cf for cf in adjusted_cashflows}
    owned_by_account: dict[str, list[Cashflow]] = {a.id: [] for a in adjusted_accounts}
    incoming_by_account: dict[str, list[Cashflow]] = {a.id: [] for a in adjusted_accounts}
    for cf in adjusted_cashflows:
        if cf.account_id in owned_by_account:
            owned_by_account[cf.account_id].append(cf)
        if cf.target_account_id in incoming_by_account:
            incoming_by_account[cf.target_account_id].append(cf)

    balances = {a.id: a.opening_balance_cents for a in adjusted_accounts}
    start_net_worth = net_worth(balances, adjusted_accounts)

    months: list[MonthlyProjection] = []
    for month_index in range(months_to_project):
        month = add_months(start, month_index)
        opening_balances = dict(balances)

        month_accounts: dict[str, AccountMonth] = {}
        total_income = 0
        total_expenses = 0
        for account in adjusted_accounts:
            data = _simulate_account(
                account,
                owned_by_account[account.id],
                incoming_by_account[account.id],
                cashflows_by_id,
                accounts_by_id,
                opening_balances,
                month,
            )
            month_accounts[account.id] = data
            balances[account.id] = data.closing_balance
            total_income += data.income
            total_expenses += data.expenses

        total_net_worth = net_worth(balances, adjusted_accounts)
        rate = savings_rate(total_income, total_expenses)
        payoff_events = detect_payoff_events(adjusted_accounts, month_accounts)

        months.append(MonthlyProjection(
            month=month_label(month),
            month_index=month_index,
            accounts=month_accounts,
            total_net_worth=total_net_worth,
            total_income=total_income,
            total_expenses=total_expenses,
            savings_rate=rate,
            accounts_payoff_events=payoff_events or None,
            calculation_summary=monthly_calculation_summary(
                adjusted_accounts, balances, total_income, total_expenses, total_net_worth, rate,
            ),
        ))
        logger.debug(
            "Month %s: net worth %d, income %d, expenses %d",
            month_label(month), total_net_worth, total_income, total_expenses,
        )

    return ProjectionResult(
        months=months,
        summary=build_summary(start_net_worth, months, now),
        payoff_projections=build_payoff_projections(adjusted_accounts, months),
    )

"""Net worth and liability payoff detection."""
from __future__ import annotations

from collections.abc import Mapping

from planner.models.account import Account
from planner.models.projection import AccountMonth, MonthlyProjection, PayoffEvent, PayoffProjection

# A liability counts as paid off once its balance is within 10.00 of zero
PAYOFF_TOLERANCE_CENTS = 1000


def net_worth(balances: Mapping[str, int], accounts: list[Account]) -> int:
    """Sum of asset balances minus the magnitude of every liability balance."""
    total = 0
    for account in accounts:
        balance = balances.get(account.id, 0)
        if account.is_liability:
            total -= abs(balance)
        else:
            total += balance
    return total


def is_paid_off(balance: int) -> bool:
    return balance >= -PAYOFF_TOLERANCE_CENTS


def detect_payoff_events(
    accounts: list[Account],
    month_accounts: Mapping[str, AccountMonth],
) -> list[PayoffEvent]:
    """Liabilities whose balance entered the payoff band this month.

    A balance that opens the month already inside the band is not reported
    again.
    """
    events: list[PayoffEvent] = []
    for account in accounts:
        if not account.is_liability:
            continue
        data = month_accounts.get(account.id)
        if data is None:
            continue
        if not is_paid_off(data.opening_balance) and is_paid_off(data.closing_balance):
            events.append(PayoffEvent(
                account_id=account.id,
                account_name=account.name,
                final_balance=data.closing_balance,
            ))
    return events


def build_payoff_projections(
    accounts: list[Account],
    months: list[MonthlyProjection],
) -> list[PayoffProjection]:
    """One projection per liability that starts negative and is paid off in the horizon.

    Interest and payment totals run up to and including the payoff month.
    Liabilities still owing at the end of the horizon are left out.
    """
    projections: list[PayoffProjection] = []
    for account in accounts:
        if not account.is_liability or account.opening_balance_cents >= 0:
            continue

        total_interest = 0
        total_payments = 0
        for month in months:
            data = month.accounts.get(account.id)
            if data is None:
                continue
            total_interest += abs(data.interest_earned)
            total_payments += data.transfers_in
            if is_paid_off(data.closing_balance):
                projections.append(PayoffProjection(
                    account_id=account.id,
                    account_name=account.name,
                    current_balance=account.opening_balance_cents,
                    projected_payoff_month=month.month,
                    months_to_payoff=month.month_index,
                    total_interest_to_pay=total_interest,
                    total_payments=total_payments,
                ))
                break
    return projections

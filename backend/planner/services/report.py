"""Tabular export of a projection: one row per projected month."""
from __future__ import annotations

import pandas as pd

from planner.models.projection import ProjectionResult

_AGGREGATE_COLUMNS = [
    "month",
    "total_net_worth",
    "total_income",
    "total_expenses",
    "savings_rate",
    "payoffs",
]


def projection_to_frame(result: ProjectionResult, in_major_units: bool = False) -> pd.DataFrame:
    """Flatten monthly aggregates plus each account's closing balance.

    Account columns are named ``closing:<account_id>``. Money columns stay in
    cents unless ``in_major_units`` is set.
    """
    rows = []
    for m in result.months:
        row = {
            "month": m.month,
            "total_net_worth": m.total_net_worth,
            "total_income": m.total_income,
            "total_expenses": m.total_expenses,
            "savings_rate": m.savings_rate,
            "payoffs": ", ".join(e.account_name for e in m.accounts_payoff_events or []),
        }
        for account_id, data in m.accounts.items():
            row[f"closing:{account_id}"] = data.closing_balance
        rows.append(row)

    df = pd.DataFrame(rows)
    if df.empty:
        return pd.DataFrame(columns=_AGGREGATE_COLUMNS)

    if in_major_units:
        money_cols = ["total_net_worth", "total_income", "total_expenses"] + [
            c for c in df.columns if c.startswith("closing:")
        ]
        df[money_cols] = df[money_cols] / 100.0
    return df

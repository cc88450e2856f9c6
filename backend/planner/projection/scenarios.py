"""Scenario adjustments and the preset scenario registry.

A scenario scales qualifying spending cash flows once, before the month loop
starts; it is never re-evaluated per month.
"""
from __future__ import annotations

from typing import Optional

from planner.models.account import Account, AccountKind
from planner.models.cashflow import Cashflow
from planner.models.scenario import Scenario, ScenarioScope
from planner.projection.rounding import to_cents

DISCRETIONARY_KEYWORDS = (
    "entertainment",
    "dining",
    "clothing",
    "shopping",
    "hobby",
    "vacation",
    "leisure",
    "personal",
    "discretionary",
)


def is_discretionary(cashflow: Cashflow) -> bool:
    """Keyword match against the flow's description, case-insensitive."""
    description = (cashflow.description or "").lower()
    return any(keyword in description for keyword in DISCRETIONARY_KEYWORDS)


def apply_scenario(
    accounts: list[Account],
    cashflows: list[Cashflow],
    scenario: Optional[Scenario] = None,
) -> tuple[list[Account], list[Cashflow]]:
    """Return adjusted copies of ``accounts`` and ``cashflows``.

    Accounts pass through unchanged. Flows owned by a non-income account have
    ``amount_cents`` scaled by ``1 + spend_adjustment_pct`` when the scenario's
    scope covers them. The caller's objects are never modified.
    """
    if scenario is None:
        return list(accounts), list(cashflows)

    kinds = {account.id: account.kind for account in accounts}
    factor = 1 + scenario.spend_adjustment_pct

    adjusted: list[Cashflow] = []
    for cf in cashflows:
        kind = kinds.get(cf.account_id)
        in_scope = scenario.scope == ScenarioScope.all or (
            scenario.scope == ScenarioScope.discretionary and is_discretionary(cf)
        )
        if kind is None or kind == AccountKind.income or not in_scope:
            adjusted.append(cf)
            continue
        adjusted.append(cf.model_copy(update={"amount_cents": to_cents(cf.amount_cents * factor)}))

    return list(accounts), adjusted


_PRESETS: dict[str, Scenario] = {
    s.id: s
    for s in (
        Scenario(
            id="baseline",
            name="Current Financial Plan",
            spend_adjustment_pct=0.0,
            scope=ScenarioScope.all,
            inflation_pct=0.065,
            salary_growth_pct=0.075,
        ),
        Scenario(
            id="conservative-spending",
            name="Conservative Spending",
            spend_adjustment_pct=-0.15,
            scope=ScenarioScope.discretionary,
            inflation_pct=0.065,
            salary_growth_pct=0.075,
        ),
        Scenario(
            id="aggressive-debt-payoff",
            name="Aggressive Debt Payoff",
            spend_adjustment_pct=-0.25,
            scope=ScenarioScope.all,
            inflation_pct=0.065,
            salary_growth_pct=0.075,
        ),
        Scenario(
            id="economic-downturn",
            name="Economic Downturn",
            spend_adjustment_pct=-0.10,
            scope=ScenarioScope.discretionary,
            inflation_pct=0.095,
            salary_growth_pct=0.045,
        ),
        Scenario(
            id="career-advancement",
            name="Career Advancement",
            spend_adjustment_pct=0.15,
            scope=ScenarioScope.discretionary,
            inflation_pct=0.065,
            salary_growth_pct=0.125,
        ),
        Scenario(
            id="economic-growth",
            name="Economic Growth Period",
            spend_adjustment_pct=0.10,
            scope=ScenarioScope.discretionary,
            inflation_pct=0.045,
            salary_growth_pct=0.095,
        ),
        Scenario(
            id="pre-retirement",
            name="Pre-Retirement Strategy",
            spend_adjustment_pct=-0.20,
            scope=ScenarioScope.all,
            inflation_pct=0.065,
            salary_growth_pct=0.055,
        ),
        Scenario(
            id="emergency-budget",
            name="Emergency Budget",
            spend_adjustment_pct=-0.40,
            scope=ScenarioScope.all,
            inflation_pct=0.085,
            salary_growth_pct=0.02,
        ),
    )
}


def get_preset_scenario(scenario_id: str) -> Optional[Scenario]:
    """Return a preset scenario by id, or None if there is no such preset."""
    return _PRESETS.get(scenario_id)


def list_preset_scenarios() -> list[Scenario]:
    return list(_PRESETS.values())

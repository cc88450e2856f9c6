"""Projection engine: recurrence, amounts, growth, scenarios, payoff, summary."""
from planner.projection.amounts import effective_amount, indexed_amount
from planner.projection.engine import ENGINE_VERSION, project_finances
from planner.projection.growth import compound_interest, property_appreciation
from planner.projection.payoff import build_payoff_projections, detect_payoff_events, net_worth
from planner.projection.recurrence import add_months, is_active, month_label, months_between
from planner.projection.scenarios import apply_scenario, get_preset_scenario, list_preset_scenarios
from planner.projection.summary import build_summary

__all__ = [
    "ENGINE_VERSION",
    "project_finances",
    "is_active",
    "months_between",
    "add_months",
    "month_label",
    "effective_amount",
    "indexed_amount",
    "compound_interest",
    "property_appreciation",
    "apply_scenario",
    "get_preset_scenario",
    "list_preset_scenarios",
    "net_worth",
    "detect_payoff_events",
    "build_payoff_projections",
    "build_summary",
]

"""Projection orchestration service.

Resolves the request's scenario and horizon, runs the projection engine, and
records the run in the audit trail.
"""
from __future__ import annotations

import logging
from datetime import datetime, time, timezone
from typing import Optional

from planner.config import settings
from planner.models.projection import AuditEntry, AuditInput, ProjectionRequest, ProjectionResult
from planner.models.scenario import Scenario
from planner.projection.engine import ENGINE_VERSION, project_finances
from planner.projection.scenarios import get_preset_scenario
from planner.services.audit_trail import AuditTrail

logger = logging.getLogger(__name__)


class UnknownScenarioError(ValueError):
    pass


def resolve_scenario(request: ProjectionRequest) -> Optional[Scenario]:
    """Inline scenario wins over a preset id; neither means no adjustment."""
    if request.scenario is not None:
        return request.scenario
    if request.scenario_id is None:
        return None
    scenario = get_preset_scenario(request.scenario_id)
    if scenario is None:
        raise UnknownScenarioError(f"Unknown scenario '{request.scenario_id}'")
    return scenario


def resolve_horizon(request: ProjectionRequest) -> int:
    months = request.months_to_project
    if months is None:
        return settings.DEFAULT_HORIZON_MONTHS
    if months > settings.MAX_HORIZON_MONTHS:
        raise ValueError(
            f"months_to_project={months} exceeds the maximum of {settings.MAX_HORIZON_MONTHS}"
        )
    return months


def run_projection(request: ProjectionRequest) -> ProjectionResult:
    """Run a projection for an inline set of accounts and cash flows.

    Raises:
        UnknownScenarioError: ``scenario_id`` names no preset.
        ValueError: the horizon exceeds ``MAX_HORIZON_MONTHS``.
    """
    scenario = resolve_scenario(request)
    months = resolve_horizon(request)

    now = datetime.now(timezone.utc)
    if request.as_of is not None:
        now = datetime.combine(request.as_of, time.min, tzinfo=timezone.utc)

    result = project_finances(request.accounts, request.cashflows, months, scenario, now=now)

    logger.info(
        "Projected %d accounts / %d cash flows over %d months (scenario=%s): "
        "net worth %d -> %d, %d payoffs",
        len(request.accounts),
        len(request.cashflows),
        months,
        scenario.id if scenario else None,
        result.summary.start_net_worth,
        result.summary.end_net_worth,
        len(result.payoff_projections),
    )

    AuditTrail.get().record(AuditEntry(
        month=result.months[0].month if result.months else None,
        input=AuditInput(
            accounts=request.accounts,
            cashflows=request.cashflows,
            scenario=scenario,
            months_to_project=months,
        ),
        summary=result.summary,
        payoff_count=len(result.payoff_projections),
        timestamp=datetime.now(timezone.utc),
        version=ENGINE_VERSION,
    ))

    return result

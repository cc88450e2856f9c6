"""Projection API routes."""
import logging

from fastapi import APIRouter, HTTPException

from planner.models.projection import AuditEntry, ProjectionRequest, ProjectionResult
from planner.services.audit_trail import AuditTrail
from planner.services.projection_service import UnknownScenarioError, run_projection

logger = logging.getLogger(__name__)

router = APIRouter(tags=["projections"])


@router.post("/projections/run", response_model=ProjectionResult)
def run_projection_endpoint(request: ProjectionRequest):
    """Project balances for inline accounts and cash flows.

    Returns per-month account detail with calculation provenance, liability
    payoff projections, and a summary.
    """
    try:
        return run_projection(request)
    except UnknownScenarioError as e:
        logger.warning("Projection rejected: %s", e)
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        logger.warning("Projection rejected: %s", e)
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/projections/audit", response_model=list[AuditEntry])
def get_projection_audit():
    """Recent projection runs, oldest first."""
    return AuditTrail.get().entries()

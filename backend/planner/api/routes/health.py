from fastapi import APIRouter

from planner.projection.engine import ENGINE_VERSION
from planner.projection.scenarios import list_preset_scenarios

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check():
    return {
        "status": "ok",
        "engine_version": ENGINE_VERSION,
        "preset_scenarios": len(list_preset_scenarios()),
    }

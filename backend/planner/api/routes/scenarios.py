from fastapi import APIRouter, HTTPException

from planner.models.scenario import Scenario
from planner.projection.scenarios import get_preset_scenario, list_preset_scenarios

router = APIRouter(tags=["scenarios"])


@router.get("/scenarios", response_model=list[Scenario])
def get_scenarios():
    return list_preset_scenarios()


@router.get("/scenarios/{scenario_id}", response_model=Scenario)
def get_scenario(scenario_id: str):
    scenario = get_preset_scenario(scenario_id)
    if scenario is None:
        raise HTTPException(status_code=404, detail=f"Scenario {scenario_id} not found")
    return scenario

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class ScenarioScope(str, Enum):
    """Which cash flows a scenario's spend adjustment scales."""
    all = "all"
    discretionary = "discretionary"


class Scenario(BaseModel):
    id: str
    name: str
    spend_adjustment_pct: float = 0.0  # -0.10 = spend 10% less
    scope: ScenarioScope = ScenarioScope.all
    inflation_pct: Optional[float] = None
    salary_growth_pct: Optional[float] = None

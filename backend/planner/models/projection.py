from datetime import date, datetime
from typing import Optional, Union

from pydantic import BaseModel, Field

from planner.models.account import Account
from planner.models.cashflow import Cashflow
from planner.models.scenario import Scenario


class CalculationStep(BaseModel):
    """Formula, labelled inputs and result of a single computation."""
    description: str
    formula: str
    values: dict[str, Union[int, float, str]] = {}
    result: Union[int, float]


class CalculationDetails(BaseModel):
    interest_calculation: Optional[CalculationStep] = None
    appreciation_calculation: Optional[CalculationStep] = None
    cashflow_calculations: list[CalculationStep] = []


class AccountMonth(BaseModel):
    """One account's movement during one simulated month (all values in cents)."""
    opening_balance: int
    income: int = 0
    expenses: int = 0
    transfers_in: int = 0
    net_cashflow: int = 0
    interest_earned: int = 0
    closing_balance: int
    calculation_details: Optional[CalculationDetails] = None


class PayoffEvent(BaseModel):
    account_id: str
    account_name: str
    final_balance: int


class MonthlyCalculationSummary(BaseModel):
    total_income_calculation: CalculationStep
    total_expenses_calculation: CalculationStep
    net_worth_calculation: CalculationStep
    savings_rate_calculation: CalculationStep


class MonthlyProjection(BaseModel):
    month: str  # YYYY-MM
    month_index: int
    accounts: dict[str, AccountMonth]
    total_net_worth: int
    total_income: int
    total_expenses: int
    savings_rate: float
    accounts_payoff_events: Optional[list[PayoffEvent]] = None
    calculation_summary: Optional[MonthlyCalculationSummary] = None


class PayoffProjection(BaseModel):
    """When a liability is projected to reach zero, and what it costs to get there."""
    account_id: str
    account_name: str
    current_balance: int
    projected_payoff_month: str  # YYYY-MM
    months_to_payoff: int
    total_interest_to_pay: int
    total_payments: int


class ProjectionSummary(BaseModel):
    start_net_worth: int
    end_net_worth: int
    total_return: int
    average_savings_rate: float
    months_projected: int
    annualized_return: Optional[float] = None
    projection_date: datetime


class ProjectionResult(BaseModel):
    months: list[MonthlyProjection]
    summary: ProjectionSummary
    payoff_projections: list[PayoffProjection] = []


class ProjectionRequest(BaseModel):
    """Request body for a projection run: inline accounts and cash flows.

    ``scenario`` takes precedence over ``scenario_id`` (a preset id).
    ``as_of`` pins the first projected month; defaults to today.
    """
    accounts: list[Account]
    cashflows: list[Cashflow] = []
    months_to_project: Optional[int] = Field(default=None, ge=0)
    scenario: Optional[Scenario] = None
    scenario_id: Optional[str] = None
    as_of: Optional[date] = None


class AuditInput(BaseModel):
    accounts: list[Account]
    cashflows: list[Cashflow]
    scenario: Optional[Scenario] = None
    months_to_project: int


class AuditEntry(BaseModel):
    """Record of one projection run: what went in and what came out."""
    month: Optional[str] = None  # first projected month
    input: AuditInput
    summary: ProjectionSummary
    payoff_count: int = 0
    timestamp: datetime
    version: str

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class AccountKind(str, Enum):
    """Role of an account; decides cash flow direction and net worth sign."""
    income = "income"
    expense = "expense"
    investment = "investment"
    liability = "liability"
    reserve = "reserve"
    transfer = "transfer"


class Account(BaseModel):
    id: str
    name: str
    kind: AccountKind
    category: Optional[str] = None
    notes: Optional[str] = None
    opening_balance_cents: int = 0  # assets(+) / liabilities(-)
    annual_interest_rate: Optional[float] = None  # 0.08 = 8% per year
    compounds_per_year: int = 12
    is_property: bool = False
    property_appreciation_rate: Optional[float] = None

    @property
    def is_liability(self) -> bool:
        return self.kind == AccountKind.liability

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Frequency(str, Enum):
    once = "once"
    weekly = "weekly"
    fortnightly = "fortnightly"
    monthly = "monthly"
    quarterly = "quarterly"
    annually = "annually"


class SourceType(str, Enum):
    """What a percentage-based cash flow is computed from."""
    cashflow = "cashflow"
    account = "account"


class RecurrenceAnchor(BaseModel):
    day_of_month: Optional[int] = None


class Recurrence(BaseModel):
    frequency: Frequency
    anchor: Optional[RecurrenceAnchor] = None
    start_date: date
    end_date: Optional[date] = None
    annual_indexation_pct: Optional[float] = None  # 0.05 = +5% per year


class PercentageOf(BaseModel):
    source_type: SourceType
    source_id: str
    percentage: float  # 0.17 = 17%


class Cashflow(BaseModel):
    """A recurring or one-off movement of money tied to one account.

    ``amount_cents`` is a magnitude; direction comes from the owning account's
    kind. When ``target_account_id`` is set the flow is a transfer: it debits
    the owner and credits the target.
    """
    id: str
    account_id: str
    amount_cents: int = 0
    description: Optional[str] = None
    recurrence: Recurrence
    percentage_of: Optional[PercentageOf] = None
    target_account_id: Optional[str] = None

    @property
    def is_transfer(self) -> bool:
        return self.target_account_id is not None

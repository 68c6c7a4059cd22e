"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from wealth_core.domain.models import DepositType, InstallmentStatus


class TripExpenseSchema(BaseModel):
    """Shared expense inside a settlement request"""

    id: str = ""
    description: str = ""
    amount: Decimal = Field(..., gt=0, description="Amount paid")
    paid_by: str = Field(..., min_length=1, description="Participant who paid")
    expense_date: Optional[date] = None


class SettlementRequest(BaseModel):
    """Request body for POST /v1/settlements"""

    participants: List[str] = Field(..., description="Trip participants, unique names")
    expenses: List[TripExpenseSchema] = Field(default_factory=list)


class TransferSchema(BaseModel):
    from_participant: str
    to_participant: str
    amount: Decimal


class SettlementResponse(BaseModel):
    """Response for settlement endpoints"""

    trip_id: Optional[str] = None
    total_expense: Decimal
    per_person_share: Decimal
    balances: Dict[str, Decimal]
    transfers: List[TransferSchema]


class DepositSchema(BaseModel):
    """Deposit record as supplied by the caller"""

    id: str = ""
    bank_name: str = ""
    amount: Decimal = Field(..., gt=0, description="Principal (FD) or monthly installment (RD)")
    interest_rate: Decimal = Field(..., ge=0, description="Annual interest rate in percent")
    maturity_date: date
    deposit_type: DepositType = DepositType.FD
    created_at: date
    start_date: Optional[date] = None


class DepositProjectionRequest(BaseModel):
    """Request body for POST /v1/deposits/projection"""

    deposit: DepositSchema
    as_of: Optional[date] = Field(None, description="Valuation date, defaults to today")


class InstallmentSchema(BaseModel):
    """Single RD installment"""

    sequence_number: int
    month: date
    amount: Decimal
    status: InstallmentStatus


class DepositProjectionResponse(BaseModel):
    deposit_id: str
    deposit_type: DepositType
    maturity_amount: Decimal
    current_accrued: Decimal
    total_principal: Decimal
    interest_earned: Decimal
    progress_percent: Decimal
    installments: List[InstallmentSchema]


class DepositSummaryResponse(BaseModel):
    """Response for GET /v1/deposits/summary"""

    as_of: date
    total_value: Decimal
    deposits: List[DepositProjectionResponse]


class EventSchema(BaseModel):
    date: date
    amount: Decimal


class MonthlyTrendRequest(BaseModel):
    """Request body for POST /v1/trends/monthly"""

    series: Dict[str, List[EventSchema]] = Field(..., description="Named event streams, e.g. income and expense")
    window_months: Optional[int] = Field(None, ge=1, le=120)
    anchor_date: Optional[date] = None


class MonthBucketSchema(BaseModel):
    month: str  # YYYY-MM
    amount: Decimal


class MonthlyTrendResponse(BaseModel):
    window_months: int
    anchor_date: date
    series: Dict[str, List[MonthBucketSchema]]


class ExpenseSchema(BaseModel):
    id: str = ""
    description: str = ""
    amount: Decimal = Field(..., gt=0)
    category: str = Field(..., min_length=1)
    date: date


class TopCategoriesRequest(BaseModel):
    """Request body for POST /v1/expenses/top-categories"""

    expenses: List[ExpenseSchema]
    anchor_date: Optional[date] = None
    limit: Optional[int] = Field(None, ge=1)


class CategoryTotalSchema(BaseModel):
    category: str
    amount: Decimal
    percentage: int


class TopCategoriesResponse(BaseModel):
    month: str
    categories: List[CategoryTotalSchema]

"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Dict, List, NamedTuple, Optional


@dataclass
class Trip:
    """Group trip whose shared expenses get settled between participants"""

    id: str
    name: str
    destination: str
    participants: List[str]
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass
class TripExpense:
    """Shared expense paid by one trip participant"""

    id: str
    trip_id: str
    description: str
    amount: Decimal
    paid_by: str
    expense_date: date


@dataclass
class Transfer:
    """Single peer-to-peer payment that settles part of a debt"""

    from_participant: str
    to_participant: str
    amount: Decimal


@dataclass
class SettlementResult:
    """Output of trip settlement"""

    total_expense: Decimal
    per_person_share: Decimal
    balances: Dict[str, Decimal]  # negative = owes the pool, positive = is owed
    transfers: List[Transfer]


class DepositType(str, Enum):
    FD = "FD"  # lump sum
    RD = "RD"  # monthly installment


@dataclass
class Deposit:
    """Fixed or recurring bank deposit"""

    id: str
    bank_name: str
    amount: Decimal  # principal for FD, monthly installment for RD
    interest_rate: Decimal  # annual %
    maturity_date: date
    deposit_type: DepositType
    created_at: date
    start_date: Optional[date] = None

    @property
    def opened_on(self) -> date:
        return self.start_date or self.created_at


class InstallmentStatus(str, Enum):
    PAID = "paid"
    PENDING = "pending"


@dataclass
class Installment:
    """Single monthly payment into a recurring deposit"""

    sequence_number: int
    month: date  # first day of the month
    amount: Decimal
    status: InstallmentStatus


@dataclass
class DepositProjection:
    """Everything the dashboard shows for one deposit"""

    deposit_id: str
    deposit_type: DepositType
    maturity_amount: Decimal
    current_accrued: Decimal
    total_principal: Decimal
    interest_earned: Decimal
    progress_percent: Decimal
    installments: List[Installment] = field(default_factory=list)


class MonthKey(NamedTuple):
    """Calendar month bucket key"""

    year: int
    month: int

    @property
    def label(self) -> str:
        return f"{self.year}-{self.month:02d}"


@dataclass
class MonthlyEvent:
    """Timestamped amount fed to month bucketing"""

    date: date
    amount: Decimal


@dataclass
class Expense:
    """Personal (non-trip) expense"""

    id: str
    description: str
    amount: Decimal
    category: str
    date: date


@dataclass
class CategoryTotal:
    category: str
    amount: Decimal
    percentage: int

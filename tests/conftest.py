"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from fastapi.testclient import TestClient
from wealth_core.api.main import create_app
from wealth_core.api.dependencies import get_today
from wealth_core.domain.models import Deposit, DepositType, Trip, TripExpense


# Fixed valuation date so paid/pending and month windows are deterministic
TODAY = date(2024, 6, 15)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client pinned to TODAY"""
    app = create_app()
    app.dependency_overrides[get_today] = lambda: TODAY
    return TestClient(app)


@pytest.fixture
def goa_trip() -> Trip:
    """Three-person trip"""
    return Trip(
        id="trip_goa",
        name="Goa",
        destination="Goa",
        participants=["Asha", "Bilal", "Chen"],
        start_date=date(2024, 3, 1),
        end_date=date(2024, 3, 5),
    )


@pytest.fixture
def goa_expenses() -> list[TripExpense]:
    """Asha pays the hotel, Bilal pays dinner"""
    return [
        TripExpense(
            id="exp_1",
            trip_id="trip_goa",
            description="Hotel",
            amount=Decimal("9000"),
            paid_by="Asha",
            expense_date=date(2024, 3, 1),
        ),
        TripExpense(
            id="exp_2",
            trip_id="trip_goa",
            description="Dinner",
            amount=Decimal("3000"),
            paid_by="Bilal",
            expense_date=date(2024, 3, 2),
        ),
    ]


@pytest.fixture
def fixed_deposit() -> Deposit:
    """100000 at 8% for exactly 365 days"""
    return Deposit(
        id="fd_1",
        bank_name="SBI",
        amount=Decimal("100000"),
        interest_rate=Decimal("8"),
        maturity_date=date(2024, 1, 1),
        deposit_type=DepositType.FD,
        created_at=date(2023, 1, 1),
    )


@pytest.fixture
def recurring_deposit() -> Deposit:
    """5000/month at 7% from Jan 2024 to Jan 2025"""
    return Deposit(
        id="rd_1",
        bank_name="HDFC",
        amount=Decimal("5000"),
        interest_rate=Decimal("7"),
        maturity_date=date(2025, 1, 10),
        deposit_type=DepositType.RD,
        created_at=date(2024, 1, 20),
        start_date=date(2024, 1, 10),
    )

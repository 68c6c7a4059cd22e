"""Wealth tracker backend HTTP client for trips, trip expenses and deposits"""

import httpx
from datetime import date
from typing import Any, Dict, List, Optional
from wealth_core.domain.models import Trip, TripExpense, Deposit, DepositType
from wealth_core.domain.exceptions import InvalidInputError, StoreAPIError
from wealth_core.config import settings
from wealth_core.utils.money import to_decimal


def _optional_date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value[:10]) if value else None


def _parse_trip(data: Dict[str, Any]) -> Trip:
    return Trip(
        id=data["id"],
        name=data["tripName"],
        destination=data.get("destination", ""),
        participants=list(data.get("participants") or []),
        start_date=_optional_date(data.get("startDate")),
        end_date=_optional_date(data.get("endDate")),
    )


def _parse_trip_expense(data: Dict[str, Any]) -> TripExpense:
    return TripExpense(
        id=data["id"],
        trip_id=data["tripId"],
        description=data.get("description", ""),
        amount=to_decimal(data["amount"]),
        paid_by=data["paidBy"],
        expense_date=date.fromisoformat(data["expenseDate"][:10]),
    )


def _parse_deposit(data: Dict[str, Any]) -> Deposit:
    return Deposit(
        id=data["id"],
        bank_name=data["bankName"],
        amount=to_decimal(data["amount"]),
        interest_rate=to_decimal(data["interestRate"]),
        maturity_date=date.fromisoformat(data["maturityDate"][:10]),
        # Older records predate RDs and carry no type
        # Unknown types pass through for the deposit engine to reject
        deposit_type=data.get("depositType") or DepositType.FD.value,
        created_at=date.fromisoformat(data["createdAt"][:10]),
        start_date=_optional_date(data.get("startDate")),
    )


class WealthStoreClient:
    """Client for the wealth tracker REST backend (read-only)"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.wealth_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.token = token or settings.wealth_api_token
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _get(self, path: str) -> Any:
        """
        GET a backend resource and decode its JSON body.

        Raises:
            StoreAPIError: On timeout, HTTP errors, or a non-JSON body
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(f"{self.base_url}{path}", headers=self._headers())
                response.raise_for_status()
                return response.json()

            except httpx.TimeoutException as e:
                raise StoreAPIError(f"Store API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise StoreAPIError(f"Store API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise StoreAPIError(f"Store API unreachable: {e}") from e
            except ValueError as e:
                raise StoreAPIError(f"Store API returned invalid JSON: {e}") from e

    async def get_trip(self, trip_id: str) -> Trip:
        data = await self._get(f"/trips/{trip_id}")
        try:
            return _parse_trip(data)
        except (KeyError, ValueError, TypeError, InvalidInputError) as e:
            raise StoreAPIError(f"Invalid trip data from store: {e}") from e

    async def get_trip_expenses(self, trip_id: str) -> List[TripExpense]:
        data = await self._get(f"/trips/{trip_id}/expenses")
        try:
            return [_parse_trip_expense(item) for item in data]
        except (KeyError, ValueError, TypeError, InvalidInputError) as e:
            raise StoreAPIError(f"Invalid trip expense data from store: {e}") from e

    async def get_deposits(self) -> List[Deposit]:
        data = await self._get("/fixed-deposits")
        try:
            return [_parse_deposit(item) for item in data]
        except (KeyError, ValueError, TypeError, InvalidInputError) as e:
            raise StoreAPIError(f"Invalid deposit data from store: {e}") from e

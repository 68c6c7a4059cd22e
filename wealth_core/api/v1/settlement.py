"""Trip settlement endpoints"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from wealth_core.api.v1.schemas import SettlementRequest, SettlementResponse, TransferSchema
from wealth_core.api.dependencies import get_request_id, get_store_client
from wealth_core.infrastructure.clients.store import WealthStoreClient
from wealth_core.domain.models import SettlementResult, TripExpense
from wealth_core.domain.settlement import compute_settlement, settle_trip
from wealth_core.domain.exceptions import ArithmeticDegenerateError, InvalidInputError, StoreAPIError
from wealth_core.infrastructure.observability.metrics import (
    record_settlement,
    record_validation_failure,
    store_fetch_failures_counter,
)
from wealth_core.infrastructure.observability.logging import log_settlement
from wealth_core.config import settings

router = APIRouter()


def _to_response(result: SettlementResult, trip_id: str | None = None) -> SettlementResponse:
    return SettlementResponse(
        trip_id=trip_id,
        total_expense=result.total_expense,
        per_person_share=result.per_person_share,
        balances=result.balances,
        transfers=[
            TransferSchema(
                from_participant=t.from_participant,
                to_participant=t.to_participant,
                amount=t.amount,
            )
            for t in result.transfers
        ],
    )


@router.post("/settlements", response_model=SettlementResponse)
def create_settlement(request_body: SettlementRequest, request: Request):
    """
    Settle an ad-hoc list of shared expenses.

    Nothing is stored; balances are recomputed from the request every time.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    expenses = [
        TripExpense(
            id=e.id,
            trip_id="",
            description=e.description,
            amount=e.amount,
            paid_by=e.paid_by,
            expense_date=e.expense_date,
        )
        for e in request_body.expenses
    ]

    try:
        result = compute_settlement(request_body.participants, expenses, settings.settlement_epsilon)

    except InvalidInputError as e:
        record_validation_failure(e)
        logging.warning(f"Settlement rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except ArithmeticDegenerateError as e:
        logging.error(f"Settlement arithmetic failure: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Settlement could not be computed")

    duration_ms = (time.time() - start_time) * 1000
    record_settlement(len(result.transfers))
    log_settlement(request_id, len(request_body.participants), len(expenses), len(result.transfers), duration_ms)

    return _to_response(result)


@router.get("/trips/{trip_id}/settlement", response_model=SettlementResponse)
async def get_trip_settlement(
    trip_id: str,
    request: Request,
    store: WealthStoreClient = Depends(get_store_client),
):
    """
    Settle a stored trip.

    Flow:
    1. Fetch trip and its expenses from the wealth tracker backend
    2. Compute balances and transfers
    3. Return the result (never written back)
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        trip = await store.get_trip(trip_id)
        expenses = await store.get_trip_expenses(trip_id)
        result = settle_trip(trip, expenses, settings.settlement_epsilon)

    except StoreAPIError as e:
        store_fetch_failures_counter.inc()
        logging.error(f"Store API error: {e}", extra={"request_id": request_id, "trip_id": trip_id})
        raise HTTPException(status_code=503, detail="Wealth tracker backend unavailable")

    except InvalidInputError as e:
        record_validation_failure(e)
        logging.warning(f"Settlement rejected: {e}", extra={"request_id": request_id, "trip_id": trip_id})
        raise HTTPException(status_code=422, detail=str(e))

    except ArithmeticDegenerateError as e:
        logging.error(f"Settlement arithmetic failure: {e}", extra={"request_id": request_id, "trip_id": trip_id})
        raise HTTPException(status_code=500, detail="Settlement could not be computed")

    duration_ms = (time.time() - start_time) * 1000
    record_settlement(len(result.transfers))
    log_settlement(
        request_id,
        len(trip.participants),
        len(expenses),
        len(result.transfers),
        duration_ms,
        trip_id=trip_id,
    )

    return _to_response(result, trip_id=trip_id)

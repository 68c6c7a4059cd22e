"""Deposit projection endpoints"""

import time
import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request

from wealth_core.api.v1.schemas import (
    DepositProjectionRequest,
    DepositProjectionResponse,
    DepositSummaryResponse,
    InstallmentSchema,
    MonthBucketSchema,
    MonthlyTrendResponse,
)
from wealth_core.api.dependencies import get_request_id, get_store_client, get_today
from wealth_core.infrastructure.clients.store import WealthStoreClient
from wealth_core.domain.models import Deposit, DepositProjection
from wealth_core.domain.deposits import deposit_contribution_events, project_deposit, total_deposit_value
from wealth_core.domain.aggregation import bucket_by_month
from wealth_core.domain.exceptions import ArithmeticDegenerateError, InvalidInputError, StoreAPIError
from wealth_core.infrastructure.observability.metrics import (
    deposit_projection_counter,
    record_validation_failure,
    store_fetch_failures_counter,
)
from wealth_core.infrastructure.observability.logging import log_projection
from wealth_core.config import settings

router = APIRouter()


def _to_response(projection: DepositProjection) -> DepositProjectionResponse:
    return DepositProjectionResponse(
        deposit_id=projection.deposit_id,
        deposit_type=projection.deposit_type,
        maturity_amount=projection.maturity_amount,
        current_accrued=projection.current_accrued,
        total_principal=projection.total_principal,
        interest_earned=projection.interest_earned,
        progress_percent=projection.progress_percent,
        installments=[
            InstallmentSchema(
                sequence_number=inst.sequence_number,
                month=inst.month,
                amount=inst.amount,
                status=inst.status,
            )
            for inst in projection.installments
        ],
    )


@router.post("/deposits/projection", response_model=DepositProjectionResponse)
def create_deposit_projection(
    request_body: DepositProjectionRequest,
    request: Request,
    today: date = Depends(get_today),
):
    """
    Project one deposit: maturity value, amount paid in so far, progress and
    (for RDs) the installment schedule as of the valuation date.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    as_of = request_body.as_of or today

    deposit = Deposit(**request_body.deposit.model_dump())

    try:
        projection = project_deposit(deposit, as_of)

    except InvalidInputError as e:
        record_validation_failure(e)
        logging.warning(f"Deposit rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except ArithmeticDegenerateError as e:
        logging.error(f"Deposit arithmetic failure: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Deposit projection could not be computed")

    deposit_projection_counter.labels(deposit_type=deposit.deposit_type.value).inc()
    log_projection(request_id, 1, (time.time() - start_time) * 1000)

    return _to_response(projection)


@router.get("/deposits/summary", response_model=DepositSummaryResponse)
async def get_deposit_summary(
    request: Request,
    store: WealthStoreClient = Depends(get_store_client),
    today: date = Depends(get_today),
):
    """Project every stored deposit and total the current deposits asset value"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        deposits = await store.get_deposits()
        projections = [project_deposit(d, today) for d in deposits]
        total_value = total_deposit_value(deposits, today)

    except StoreAPIError as e:
        store_fetch_failures_counter.inc()
        logging.error(f"Store API error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Wealth tracker backend unavailable")

    except InvalidInputError as e:
        record_validation_failure(e)
        logging.warning(f"Stored deposit rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except ArithmeticDegenerateError as e:
        logging.error(f"Deposit arithmetic failure: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Deposit projection could not be computed")

    for projection in projections:
        deposit_projection_counter.labels(deposit_type=projection.deposit_type.value).inc()
    log_projection(request_id, len(deposits), (time.time() - start_time) * 1000)

    return DepositSummaryResponse(
        as_of=today,
        total_value=total_value,
        deposits=[_to_response(p) for p in projections],
    )


@router.get("/deposits/contributions", response_model=MonthlyTrendResponse)
async def get_deposit_contributions(
    request: Request,
    store: WealthStoreClient = Depends(get_store_client),
    today: date = Depends(get_today),
):
    """Money paid into deposits per month over the asset chart window"""
    request_id = get_request_id(request)
    window = settings.asset_window_months

    try:
        deposits = await store.get_deposits()
        events = [event for d in deposits for event in deposit_contribution_events(d, today)]
        buckets = bucket_by_month(events, window, today)

    except StoreAPIError as e:
        store_fetch_failures_counter.inc()
        logging.error(f"Store API error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Wealth tracker backend unavailable")

    except InvalidInputError as e:
        record_validation_failure(e)
        logging.warning(f"Stored deposit rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    return MonthlyTrendResponse(
        window_months=window,
        anchor_date=today,
        series={"Deposits": [MonthBucketSchema(month=key.label, amount=amount) for key, amount in buckets.items()]},
    )

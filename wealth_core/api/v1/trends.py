"""Dashboard trend endpoints: monthly buckets and top expense categories"""

import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request

from wealth_core.api.v1.schemas import (
    CategoryTotalSchema,
    MonthBucketSchema,
    MonthlyTrendRequest,
    MonthlyTrendResponse,
    TopCategoriesRequest,
    TopCategoriesResponse,
)
from wealth_core.api.dependencies import get_request_id, get_today
from wealth_core.domain.models import MonthKey
from wealth_core.domain.aggregation import bucket_series, top_categories
from wealth_core.domain.exceptions import InvalidInputError
from wealth_core.infrastructure.observability.metrics import record_validation_failure
from wealth_core.config import settings

router = APIRouter()


@router.post("/trends/monthly", response_model=MonthlyTrendResponse)
def create_monthly_trend(
    request_body: MonthlyTrendRequest,
    request: Request,
    today: date = Depends(get_today),
):
    """
    Bucket each named event series into calendar months.

    All series share one window so they line up on a chart.
    """
    request_id = get_request_id(request)
    window = request_body.window_months or settings.trend_window_months
    anchor = request_body.anchor_date or today

    try:
        buckets = bucket_series(request_body.series, window, anchor)
    except InvalidInputError as e:
        record_validation_failure(e)
        logging.warning(f"Trend request rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    return MonthlyTrendResponse(
        window_months=window,
        anchor_date=anchor,
        series={
            name: [MonthBucketSchema(month=key.label, amount=amount) for key, amount in months.items()]
            for name, months in buckets.items()
        },
    )


@router.post("/expenses/top-categories", response_model=TopCategoriesResponse)
def create_top_categories(
    request_body: TopCategoriesRequest,
    request: Request,
    today: date = Depends(get_today),
):
    """Largest spending categories for the anchor month"""
    request_id = get_request_id(request)
    anchor = request_body.anchor_date or today
    limit = request_body.limit or settings.top_categories_limit

    try:
        totals = top_categories(request_body.expenses, anchor, limit)
    except InvalidInputError as e:
        record_validation_failure(e)
        logging.warning(f"Top categories request rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    return TopCategoriesResponse(
        month=MonthKey(anchor.year, anchor.month).label,
        categories=[
            CategoryTotalSchema(category=t.category, amount=t.amount, percentage=t.percentage) for t in totals
        ],
    )

# app/api/routes/internal.py
import logging
from http import HTTPStatus

from fastapi import APIRouter, Depends

from app.api.dependencies.internal_auth import verify_internal_api_key
from app.schemas.recap import AggregateRequest, MonthlyFormRecap
from app.services.monthly_recap import default_rate_mode, default_unmatched_key_policy
from app.services.recap_aggregator import aggregate_monthly_recap

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/internal",
    tags=["Internal"],
    dependencies=[Depends(verify_internal_api_key)],
)


@router.post(
    "/recaps/aggregate",
    response_model=MonthlyFormRecap,
    status_code=HTTPStatus.OK,
    summary="Aggregate caller-supplied attendance rows into a monthly recap",
    description=(
        "Runs the recap aggregation on rows and census provided in the "
        "request body instead of reading them from the database.\n\n"
        "Intended for integrations that fetch attendance from another "
        "store. Rows must already be restricted to one form and one month; "
        "no filtering is applied. Rows with unreadable timestamps are "
        "skipped and reported in `totals.skippedRecords`.\n\n"
        "Protected via the `X-Internal-Api-Key` header when configured."
    ),
    responses={
        200: {"description": "Recap computed."},
        401: {"description": "Missing or invalid internal API key (if configured)."},
        422: {"description": "Body does not match the expected shape."},
    },
)
async def aggregate_recap(payload: AggregateRequest) -> MonthlyFormRecap:
    logger.info(
        "Aggregating %d supplied row(s) against a census of %d",
        len(payload.records),
        len(payload.census),
    )
    return aggregate_monthly_recap(
        payload.records,
        payload.month,
        payload.census,
        rate_mode=payload.rate_mode or default_rate_mode(),
        unmatched_key_policy=payload.unmatched_key_policy or default_unmatched_key_policy(),
    )

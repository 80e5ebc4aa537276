# app/api/routes/dashboard.py
from datetime import date as date_type
from http import HTTPStatus

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies.recap_params import resolve_month
from app.core.dashboard_forms import list_dashboard_forms
from app.db.session import get_db
from app.schemas.dashboard import DashboardFormConfig, DashboardStats
from app.services.dashboard_stats import compute_dashboard_stats

router = APIRouter(tags=["Dashboard"])


@router.get(
    "/forms",
    response_model=list[DashboardFormConfig],
    status_code=HTTPStatus.OK,
    summary="List forms with a monthly recap",
    description=(
        "Return the attendance forms shown on the dashboard together with "
        "the participant categories that make up each form's census."
    ),
)
async def get_forms() -> list[DashboardFormConfig]:
    return list_dashboard_forms()


@router.get(
    "/dashboard/stats",
    response_model=DashboardStats,
    status_code=HTTPStatus.OK,
    summary="Get headline dashboard counters",
    description=(
        "Active participants, PRESENT and EXCUSED check-ins of the month "
        "(all forms, pending rows excluded) and registrations awaiting "
        "approval."
    ),
)
async def get_dashboard_stats(
    month: date_type = Depends(resolve_month),
    db: AsyncSession = Depends(get_db),
) -> DashboardStats:
    """
    Counters are computed with COUNT queries; rows are never loaded.
    """
    return await compute_dashboard_stats(db, month=month)

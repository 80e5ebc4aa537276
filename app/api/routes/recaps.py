# app/api/routes/recaps.py
from datetime import date as date_type
from http import HTTPStatus

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies.recap_params import resolve_form, resolve_month
from app.core.config import get_settings
from app.db.session import get_db
from app.schemas.dashboard import DashboardFormConfig
from app.schemas.recap import FollowUpList, GroupRecap, MonthlyFormRecap, RateMode
from app.services.monthly_recap import get_monthly_form_recap
from app.services.recap_insights import select_follow_up, summarize_groups

router = APIRouter(
    prefix="/recaps",
    tags=["Recaps"],
)


@router.get(
    "/{form_key}/monthly",
    response_model=MonthlyFormRecap,
    status_code=HTTPStatus.OK,
    summary="Get the monthly attendance recap of a form",
    description=(
        "Aggregate all non-pending check-ins of the form within the month "
        "(UTC calendar) into:\n"
        "- one entry per meeting date with PRESENT / EXCUSED counts\n"
        "- one entry per participant, worst attendance first\n"
        "- totals with org-wide attendance and excused rates\n\n"
        "`rate_mode` selects the org-wide formula: `CENSUS` "
        "(present / (meetings * census)), `SUBMISSION` "
        "(present / submissions) or `AUTO` (census when available)."
    ),
    responses={
        200: {
            "description": "Recap successfully computed.",
            "content": {
                "application/json": {
                    "example": {
                        "monthKey": "2025-11",
                        "meetings": [
                            {
                                "date": "2025-11-03",
                                "presentCount": 2,
                                "excusedCount": 1,
                                "totalSubmissions": 3,
                            }
                        ],
                        "participants": [
                            {
                                "participantId": "p1",
                                "participantName": "Ahmad",
                                "participantGroup": "Cakra",
                                "participantCategory": "GPN A",
                                "presentCount": 1,
                                "excusedCount": 0,
                                "totalCount": 1,
                                "attendanceRate": 1.0,
                                "excusedRate": 0.0,
                            }
                        ],
                        "totals": {
                            "totalMeetings": 1,
                            "totalPresent": 2,
                            "totalExcused": 1,
                            "totalSubmissions": 3,
                            "totalCensus": 5,
                            "attendanceRate": 0.4,
                            "excusedRate": 0.2,
                            "avgPresentPerMeeting": 2.0,
                            "rateMode": "CENSUS",
                            "skippedRecords": 0,
                        },
                    }
                }
            },
        },
        404: {"description": "Unknown form key."},
        422: {"description": "Malformed month or rate mode."},
    },
)
async def get_monthly_recap(
    rate_mode: RateMode | None = Query(
        default=None,
        description="Org-wide rate formula. Defaults to the configured RECAP_RATE_MODE.",
    ),
    form: DashboardFormConfig = Depends(resolve_form),
    month: date_type = Depends(resolve_month),
    db: AsyncSession = Depends(get_db),
) -> MonthlyFormRecap:
    return await get_monthly_form_recap(db, form=form, month=month, rate_mode=rate_mode)


@router.get(
    "/{form_key}/groups",
    response_model=list[GroupRecap],
    status_code=HTTPStatus.OK,
    summary="Get attendance per participant group",
    description=(
        "Per-group attendance for the month: number of participants of the "
        "group appearing in the recap, their PRESENT check-ins, and "
        "present / (participants * meetings). Sorted best group first."
    ),
)
async def get_group_breakdown(
    form: DashboardFormConfig = Depends(resolve_form),
    month: date_type = Depends(resolve_month),
    db: AsyncSession = Depends(get_db),
) -> list[GroupRecap]:
    recap = await get_monthly_form_recap(db, form=form, month=month)
    return summarize_groups(recap)


@router.get(
    "/{form_key}/follow-up",
    response_model=FollowUpList,
    status_code=HTTPStatus.OK,
    summary="List participants needing follow-up",
    description=(
        "Participants with the lowest attendance rate for the month, worst "
        "first. Each entry carries a severity: CRITICAL below 25 %, LOW "
        "below 50 %, OK otherwise."
    ),
)
async def get_follow_up(
    limit: int | None = Query(
        default=None,
        ge=0,
        le=500,
        description="Maximum entries to return. Defaults to FOLLOW_UP_LIMIT.",
        example=8,
    ),
    form: DashboardFormConfig = Depends(resolve_form),
    month: date_type = Depends(resolve_month),
    db: AsyncSession = Depends(get_db),
) -> FollowUpList:
    if limit is None:
        limit = get_settings().FOLLOW_UP_LIMIT

    recap = await get_monthly_form_recap(db, form=form, month=month)
    return select_follow_up(recap, limit=limit)

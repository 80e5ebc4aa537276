# app/api/dependencies/recap_params.py
from datetime import date as date_type, datetime, timezone
from http import HTTPStatus

from fastapi import HTTPException, Path, Query

from app.core.dashboard_forms import get_dashboard_form
from app.core.dates import parse_month_key
from app.schemas.dashboard import DashboardFormConfig


async def resolve_month(
    month: str | None = Query(
        default=None,
        description=(
            "Month to recap in `YYYY-MM` format. "
            "If omitted, the current month (UTC) is used."
        ),
        example="2025-11",
    ),
) -> date_type:
    """
    Parse the `month` query parameter into the first day of that month.
    """
    if month is None:
        return datetime.now(tz=timezone.utc).date().replace(day=1)

    try:
        return parse_month_key(month)
    except ValueError as exc:
        raise HTTPException(
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            detail=str(exc),
        )


async def resolve_form(
    form_key: str = Path(
        ...,
        description="Key of the dashboard form (e.g. `profmud`, `ar`).",
        example="profmud",
    ),
) -> DashboardFormConfig:
    """
    Look up the dashboard form referenced in the path, 404 if unknown.
    """
    try:
        return get_dashboard_form(form_key)
    except LookupError:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND,
            detail=f"Dashboard form '{form_key}' not found.",
        )

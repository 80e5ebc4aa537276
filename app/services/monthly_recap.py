# app/services/monthly_recap.py
from __future__ import annotations

import logging
from datetime import date as date_type

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.schemas.dashboard import DashboardFormConfig
from app.schemas.recap import MonthlyFormRecap, RateMode, UnmatchedKeyPolicy
from app.services.attendance_fetcher import (
    fetch_census_participants,
    fetch_monthly_attendance,
)
from app.services.recap_aggregator import aggregate_monthly_recap

logger = logging.getLogger(__name__)


def default_rate_mode() -> RateMode:
    return get_settings().RECAP_RATE_MODE


def default_unmatched_key_policy() -> UnmatchedKeyPolicy:
    return get_settings().RECAP_UNMATCHED_KEY_POLICY


async def get_monthly_form_recap(
    db: AsyncSession,
    form: DashboardFormConfig,
    month: date_type,
    rate_mode: RateMode | None = None,
    unmatched_key_policy: UnmatchedKeyPolicy | None = None,
) -> MonthlyFormRecap:
    """
    Fetch the month's rows and the census for a form, then aggregate them.

    Both fetches share one AsyncSession and therefore run one after the
    other. Fetch errors propagate and no recap is produced.
    """
    records = await fetch_monthly_attendance(db, form_id=form.form_id, month=month)
    census = await fetch_census_participants(db, form.allowed_categories)

    recap = aggregate_monthly_recap(
        records,
        month,
        census,
        rate_mode=rate_mode or default_rate_mode(),
        unmatched_key_policy=unmatched_key_policy or default_unmatched_key_policy(),
    )

    logger.info(
        "Monthly recap for form=%s month=%s: %d meeting(s), %d participant(s)",
        form.key,
        recap.month_key,
        recap.totals.total_meetings,
        len(recap.participants),
    )
    return recap

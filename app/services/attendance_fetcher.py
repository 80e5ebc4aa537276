# app/services/attendance_fetcher.py
from __future__ import annotations

import logging
from datetime import date as date_type
from typing import List, Sequence

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from app.core.dates import month_bounds
from app.models.attendance import Attendance
from app.models.participant import LookupValue, Participant
from app.schemas.attendance import AttendanceRecord, CensusParticipant, normalize_status

logger = logging.getLogger(__name__)


async def fetch_monthly_attendance(
    db: AsyncSession,
    form_id: str,
    month: date_type,
) -> List[AttendanceRecord]:
    """
    Fetch the attendance rows of one form for one month.

    Behavior
    --------
    - Month bounds are UTC: [first day 00:00, first day of next month 00:00).
    - Rows still pending reconciliation (`is_pending`) are excluded.
    - Participant name, category and group are resolved through joins; for
      unmatched rows the temp fields are used as fallback.
    - Stored statuses (HADIR/IZIN) are mapped to PRESENT/EXCUSED.

    Storage errors propagate to the caller.
    """
    start, end = month_bounds(month)

    category = aliased(LookupValue)
    group = aliased(LookupValue)

    stmt = (
        select(
            Attendance,
            Participant.name,
            category.value,
            group.value,
        )
        .outerjoin(Participant, Attendance.participant_id == Participant.id)
        .outerjoin(category, Participant.category_id == category.id)
        .outerjoin(group, Participant.group_id == group.id)
        .where(
            and_(
                Attendance.form_id == form_id,
                Attendance.timestamp >= start,
                Attendance.timestamp < end,
                Attendance.is_pending.is_(False),
            )
        )
        .order_by(Attendance.timestamp.asc(), Attendance.id.asc())
    )

    result = await db.execute(stmt)

    records: List[AttendanceRecord] = []
    for att, participant_name, category_value, group_value in result.all():
        records.append(
            AttendanceRecord(
                id=att.id,
                form_id=att.form_id,
                participant_id=att.participant_id,
                status=normalize_status(att.status),
                timestamp=att.timestamp,
                is_pending=att.is_pending,
                temp_name=att.temp_name,
                temp_category=att.temp_category,
                temp_group=att.temp_group,
                participant_name=participant_name or att.temp_name,
                category_value=category_value or att.temp_category,
                group_value=group_value or att.temp_group,
            )
        )

    logger.debug(
        "Fetched %d attendance row(s) for form %s in %s",
        len(records),
        form_id,
        start.strftime("%Y-%m"),
    )
    return records


async def fetch_census_participants(
    db: AsyncSession,
    allowed_categories: Sequence[str],
) -> List[CensusParticipant]:
    """
    Fetch the census: active participants whose category is allowed.

    Participants without a category are never part of a census.
    """
    if not allowed_categories:
        return []

    category = aliased(LookupValue)
    group = aliased(LookupValue)

    stmt = (
        select(Participant.id, Participant.name, category.value, group.value)
        .join(category, Participant.category_id == category.id)
        .outerjoin(group, Participant.group_id == group.id)
        .where(
            and_(
                Participant.status_active.is_(True),
                category.value.in_(list(allowed_categories)),
            )
        )
        .order_by(Participant.name.asc(), Participant.id.asc())
    )

    result = await db.execute(stmt)

    return [
        CensusParticipant(
            id=participant_id,
            name=name,
            category=category_value,
            group=group_value,
        )
        for participant_id, name, category_value, group_value in result.all()
    ]

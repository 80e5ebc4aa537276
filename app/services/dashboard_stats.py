# app/services/dashboard_stats.py
from __future__ import annotations

from datetime import date as date_type

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dates import month_bounds, month_key
from app.models.attendance import Attendance
from app.models.participant import Participant
from app.models.pending_participant import PendingParticipant
from app.schemas.attendance import STORED_STATUS_MAP, AttendanceStatus
from app.schemas.dashboard import DashboardStats


def _stored_values(status: AttendanceStatus) -> list[str]:
    """
    Every stored spelling of a recap status (e.g. HADIR and PRESENT).
    """
    values = [raw for raw, mapped in STORED_STATUS_MAP.items() if mapped == status.value]
    values.append(status.value)
    return values


async def compute_dashboard_stats(
    db: AsyncSession,
    month: date_type,
) -> DashboardStats:
    """
    Headline counters for the dashboard across all forms.

    - total_participants: active roster entries
    - total_present / total_excused: non-pending check-ins inside the UTC month
    - pending_approvals: registrations with status "pending"
    """
    start, end = month_bounds(month)

    participants_stmt = select(func.count(Participant.id)).where(
        Participant.status_active.is_(True)
    )
    total_participants = (await db.execute(participants_stmt)).scalar_one()

    async def _count_status(status: AttendanceStatus) -> int:
        stmt = select(func.count(Attendance.id)).where(
            and_(
                Attendance.status.in_(_stored_values(status)),
                Attendance.timestamp >= start,
                Attendance.timestamp < end,
                Attendance.is_pending.is_(False),
            )
        )
        return (await db.execute(stmt)).scalar_one()

    total_present = await _count_status(AttendanceStatus.PRESENT)
    total_excused = await _count_status(AttendanceStatus.EXCUSED)

    pending_stmt = select(func.count(PendingParticipant.id)).where(
        PendingParticipant.status == "pending"
    )
    pending_approvals = (await db.execute(pending_stmt)).scalar_one()

    return DashboardStats(
        month_key=month_key(month),
        total_participants=total_participants or 0,
        total_present=total_present or 0,
        total_excused=total_excused or 0,
        pending_approvals=pending_approvals or 0,
    )

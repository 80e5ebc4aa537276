# app/services/recap_insights.py
from __future__ import annotations

import math
from typing import Dict, List

from app.schemas.recap import (
    FollowUpEntry,
    FollowUpList,
    FollowUpSeverity,
    GroupRecap,
    MonthlyFormRecap,
)

UNKNOWN_GROUP = "Unknown"

CRITICAL_BELOW_PERCENT = 25
LOW_BELOW_PERCENT = 50


def summarize_groups(recap: MonthlyFormRecap) -> List[GroupRecap]:
    """
    Per-group attendance derived from the participants of a recap.

    Rules
    -----
    - census        = number of recap participants in the group
    - present_count = sum of their present counts
    - rate          = present_count / (census * total_meetings), where a month
                      without meetings is treated as one meeting
    - blank group labels are reported as "Unknown"
    - sorted by rate descending, then by group name
    """
    by_group: Dict[str, Dict[str, int]] = {}

    for p in recap.participants:
        group = (p.participant_group or "").strip() or UNKNOWN_GROUP
        stats = by_group.setdefault(group, {"census": 0, "present": 0})
        stats["census"] += 1
        stats["present"] += p.present_count

    total_meetings = recap.totals.total_meetings or 1

    rows: List[GroupRecap] = []
    for group, stats in by_group.items():
        max_possible = stats["census"] * total_meetings
        rate = stats["present"] / float(max_possible) if max_possible > 0 else 0.0
        rows.append(
            GroupRecap(
                group=group,
                census=stats["census"],
                present_count=stats["present"],
                attendance_rate=rate,
            )
        )

    rows.sort(key=lambda r: (-r.attendance_rate, r.group))
    return rows


def classify_severity(attendance_percent: int) -> FollowUpSeverity:
    if attendance_percent < CRITICAL_BELOW_PERCENT:
        return FollowUpSeverity.CRITICAL
    if attendance_percent < LOW_BELOW_PERCENT:
        return FollowUpSeverity.LOW
    return FollowUpSeverity.OK


def select_follow_up(recap: MonthlyFormRecap, limit: int = 8) -> FollowUpList:
    """
    The `limit` participants with the weakest attendance, worst first.

    Relies on `recap.participants` already being sorted ascending by rate.
    """
    if limit < 0:
        raise ValueError("limit must be greater than or equal to 0")

    total_meetings = recap.totals.total_meetings
    entries: List[FollowUpEntry] = []

    for p in recap.participants[:limit]:
        percent = int(math.floor(p.attendance_rate * 100 + 0.5))
        entries.append(
            FollowUpEntry(
                participant_id=p.participant_id,
                participant_name=p.participant_name,
                participant_group=p.participant_group,
                present_count=p.present_count,
                total_meetings=total_meetings,
                attendance_percent=percent,
                severity=classify_severity(percent),
            )
        )

    return FollowUpList(
        month_key=recap.month_key,
        total_meetings=total_meetings,
        entries=entries,
        remaining=max(len(recap.participants) - limit, 0),
    )

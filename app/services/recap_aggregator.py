# app/services/recap_aggregator.py
from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date as date_type
from typing import Dict, Iterable, List, Optional

from app.core.dates import meeting_date_key, month_key
from app.schemas.attendance import AttendanceRecord, AttendanceStatus, CensusParticipant
from app.schemas.recap import (
    MeetingRecap,
    MonthlyFormRecap,
    ParticipantMonthlyRecap,
    RateMode,
    RecapTotals,
    UnmatchedKeyPolicy,
)

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "Unknown"

PRESENT = AttendanceStatus.PRESENT.value
EXCUSED = AttendanceStatus.EXCUSED.value


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _ratio(numerator: int, denominator: int) -> float:
    if denominator <= 0:
        return 0.0
    return numerator / float(denominator)


def participant_key(
    record: AttendanceRecord,
    policy: UnmatchedKeyPolicy = UnmatchedKeyPolicy.NAME,
) -> Optional[str]:
    """
    Identity key of a record, or None when it cannot be resolved.

    Matched rows use their participant_id. Unmatched rows use a synthetic
    `temp_` key built from the temp name (and, depending on `policy`, the
    declared category and group).
    """
    participant_id = _clean(record.participant_id)
    if participant_id:
        return participant_id

    temp_name = _clean(record.temp_name)
    if not temp_name:
        return None

    if policy == UnmatchedKeyPolicy.NAME_CATEGORY_GROUP:
        category = _clean(record.temp_category) or _clean(record.category_value) or ""
        group = _clean(record.temp_group) or _clean(record.group_value) or ""
        return f"temp_{temp_name}|{category}|{group}"

    return f"temp_{temp_name}"


def compute_org_rates(
    total_present: int,
    total_excused: int,
    total_meetings: int,
    total_census: int,
    total_submissions: int,
    rate_mode: RateMode,
) -> tuple[float, float]:
    """
    Organization-wide (attendance_rate, excused_rate) for the given mode.

    Every denominator is guarded; a zero denominator yields 0.0.
    """
    max_possible = total_meetings * total_census

    if rate_mode == RateMode.SUBMISSION or (
        rate_mode == RateMode.AUTO and max_possible <= 0
    ):
        return (
            _ratio(total_present, total_submissions),
            _ratio(total_excused, total_submissions),
        )

    return (
        _ratio(total_present, max_possible),
        _ratio(total_excused, max_possible),
    )


def _group_by_date(records: Iterable[AttendanceRecord]) -> Dict[str, List[AttendanceRecord]]:
    by_date: Dict[str, List[AttendanceRecord]] = defaultdict(list)
    for rec in records:
        date_key = meeting_date_key(rec.timestamp)
        # Callers filter invalid timestamps beforehand.
        if date_key is not None:
            by_date[date_key].append(rec)
    return by_date


def _build_meetings(by_date: Dict[str, List[AttendanceRecord]]) -> List[MeetingRecap]:
    meetings: List[MeetingRecap] = []
    for date_key, recs in by_date.items():
        meetings.append(
            MeetingRecap(
                date=date_key,
                present_count=sum(1 for r in recs if r.status == PRESENT),
                excused_count=sum(1 for r in recs if r.status == EXCUSED),
                total_submissions=len(recs),
            )
        )
    meetings.sort(key=lambda m: m.date)
    return meetings


def _build_participants(
    records: Iterable[AttendanceRecord],
    census_by_id: Dict[str, CensusParticipant],
    total_meetings: int,
    policy: UnmatchedKeyPolicy,
) -> List[ParticipantMonthlyRecap]:
    tallies: Dict[str, Dict[str, object]] = {}

    for rec in records:
        key = participant_key(rec, policy)
        if key is None:
            logger.debug("Attendance %s has no resolvable identity; not tallied", rec.id)
            continue

        if key not in tallies:
            census_info = census_by_id.get(_clean(rec.participant_id) or "")
            if census_info is not None:
                name = census_info.name
                group = census_info.group
                category = census_info.category
            else:
                name = rec.participant_name or rec.temp_name
                group = rec.group_value or rec.temp_group
                category = rec.category_value or rec.temp_category
            tallies[key] = {
                "name": _clean(name) or UNKNOWN_NAME,
                "group": group,
                "category": category,
                "present": 0,
                "excused": 0,
                "total": 0,
            }

        tally = tallies[key]
        tally["total"] += 1  # type: ignore[operator]
        if rec.status == PRESENT:
            tally["present"] += 1  # type: ignore[operator]
        elif rec.status == EXCUSED:
            tally["excused"] += 1  # type: ignore[operator]

    participants: List[ParticipantMonthlyRecap] = []
    for key, tally in tallies.items():
        present: int = tally["present"]  # type: ignore[assignment]
        excused: int = tally["excused"]  # type: ignore[assignment]
        participants.append(
            ParticipantMonthlyRecap(
                participant_id=key,
                participant_name=tally["name"],
                participant_group=tally["group"],
                participant_category=tally["category"],
                present_count=present,
                excused_count=excused,
                total_count=tally["total"],
                attendance_rate=_ratio(present, total_meetings),
                excused_rate=_ratio(excused, total_meetings),
            )
        )

    # Worst attendance first for the follow-up view.
    participants.sort(
        key=lambda p: (p.attendance_rate, p.participant_name, p.participant_id)
    )
    return participants


def aggregate_monthly_recap(
    records: Iterable[AttendanceRecord],
    month: date_type,
    census: Iterable[CensusParticipant] = (),
    rate_mode: RateMode = RateMode.CENSUS,
    unmatched_key_policy: UnmatchedKeyPolicy = UnmatchedKeyPolicy.NAME,
) -> MonthlyFormRecap:
    """
    Aggregate raw attendance rows of one form and month into a recap.

    Steps
    -----
    1) Drop rows whose timestamp cannot be read (counted as skipped).
    2) Group rows by UTC calendar date -> one MeetingRecap per date.
    3) Group rows by identity -> one ParticipantMonthlyRecap per key,
       display fields taken from the census when the participant is in it.
    4) Per-participant rate = present / total_meetings, sorted ascending.
    5) Totals and org-wide rates according to `rate_mode`.

    Rows are expected to be pre-filtered by the fetchers (form, month,
    pending state); nothing is re-filtered here. Duplicate check-ins are
    counted as-is. Statuses other than PRESENT/EXCUSED only count as
    submissions.

    Raises
    ------
    ValueError
        If `month` is not a date.
    """
    recap_month_key = month_key(month)
    census_list = list(census)
    total_census = len(census_list)
    census_by_id = {p.id: p for p in census_list}

    valid: List[AttendanceRecord] = []
    skipped = 0
    for rec in records:
        if meeting_date_key(rec.timestamp) is None:
            skipped += 1
            continue
        valid.append(rec)

    if skipped:
        logger.warning(
            "Skipped %d attendance row(s) with missing or invalid timestamp for %s",
            skipped,
            recap_month_key,
        )

    if not valid:
        # No meetings took place: every counter, census included, stays at 0.
        return MonthlyFormRecap(
            month_key=recap_month_key,
            meetings=[],
            participants=[],
            totals=RecapTotals(
                rate_mode=rate_mode,
                skipped_records=skipped,
            ),
        )

    meetings = _build_meetings(_group_by_date(valid))
    total_meetings = len(meetings)

    participants = _build_participants(
        valid,
        census_by_id,
        total_meetings,
        unmatched_key_policy,
    )

    total_present = sum(m.present_count for m in meetings)
    total_excused = sum(m.excused_count for m in meetings)
    total_submissions = len(valid)

    attendance_rate, excused_rate = compute_org_rates(
        total_present=total_present,
        total_excused=total_excused,
        total_meetings=total_meetings,
        total_census=total_census,
        total_submissions=total_submissions,
        rate_mode=rate_mode,
    )

    return MonthlyFormRecap(
        month_key=recap_month_key,
        meetings=meetings,
        participants=participants,
        totals=RecapTotals(
            total_meetings=total_meetings,
            total_present=total_present,
            total_excused=total_excused,
            total_submissions=total_submissions,
            total_census=total_census,
            attendance_rate=attendance_rate,
            excused_rate=excused_rate,
            avg_present_per_meeting=_ratio(total_present, total_meetings),
            rate_mode=rate_mode,
            skipped_records=skipped,
        ),
    )

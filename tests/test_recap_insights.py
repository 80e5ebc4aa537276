# tests/test_recap_insights.py
from datetime import date, datetime, timezone

import pytest

from app.schemas.attendance import AttendanceRecord, CensusParticipant
from app.schemas.recap import FollowUpSeverity, MonthlyFormRecap
from app.services.recap_aggregator import aggregate_monthly_recap
from app.services.recap_insights import classify_severity, select_follow_up, summarize_groups


def _recap() -> MonthlyFormRecap:
    """
    4 meetings; p1 (Cakra) attends all, p2 (Cakra) attends 1,
    p3 (Limo) attends 2, temp Jane (no group) attends 3.
    """
    census = [
        CensusParticipant(id="p1", name="Ahmad", group="Cakra", category="GPN A"),
        CensusParticipant(id="p2", name="Budi", group="Cakra", category="GPN A"),
        CensusParticipant(id="p3", name="Citra", group="Limo", category="GPN B"),
    ]
    attendance = {"p1": [3, 10, 17, 24], "p2": [3], "p3": [10, 17], None: [3, 10, 24]}

    records = []
    for pid, days in attendance.items():
        for day in days:
            records.append(
                AttendanceRecord(
                    id=f"{pid}-{day}",
                    form_id="f1",
                    participant_id=pid,
                    status="PRESENT",
                    timestamp=datetime(2025, 11, day, 19, tzinfo=timezone.utc),
                    temp_name=None if pid else "Jane",
                    participant_name=None if pid else "Jane",
                )
            )
    return aggregate_monthly_recap(records, date(2025, 11, 1), census)


def test_summarize_groups_rates_and_order():
    rows = summarize_groups(_recap())

    assert [r.group for r in rows] == ["Unknown", "Cakra", "Limo"]

    unknown, cakra, limo = rows
    assert unknown.census == 1
    assert unknown.present_count == 3
    assert unknown.attendance_rate == pytest.approx(0.75)

    assert cakra.census == 2
    assert cakra.present_count == 5
    assert cakra.attendance_rate == pytest.approx(5 / 8)

    assert limo.census == 1
    assert limo.attendance_rate == pytest.approx(0.5)


def test_summarize_groups_empty_recap():
    recap = aggregate_monthly_recap([], date(2025, 11, 1), [])

    assert summarize_groups(recap) == []


def test_select_follow_up_worst_first_with_limit():
    follow_up = select_follow_up(_recap(), limit=2)

    assert follow_up.month_key == "2025-11"
    assert follow_up.total_meetings == 4
    assert [e.participant_id for e in follow_up.entries] == ["p2", "p3"]
    assert follow_up.entries[0].attendance_percent == 25
    assert follow_up.entries[0].severity == FollowUpSeverity.LOW
    assert follow_up.entries[1].attendance_percent == 50
    assert follow_up.entries[1].severity == FollowUpSeverity.OK
    assert follow_up.remaining == 2


def test_select_follow_up_limit_larger_than_participants():
    follow_up = select_follow_up(_recap(), limit=50)

    assert len(follow_up.entries) == 4
    assert follow_up.remaining == 0


def test_select_follow_up_rejects_negative_limit():
    with pytest.raises(ValueError):
        select_follow_up(_recap(), limit=-1)


@pytest.mark.parametrize(
    "percent, expected",
    [
        (0, FollowUpSeverity.CRITICAL),
        (24, FollowUpSeverity.CRITICAL),
        (25, FollowUpSeverity.LOW),
        (49, FollowUpSeverity.LOW),
        (50, FollowUpSeverity.OK),
        (100, FollowUpSeverity.OK),
    ],
)
def test_classify_severity_thresholds(percent, expected):
    assert classify_severity(percent) == expected


def _eight_meeting_recap() -> MonthlyFormRecap:
    """
    8 meetings; p1 attends all, p2 attends 1, p3 attends 5.
    """
    census = [
        CensusParticipant(id="p1", name="Ahmad", group="Cakra", category="GPN A"),
        CensusParticipant(id="p2", name="Budi", group="Cakra", category="GPN A"),
        CensusParticipant(id="p3", name="Citra", group="Limo", category="GPN B"),
    ]
    days = [1, 4, 8, 11, 15, 18, 22, 25]
    attendance = {"p1": days, "p2": days[:1], "p3": days[:5]}

    records = [
        AttendanceRecord(
            id=f"{pid}-{day}",
            form_id="f1",
            participant_id=pid,
            status="PRESENT",
            timestamp=datetime(2025, 11, day, 19, tzinfo=timezone.utc),
        )
        for pid, attended in attendance.items()
        for day in attended
    ]
    return aggregate_monthly_recap(records, date(2025, 11, 1), census)


def test_select_follow_up_rounds_half_percent_up():
    follow_up = select_follow_up(_eight_meeting_recap(), limit=2)

    assert follow_up.total_meetings == 8
    budi, citra = follow_up.entries
    # 1/8 = 12.5% and 5/8 = 62.5%
    assert budi.participant_id == "p2"
    assert budi.attendance_percent == 13
    assert budi.severity == FollowUpSeverity.CRITICAL
    assert citra.participant_id == "p3"
    assert citra.attendance_percent == 63

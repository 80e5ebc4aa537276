# app/schemas/recap.py
from datetime import date
from enum import Enum

from pydantic import Field

from app.schemas.attendance import AttendanceRecord, CensusParticipant
from app.schemas.base import CamelModel


class RateMode(str, Enum):
    """
    Formula used for the organization-wide attendance/excused rates.

    - CENSUS:     present / (total_meetings * total_census), 0 without a census.
    - SUBMISSION: present / total_submissions.
    - AUTO:       CENSUS when its denominator is positive, else SUBMISSION.
    """

    CENSUS = "CENSUS"
    SUBMISSION = "SUBMISSION"
    AUTO = "AUTO"


class UnmatchedKeyPolicy(str, Enum):
    """
    How submissions without a participant_id are keyed.

    - NAME:                `temp_<name>`; same-named strangers share one row.
    - NAME_CATEGORY_GROUP: name plus declared category and group.
    """

    NAME = "NAME"
    NAME_CATEGORY_GROUP = "NAME_CATEGORY_GROUP"


class FollowUpSeverity(str, Enum):
    CRITICAL = "CRITICAL"
    LOW = "LOW"
    OK = "OK"


class MeetingRecap(CamelModel):
    """
    Attendance counts for one meeting (one calendar date, UTC).
    """

    date: str = Field(..., description="Meeting date (YYYY-MM-DD).", example="2025-11-03")
    present_count: int = Field(..., description="PRESENT submissions.", example=18)
    excused_count: int = Field(..., description="EXCUSED submissions.", example=2)
    total_submissions: int = Field(
        ...,
        description="All submissions for the date, including unrecognized statuses.",
        example=20,
    )


class ParticipantMonthlyRecap(CamelModel):
    """
    Monthly tally for one resolved identity.
    """

    participant_id: str = Field(
        ...,
        description="Participant id, or a synthetic `temp_...` key for unmatched submitters.",
        example="temp_Jane",
    )
    participant_name: str = Field(..., example="Jane")
    participant_group: str | None = Field(None, example="Cakra")
    participant_category: str | None = Field(None, example="GPN A")
    present_count: int = Field(..., example=3)
    excused_count: int = Field(..., example=1)
    total_count: int = Field(
        ...,
        description="All submissions attributed to this identity.",
        example=4,
    )
    attendance_rate: float = Field(
        ...,
        description="present_count / total_meetings (0 when there are no meetings).",
        example=0.75,
    )
    excused_rate: float = Field(
        ...,
        description="excused_count / total_meetings (0 when there are no meetings).",
        example=0.25,
    )


class RecapTotals(CamelModel):
    total_meetings: int = Field(0, description="Distinct meeting dates.")
    total_present: int = Field(0)
    total_excused: int = Field(0)
    total_submissions: int = Field(0)
    total_census: int = Field(0, description="Eligible participants for the form.")
    attendance_rate: float = Field(0.0, description="Org-wide rate per `rate_mode`.")
    excused_rate: float = Field(0.0, description="Org-wide excused rate per `rate_mode`.")
    avg_present_per_meeting: float = Field(0.0)
    rate_mode: RateMode = Field(RateMode.CENSUS, description="Formula used for the rates.")
    skipped_records: int = Field(
        0,
        description="Rows excluded because their timestamp could not be interpreted.",
    )


class MonthlyFormRecap(CamelModel):
    """
    Aggregated read-only summary of one form for one month.
    """

    month_key: str = Field(..., description="Month (YYYY-MM).", example="2025-11")
    meetings: list[MeetingRecap] = Field(default_factory=list)
    participants: list[ParticipantMonthlyRecap] = Field(default_factory=list)
    totals: RecapTotals = Field(default_factory=RecapTotals)


class GroupRecap(CamelModel):
    """
    Attendance of one participant group within a monthly recap.
    """

    group: str = Field(..., example="Cakra")
    census: int = Field(..., description="Participants of the group present in the recap.")
    present_count: int = Field(...)
    attendance_rate: float = Field(
        ...,
        description="present_count / (census * total_meetings).",
        example=0.6,
    )


class FollowUpEntry(CamelModel):
    participant_id: str
    participant_name: str
    participant_group: str | None = None
    present_count: int
    total_meetings: int
    attendance_percent: int = Field(..., description="Rounded attendance rate in percent.")
    severity: FollowUpSeverity


class FollowUpList(CamelModel):
    """
    Participants with the weakest attendance, worst first.
    """

    month_key: str
    total_meetings: int
    entries: list[FollowUpEntry]
    remaining: int = Field(..., description="Participants not listed because of the limit.")


class AggregateRequest(CamelModel):
    """
    Body of the internal aggregation endpoint: pre-fetched rows and census.
    """

    month: date = Field(..., description="Any day of the recapped month.", example="2025-11-01")
    records: list[AttendanceRecord] = Field(default_factory=list)
    census: list[CensusParticipant] = Field(default_factory=list)
    rate_mode: RateMode | None = None
    unmatched_key_policy: UnmatchedKeyPolicy | None = None

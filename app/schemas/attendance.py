# app/schemas/attendance.py
from datetime import datetime
from enum import Enum

from pydantic import Field

from app.schemas.base import CamelModel


class AttendanceStatus(str, Enum):
    """
    Check-in outcomes understood by the recap engine.
    """

    PRESENT = "PRESENT"
    EXCUSED = "EXCUSED"


# Values persisted by the public check-in forms.
STORED_STATUS_MAP = {
    "HADIR": AttendanceStatus.PRESENT.value,
    "IZIN": AttendanceStatus.EXCUSED.value,
}


def normalize_status(raw: str | None) -> str:
    """
    Map a stored status to its recap value.

    Unknown values are returned unchanged so the aggregator can count them as
    submissions without attributing them to present/excused.
    """
    if raw is None:
        return ""
    value = raw.strip()
    return STORED_STATUS_MAP.get(value.upper(), value)


class AttendanceRecord(CamelModel):
    """
    One check-in event for a form, already restricted to a month and already
    resolved to display fields by the fetcher.
    """

    id: str = Field(
        ...,
        description="Opaque unique identifier of the attendance row.",
        example="0b6c1f2e-6f0e-4a55-9a7c-3b3a1a0d2c11",
    )
    form_id: str = Field(
        ...,
        description="Recurring meeting series (attendance form) this row belongs to.",
        example="ead72bcf-128c-4542-8baa-adc11fae27b4",
    )
    participant_id: str | None = Field(
        None,
        description="Matched roster entry; null when the submitter is unmatched.",
    )
    status: str = Field(
        ...,
        description="PRESENT or EXCUSED. Other values are kept verbatim.",
        example="PRESENT",
    )
    timestamp: datetime | str | None = Field(
        None,
        description=(
            "Submission moment. Values that cannot be parsed are kept as "
            "received so a single bad row is skipped instead of rejected."
        ),
        example="2025-11-03T19:30:00Z",
    )
    is_pending: bool = Field(
        False,
        description="True while the row awaits admin reconciliation.",
    )
    temp_name: str | None = Field(
        None,
        description="Free-text name of an unmatched submitter.",
    )
    temp_category: str | None = Field(
        None,
        description="Self-declared category of an unmatched submitter.",
    )
    temp_group: str | None = Field(
        None,
        description="Self-declared group of an unmatched submitter.",
    )
    participant_name: str | None = Field(
        None,
        description="Resolved participant name (temp_name as fallback).",
    )
    category_value: str | None = Field(
        None,
        description="Resolved category label.",
    )
    group_value: str | None = Field(
        None,
        description="Resolved group label.",
    )


class CensusParticipant(CamelModel):
    """
    An active participant eligible to be counted in census-based rates.
    """

    id: str = Field(..., description="Participant identifier.")
    name: str = Field(..., description="Participant display name.", example="Ahmad")
    group: str | None = Field(None, description="Group label.", example="Cakra")
    category: str | None = Field(None, description="Category label.", example="GPN A")

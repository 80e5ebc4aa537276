# app/schemas/dashboard.py
from pydantic import Field

from app.schemas.base import CamelModel


class DashboardFormConfig(CamelModel):
    """
    A recurring attendance form that has a monthly recap on the dashboard.
    """

    key: str = Field(..., description="Short key used in URLs.", example="profmud")
    title: str = Field(..., example="Pengajian GPN Profmud")
    description: str = Field("", example="Rekap bulanan per pertemuan (kategori GPN A & GPN B)")
    form_id: str = Field(..., description="Identifier of the attendance form.")
    allowed_categories: list[str] = Field(
        ...,
        description="Participant categories counted in the census for this form.",
        example=["GPN A", "GPN B"],
    )


class DashboardStats(CamelModel):
    """
    Headline counters shown at the top of the admin dashboard.
    """

    month_key: str = Field(..., example="2025-11")
    total_participants: int = Field(..., description="Active participants.", example=120)
    total_present: int = Field(..., description="PRESENT check-ins this month.", example=340)
    total_excused: int = Field(..., description="EXCUSED check-ins this month.", example=25)
    pending_approvals: int = Field(
        ...,
        description="Registrations waiting for admin approval.",
        example=4,
    )

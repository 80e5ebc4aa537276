# app/models/attendance.py
import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from app.db.base import Base


class Attendance(Base):
    """
    A single check-in submitted through a public attendance form.

    Either `participant_id` is set (matched submitter) or the `temp_*`
    columns describe an unmatched submitter awaiting reconciliation.
    """

    __tablename__ = "attendance"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    form_id = Column(String(36), nullable=False, index=True)

    participant_id = Column(
        String(36),
        ForeignKey("participants.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Stored as submitted by the forms: HADIR / IZIN
    status = Column(String(16), nullable=False)

    timestamp = Column(DateTime(timezone=True), nullable=False, index=True)

    is_pending = Column(Boolean, nullable=False, default=False)

    temp_name = Column(String(255), nullable=True)
    temp_category = Column(String(128), nullable=True)
    temp_group = Column(String(128), nullable=True)

    participant = relationship("Participant", backref="attendance")

    def __repr__(self) -> str:
        return (
            f"<Attendance id={self.id} form_id={self.form_id} "
            f"participant_id={self.participant_id} status={self.status}>"
        )

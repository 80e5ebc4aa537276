# app/models/pending_participant.py
import uuid

from sqlalchemy import Column, String

from app.db.base import Base


class PendingParticipant(Base):
    """
    Self-registration waiting for an admin to approve, merge or reject it.
    """

    __tablename__ = "pending_participants"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    suggested_category = Column(String(128), nullable=True)
    suggested_group = Column(String(128), nullable=True)

    # pending / approved / rejected
    status = Column(String(16), nullable=False, default="pending", index=True)

    def __repr__(self) -> str:
        return f"<PendingParticipant id={self.id} name={self.name} status={self.status}>"

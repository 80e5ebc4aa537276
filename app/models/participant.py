# app/models/participant.py
import uuid

from sqlalchemy import Boolean, Column, ForeignKey, String
from sqlalchemy.orm import relationship

from app.db.base import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class LookupValue(Base):
    """
    Admin-managed label (participant category or group).
    """

    __tablename__ = "lookup_values"

    id = Column(String(36), primary_key=True, default=_uuid)
    type = Column(String(32), nullable=False, index=True)
    value = Column(String(128), nullable=False)

    def __repr__(self) -> str:
        return f"<LookupValue id={self.id} type={self.type} value={self.value}>"


class Participant(Base):
    """
    Roster entry for a person whose attendance is tracked.
    """

    __tablename__ = "participants"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), nullable=False)
    status_active = Column(Boolean, nullable=False, default=True, index=True)

    category_id = Column(
        String(36),
        ForeignKey("lookup_values.id", ondelete="SET NULL"),
        nullable=True,
    )
    group_id = Column(
        String(36),
        ForeignKey("lookup_values.id", ondelete="SET NULL"),
        nullable=True,
    )

    category = relationship("LookupValue", foreign_keys=[category_id])
    group = relationship("LookupValue", foreign_keys=[group_id])

    def __repr__(self) -> str:
        return (
            f"<Participant id={self.id} name={self.name} "
            f"active={self.status_active}>"
        )

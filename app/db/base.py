# app/db/base.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models in the Attendance Recap service.

    Models register themselves on import; `app.db.session` imports all of
    them so `Base.metadata` is complete before schema creation.
    """
    pass

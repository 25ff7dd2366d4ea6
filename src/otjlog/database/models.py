"""SQLAlchemy models for the otjlog database."""

from datetime import datetime, UTC
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Integer,
    Numeric,
    String,
    Time,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class Entry(Base):
    """Journal entry model.

    KSBs and documents are stored as JSON copies taken when the entry was
    saved, not as references to other tables.
    """

    __tablename__ = "entries"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    category = Column(String, nullable=False)
    description = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)
    total_hours = Column(Numeric(6, 1), nullable=False, default=0)
    is_off_the_job = Column(Boolean, default=True, nullable=False)
    ksbs = Column(JSON, nullable=False, default=list)
    documents = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Holiday(Base):
    """Holiday settings model, one row per apprentice."""

    __tablename__ = "holidays"

    id = Column(Integer, primary_key=True)
    apprentice_id = Column(Integer, unique=True, nullable=False)
    holiday_mode = Column(Boolean, default=False, nullable=False)
    days_used = Column(Integer, default=0, nullable=False)
    allowance = Column(Integer, default=28, nullable=False)


class KSB(Base):
    """KSB reference tag model."""

    __tablename__ = "ksbs"

    id = Column(String, primary_key=True)
    type = Column(String, nullable=False)
    description = Column(String, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)

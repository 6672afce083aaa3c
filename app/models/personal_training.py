import datetime as dt
from enum import Enum

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def _utc_naive_now() -> dt.datetime:
    """Naive UTC for TIMESTAMP WITHOUT TIME ZONE columns."""
    return dt.datetime.now(dt.UTC).replace(tzinfo=None)


class TrainingStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    REJECTED = "REJECTED"


# Bookings in these states hold the trainer's time
ACTIVE_STATUSES = (TrainingStatus.PENDING, TrainingStatus.CONFIRMED)


class PersonalTraining(SQLModel, table=True):
    """One-on-one booking; `time` is the "HH:MM" start, duration is implicit."""

    __tablename__ = "personal_trainings"
    id: int | None = Field(default=None, primary_key=True)
    trainer_id: int = Field(foreign_key="users.id", index=True)
    client_id: int = Field(foreign_key="users.id", index=True)
    date: dt.date = Field(index=True)
    time: str
    status: TrainingStatus = Field(default=TrainingStatus.PENDING, index=True)
    message: str | None = None
    created_at: dt.datetime = Field(default_factory=_utc_naive_now, sa_type=DateTime)

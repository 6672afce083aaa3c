import datetime as dt

from sqlmodel import Field, SQLModel


class TrainingSession(SQLModel, table=True):
    """Group class run by a trainer. Times are "HH:MM" wall-clock strings."""

    __tablename__ = "training_sessions"
    id: int | None = Field(default=None, primary_key=True)
    title: str
    trainer_id: int = Field(foreign_key="users.id", index=True)
    date: dt.date = Field(index=True)
    start_time: str
    end_time: str
    max_participants: int
    is_recurring: bool = False


class TrainingSessionParticipant(SQLModel, table=True):
    __tablename__ = "training_session_participants"
    session_id: int = Field(foreign_key="training_sessions.id", primary_key=True)
    user_id: int = Field(foreign_key="users.id", primary_key=True)

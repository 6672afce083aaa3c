import datetime as dt
from typing import Literal

from pydantic import Field, model_validator

from app.api.schemas.base import CamelModel
from app.api.schemas.personal_training import HHMM_PATTERN


class CreateTrainingSessionRequest(CamelModel):
    title: str = Field(min_length=1)
    date: dt.date
    start_time: str = Field(pattern=HHMM_PATTERN)
    end_time: str = Field(pattern=HHMM_PATTERN)
    max_participants: int = Field(gt=0)
    is_recurring: bool = False

    @model_validator(mode="after")
    def end_after_start(self) -> "CreateTrainingSessionRequest":
        if self.end_time <= self.start_time:
            raise ValueError("endTime must be after startTime")
        return self


class TrainingSessionPublic(CamelModel):
    id: int
    title: str
    trainer_id: int
    date: dt.date
    start_time: str
    end_time: str
    max_participants: int
    is_recurring: bool


class CalendarEntry(CamelModel):
    """One item of the caller's calendar; group and personal sessions share this shape."""

    id: str
    title: str
    date: str  # YYYY-MM-DD
    start: str  # YYYY-MM-DDTHH:MM[:SS]
    end: str
    trainer_id: int
    max_participants: int
    current_participants: int
    is_user_registered: bool
    is_recurring: bool
    type: Literal["GROUP", "PERSONAL"]
    client_id: int | None = None
    status: str | None = None


class RegistrationStatus(CamelModel):
    is_registered: bool


class SessionDetails(CamelModel):
    title: str
    date: dt.date
    start_time: str
    end_time: str
    max_participants: int


class Participant(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str


class SessionParticipants(CamelModel):
    session_details: SessionDetails
    participants: list[Participant]


class MessageResponse(CamelModel):
    message: str

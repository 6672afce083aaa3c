import datetime as dt

from pydantic import Field

from app.api.schemas.base import CamelModel
from app.models.personal_training import TrainingStatus

HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class BookPersonalTrainingRequest(CamelModel):
    trainer_id: int
    date: dt.date
    time: str = Field(pattern=HHMM_PATTERN)  # "HH:MM", 24-hour
    message: str | None = None


class UpdateBookingStatusRequest(CamelModel):
    status: TrainingStatus


class PersonalTrainingPublic(CamelModel):
    id: int
    trainer_id: int
    client_id: int
    date: dt.date
    time: str
    status: TrainingStatus
    message: str | None = None
    created_at: dt.datetime


class BookingTrainer(CamelModel):
    first_name: str
    last_name: str
    price_per_session: float | None = None


class BookingClient(CamelModel):
    first_name: str
    last_name: str
    email: str


class ClientBookingPublic(PersonalTrainingPublic):
    trainer: BookingTrainer


class TrainerBookingPublic(PersonalTrainingPublic):
    client: BookingClient

import datetime as dt

from app.api.schemas.base import CamelModel


class TrainerPublic(CamelModel):
    id: int
    first_name: str
    last_name: str
    specialization: str | None = None
    description: str | None = None
    price_per_session: float | None = None


class TrainerAvailability(CamelModel):
    trainer_id: int
    date: dt.date
    available_times: list[str]

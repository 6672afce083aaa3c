import datetime as dt
import logging

from app.core.config import settings
from app.core.errors import Rejection, forbidden, invalid_request
from app.models.training_session import TrainingSession
from app.models.user import User, UserRole
from app.services.store import GymStore

logger = logging.getLogger(__name__)


async def list_trainers(store: GymStore) -> list[User]:
    return await store.list_trainers()


def _session_dates(first: dt.date, recurring: bool) -> list[dt.date]:
    if not recurring:
        return [first]
    return [first + dt.timedelta(weeks=i) for i in range(settings.recurring_session_weeks)]


async def create_training_sessions(
    store: GymStore,
    trainer_id: int,
    role: str,
    title: str,
    day: dt.date,
    start_time: str,
    end_time: str,
    max_participants: int,
    is_recurring: bool = False,
    today: dt.date | None = None,
) -> list[TrainingSession] | Rejection:
    """Create one group session, or one per week when recurring."""
    if role != UserRole.TRAINER.value:
        return forbidden("Only trainers can create sessions")
    today = today or dt.date.today()
    if day <= today:
        return invalid_request("Cannot create sessions for today or past dates")

    dates = _session_dates(day, is_recurring)
    for d in dates:
        existing = await store.find_overlapping_session(trainer_id, d, start_time, end_time)
        if existing:
            logger.info(
                "Session overlap for trainer %s on %s: %s-%s vs existing %s",
                trainer_id,
                d,
                start_time,
                end_time,
                existing.id,
            )
            return invalid_request("You already have a session scheduled at this time")

    sessions = [
        TrainingSession(
            title=title,
            trainer_id=trainer_id,
            date=d,
            start_time=start_time,
            end_time=end_time,
            max_participants=max_participants,
            is_recurring=is_recurring,
        )
        for d in dates
    ]
    created = await store.create_training_sessions(sessions)
    logger.info("Trainer %s created %d session(s) starting %s", trainer_id, len(created), day)
    return created

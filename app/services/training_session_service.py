import datetime as dt
import logging

from app.api.schemas.training_session import CalendarEntry
from app.core.config import settings
from app.core.errors import Rejection, forbidden, invalid_request, not_found
from app.models.training_session import TrainingSession
from app.models.user import User
from app.services.availability_service import minutes_to_time, time_to_minutes
from app.services.store import GymStore

logger = logging.getLogger(__name__)


def _today() -> dt.date:
    return dt.date.today()


async def list_calendar(store: GymStore, user_id: int, today: dt.date | None = None) -> list[CalendarEntry]:
    """Upcoming group sessions plus the caller's confirmed personal trainings."""
    today = today or _today()
    sessions = await store.list_upcoming_group_sessions(today)
    session_ids = [s.id for s in sessions]
    counts = await store.count_participants(session_ids)
    registered = await store.list_registered_session_ids(user_id, session_ids)
    trainers: dict[int, User | None] = {}
    for s in sessions:
        if s.trainer_id not in trainers:
            trainers[s.trainer_id] = await store.get_user(s.trainer_id)

    entries: list[CalendarEntry] = []
    for s in sessions:
        trainer = trainers.get(s.trainer_id)
        day = s.date.isoformat()
        title = f"{s.title} with {trainer.first_name}" if trainer else s.title
        entries.append(
            CalendarEntry(
                id=str(s.id),
                title=title,
                date=day,
                start=f"{day}T{s.start_time}",
                end=f"{day}T{s.end_time}",
                trainer_id=s.trainer_id,
                max_participants=s.max_participants,
                current_participants=counts.get(s.id, 0),
                is_user_registered=s.id in registered,
                is_recurring=s.is_recurring,
                type="GROUP",
            )
        )

    for booking, trainer in await store.list_confirmed_bookings_for_user(user_id, today):
        day = booking.date.isoformat()
        end_minutes = time_to_minutes(booking.time) + settings.personal_session_minutes
        entries.append(
            CalendarEntry(
                id=f"p{booking.id}",
                title=f"Personal Training with {trainer.first_name}",
                date=day,
                start=f"{day}T{booking.time}:00",
                end=f"{day}T{minutes_to_time(end_minutes)}:00",
                trainer_id=booking.trainer_id,
                max_participants=1,
                current_participants=1,
                is_user_registered=True,
                is_recurring=False,
                type="PERSONAL",
                client_id=booking.client_id,
                status=booking.status.value,
            )
        )
    entries.sort(key=lambda e: e.start)
    return entries


async def register_for_session(store: GymStore, session_id: int, user_id: int) -> TrainingSession | Rejection:
    session = await store.get_training_session(session_id)
    if not session:
        return not_found("Session not found")
    participant_ids = await store.list_participant_ids(session_id)
    if len(participant_ids) >= session.max_participants:
        return invalid_request("Session is full")
    if user_id in participant_ids:
        return invalid_request("Already registered")
    await store.add_participant(session_id, user_id)
    logger.info("User %s registered for session %s", user_id, session_id)
    return session


async def unregister_from_session(store: GymStore, session_id: int, user_id: int) -> TrainingSession | Rejection:
    session = await store.get_training_session(session_id)
    if not session:
        return not_found("Session not found")
    if user_id not in await store.list_participant_ids(session_id):
        return invalid_request("Not registered for this session")
    await store.remove_participant(session_id, user_id)
    logger.info("User %s unregistered from session %s", user_id, session_id)
    return session


async def is_registered(store: GymStore, session_id: int, user_id: int) -> bool | Rejection:
    session = await store.get_training_session(session_id)
    if not session:
        return not_found("Session not found")
    return user_id in await store.list_participant_ids(session_id)


async def get_session_participants(
    store: GymStore, session_id: int, trainer_id: int
) -> tuple[TrainingSession, list[User]] | Rejection:
    session = await store.get_training_session(session_id)
    # Other trainers' sessions look the same as missing ones
    if not session or session.trainer_id != trainer_id:
        return not_found("Session not found or unauthorized")
    return session, await store.list_participants(session_id)


async def remove_participant(
    store: GymStore, session_id: int, participant_id: int, trainer_id: int
) -> TrainingSession | Rejection:
    session = await store.get_training_session(session_id)
    if not session:
        return not_found("Session not found")
    if session.trainer_id != trainer_id:
        return forbidden()
    if participant_id not in await store.list_participant_ids(session_id):
        return not_found("Participant not found in this session")
    await store.remove_participant(session_id, participant_id)
    logger.info("Trainer %s removed participant %s from session %s", trainer_id, participant_id, session_id)
    return session

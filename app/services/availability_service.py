"""Conflict checks for personal training bookings.

A personal session is `personal_session_minutes` long and must keep a
`booking_buffer_minutes` gap to every other commitment of the trainer that
day. The group-session and personal-booking checks use different boundary
rules: a group session rejects a start
anywhere in ``[s - buffer, e]`` or ``[s, e + buffer]`` (inclusive), while
another personal booking at ``u`` rejects a start closer than ``buffer`` to
``u`` or to ``u + duration`` (strict).
"""
import datetime as dt
import logging
from collections.abc import Iterable

from app.core.config import settings
from app.core.errors import ErrorKind, Rejection, not_found
from app.models.personal_training import ACTIVE_STATUSES, PersonalTraining
from app.models.training_session import TrainingSession
from app.services.store import GymStore

logger = logging.getLogger(__name__)


def time_to_minutes(hhmm: str) -> int:
    """Minutes since midnight for an "HH:MM" string."""
    hours, minutes = hhmm.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(total: int) -> str:
    return f"{total // 60:02d}:{total % 60:02d}"


def check_time_window(t: int) -> Rejection | None:
    if t + settings.personal_session_minutes > settings.latest_session_end_minutes:
        return Rejection(
            ErrorKind.INVALID_TIME_WINDOW,
            f"Personal training must end by {minutes_to_time(settings.latest_session_end_minutes)}",
        )
    return None


def conflicts_with_group_session(t: int, session: TrainingSession) -> bool:
    s = time_to_minutes(session.start_time)
    e = time_to_minutes(session.end_time)
    buffer = settings.booking_buffer_minutes
    return (s - buffer <= t <= e) or (s <= t <= e + buffer)


def conflicts_with_personal_booking(t: int, booking: PersonalTraining) -> bool:
    u = time_to_minutes(booking.time)
    buffer = settings.booking_buffer_minutes
    return abs(t - u) < buffer or abs(t - (u + settings.personal_session_minutes)) < buffer


def evaluate_slot(
    time: str,
    group_sessions: Iterable[TrainingSession],
    personal_bookings: Iterable[PersonalTraining],
) -> Rejection | None:
    """Decide a requested start time against the trainer's commitments that day."""
    t = time_to_minutes(time)
    rejection = check_time_window(t)
    if rejection:
        return rejection
    for session in group_sessions:
        if conflicts_with_group_session(t, session):
            return Rejection(
                ErrorKind.SCHEDULING_CONFLICT,
                f"Trainer has a group session {session.start_time}-{session.end_time}; "
                f"personal training needs a {settings.booking_buffer_minutes}-minute break around it",
            )
    for booking in personal_bookings:
        if conflicts_with_personal_booking(t, booking):
            return Rejection(
                ErrorKind.SCHEDULING_CONFLICT,
                f"Trainer has a personal training at {booking.time}; "
                f"sessions must be at least {settings.booking_buffer_minutes} minutes apart",
            )
    return None


async def check_availability(
    store: GymStore, trainer_id: int, day: dt.date, time: str
) -> Rejection | None:
    """None when a booking for `trainer_id` at `day` `time` may be created."""
    # The closing-time rule holds whatever else is on the calendar
    rejection = check_time_window(time_to_minutes(time))
    if rejection:
        return rejection
    trainer = await store.get_trainer(trainer_id)
    if not trainer:
        return not_found("Trainer not found")
    group_sessions = await store.list_group_sessions(trainer_id, day)
    personal_bookings = await store.list_personal_bookings(trainer_id, day, ACTIVE_STATUSES)
    return evaluate_slot(time, group_sessions, personal_bookings)


async def list_available_times(store: GymStore, trainer_id: int, day: dt.date) -> list[str] | Rejection:
    """Hourly start times the trainer can still take a personal booking at."""
    trainer = await store.get_trainer(trainer_id)
    if not trainer:
        return not_found("Trainer not found")
    group_sessions = await store.list_group_sessions(trainer_id, day)
    personal_bookings = await store.list_personal_bookings(trainer_id, day, ACTIVE_STATUSES)
    out: list[str] = []
    for hour in range(settings.availability_start_hour, settings.latest_session_end_hour + 1):
        candidate = f"{hour:02d}:00"
        if evaluate_slot(candidate, group_sessions, personal_bookings) is None:
            out.append(candidate)
    logger.debug("Trainer %s has %d free hour(s) on %s", trainer_id, len(out), day)
    return out

import datetime as dt
from collections.abc import Iterable, Sequence

from fastapi import Depends
from sqlalchemy import and_, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_session
from app.models.personal_training import PersonalTraining, TrainingStatus
from app.models.training_session import TrainingSession, TrainingSessionParticipant
from app.models.user import User, UserRole


class GymStore:
    """Data access for users, group sessions and personal bookings.

    Wraps one request-scoped session. Writes are flushed, never committed;
    the session owner commits or rolls back.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    # --- users ---

    async def get_user(self, user_id: int) -> User | None:
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_trainer(self, trainer_id: int) -> User | None:
        result = await self.session.execute(
            select(User).where(User.id == trainer_id, User.role == UserRole.TRAINER)
        )
        return result.scalar_one_or_none()

    async def list_trainers(self) -> list[User]:
        result = await self.session.execute(
            select(User).where(User.role == UserRole.TRAINER).order_by(User.id)
        )
        return list(result.scalars().all())

    # --- group sessions ---

    async def get_training_session(self, session_id: int) -> TrainingSession | None:
        result = await self.session.execute(
            select(TrainingSession).where(TrainingSession.id == session_id)
        )
        return result.scalar_one_or_none()

    async def list_group_sessions(self, trainer_id: int, day: dt.date) -> list[TrainingSession]:
        result = await self.session.execute(
            select(TrainingSession)
            .where(TrainingSession.trainer_id == trainer_id, TrainingSession.date == day)
            .order_by(TrainingSession.start_time)
        )
        return list(result.scalars().all())

    async def list_upcoming_group_sessions(self, from_day: dt.date) -> list[TrainingSession]:
        result = await self.session.execute(
            select(TrainingSession)
            .where(TrainingSession.date >= from_day)
            .order_by(TrainingSession.date, TrainingSession.start_time)
        )
        return list(result.scalars().all())

    async def find_overlapping_session(
        self, trainer_id: int, day: dt.date, start_time: str, end_time: str
    ) -> TrainingSession | None:
        """An existing session of the trainer covering the new start or the new end.

        "HH:MM" strings compare correctly as text.
        """
        result = await self.session.execute(
            select(TrainingSession)
            .where(
                TrainingSession.trainer_id == trainer_id,
                TrainingSession.date == day,
                or_(
                    and_(TrainingSession.start_time <= start_time, TrainingSession.end_time > start_time),
                    and_(TrainingSession.start_time < end_time, TrainingSession.end_time >= end_time),
                ),
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def create_training_sessions(self, sessions: Sequence[TrainingSession]) -> list[TrainingSession]:
        self.session.add_all(sessions)
        await self.session.flush()
        for s in sessions:
            await self.session.refresh(s)
        return list(sessions)

    async def list_participant_ids(self, session_id: int) -> list[int]:
        result = await self.session.execute(
            select(TrainingSessionParticipant.user_id).where(
                TrainingSessionParticipant.session_id == session_id
            )
        )
        return [row[0] for row in result.all()]

    async def list_participants(self, session_id: int) -> list[User]:
        result = await self.session.execute(
            select(User)
            .join(TrainingSessionParticipant, TrainingSessionParticipant.user_id == User.id)
            .where(TrainingSessionParticipant.session_id == session_id)
            .order_by(User.last_name, User.first_name)
        )
        return list(result.scalars().all())

    async def count_participants(self, session_ids: Iterable[int]) -> dict[int, int]:
        ids = list(session_ids)
        if not ids:
            return {}
        result = await self.session.execute(
            select(TrainingSessionParticipant.session_id, func.count())
            .where(TrainingSessionParticipant.session_id.in_(ids))
            .group_by(TrainingSessionParticipant.session_id)
        )
        return {session_id: count for session_id, count in result.all()}

    async def list_registered_session_ids(self, user_id: int, session_ids: Iterable[int]) -> set[int]:
        ids = list(session_ids)
        if not ids:
            return set()
        result = await self.session.execute(
            select(TrainingSessionParticipant.session_id).where(
                TrainingSessionParticipant.user_id == user_id,
                TrainingSessionParticipant.session_id.in_(ids),
            )
        )
        return {row[0] for row in result.all()}

    async def add_participant(self, session_id: int, user_id: int) -> None:
        self.session.add(TrainingSessionParticipant(session_id=session_id, user_id=user_id))
        await self.session.flush()

    async def remove_participant(self, session_id: int, user_id: int) -> None:
        await self.session.execute(
            delete(TrainingSessionParticipant).where(
                TrainingSessionParticipant.session_id == session_id,
                TrainingSessionParticipant.user_id == user_id,
            )
        )
        await self.session.flush()

    # --- personal bookings ---

    async def get_personal_booking(self, booking_id: int) -> PersonalTraining | None:
        result = await self.session.execute(
            select(PersonalTraining).where(PersonalTraining.id == booking_id)
        )
        return result.scalar_one_or_none()

    async def list_personal_bookings(
        self, trainer_id: int, day: dt.date, statuses: Iterable[TrainingStatus]
    ) -> list[PersonalTraining]:
        result = await self.session.execute(
            select(PersonalTraining)
            .where(
                PersonalTraining.trainer_id == trainer_id,
                PersonalTraining.date == day,
                PersonalTraining.status.in_(list(statuses)),
            )
            .order_by(PersonalTraining.time)
        )
        return list(result.scalars().all())

    async def create_personal_booking(
        self,
        trainer_id: int,
        client_id: int,
        day: dt.date,
        time: str,
        message: str | None = None,
    ) -> PersonalTraining:
        booking = PersonalTraining(
            trainer_id=trainer_id,
            client_id=client_id,
            date=day,
            time=time,
            message=message,
            status=TrainingStatus.PENDING,
        )
        self.session.add(booking)
        await self.session.flush()
        await self.session.refresh(booking)
        return booking

    async def update_booking_status(self, booking: PersonalTraining, status: TrainingStatus) -> PersonalTraining:
        booking.status = status
        self.session.add(booking)
        await self.session.flush()
        await self.session.refresh(booking)
        return booking

    async def list_client_bookings(self, client_id: int) -> list[tuple[PersonalTraining, User]]:
        """Client's bookings paired with the trainer."""
        result = await self.session.execute(
            select(PersonalTraining, User)
            .join(User, User.id == PersonalTraining.trainer_id)
            .where(PersonalTraining.client_id == client_id)
            .order_by(PersonalTraining.date, PersonalTraining.time)
        )
        return [(b, u) for b, u in result.all()]

    async def list_trainer_bookings(self, trainer_id: int) -> list[tuple[PersonalTraining, User]]:
        """Trainer's bookings paired with the client."""
        result = await self.session.execute(
            select(PersonalTraining, User)
            .join(User, User.id == PersonalTraining.client_id)
            .where(PersonalTraining.trainer_id == trainer_id)
            .order_by(PersonalTraining.date, PersonalTraining.time)
        )
        return [(b, u) for b, u in result.all()]

    async def list_confirmed_bookings_for_user(
        self, user_id: int, from_day: dt.date
    ) -> list[tuple[PersonalTraining, User]]:
        """Confirmed bookings where the user is client or trainer, paired with the trainer."""
        result = await self.session.execute(
            select(PersonalTraining, User)
            .join(User, User.id == PersonalTraining.trainer_id)
            .where(
                PersonalTraining.date >= from_day,
                PersonalTraining.status == TrainingStatus.CONFIRMED,
                or_(PersonalTraining.client_id == user_id, PersonalTraining.trainer_id == user_id),
            )
            .order_by(PersonalTraining.date, PersonalTraining.time)
        )
        return [(b, u) for b, u in result.all()]


def get_store(session: AsyncSession = Depends(get_session)) -> GymStore:
    return GymStore(session)

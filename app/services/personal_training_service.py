import datetime as dt
import logging

from app.core.errors import Rejection, forbidden, not_found
from app.models.personal_training import PersonalTraining, TrainingStatus
from app.models.user import User, UserRole
from app.services.availability_service import check_availability
from app.services.store import GymStore

logger = logging.getLogger(__name__)


async def book_personal_training(
    store: GymStore,
    client_id: int,
    trainer_id: int,
    day: dt.date,
    time: str,
    message: str | None = None,
) -> PersonalTraining | Rejection:
    # Read-then-write without a lock: two concurrent requests for nearby slots can both pass
    rejection = await check_availability(store, trainer_id, day, time)
    if rejection:
        logger.info(
            "Personal training rejected: trainer=%s date=%s time=%s kind=%s",
            trainer_id,
            day,
            time,
            rejection.kind.value,
        )
        return rejection
    booking = await store.create_personal_booking(
        trainer_id=trainer_id,
        client_id=client_id,
        day=day,
        time=time,
        message=message,
    )
    logger.info("Personal training %s booked: trainer=%s client=%s %s %s", booking.id, trainer_id, client_id, day, time)
    return booking


async def list_client_bookings(store: GymStore, client_id: int) -> list[tuple[PersonalTraining, User]]:
    return await store.list_client_bookings(client_id)


async def list_trainer_bookings(
    store: GymStore, trainer_id: int, role: str
) -> list[tuple[PersonalTraining, User]] | Rejection:
    if role != UserRole.TRAINER.value:
        return forbidden()
    return await store.list_trainer_bookings(trainer_id)


async def update_booking_status(
    store: GymStore, booking_id: int, trainer_id: int, status: TrainingStatus
) -> PersonalTraining | Rejection:
    booking = await store.get_personal_booking(booking_id)
    if not booking:
        return not_found("Booking not found")
    if booking.trainer_id != trainer_id:
        return forbidden()
    updated = await store.update_booking_status(booking, status)
    logger.info("Personal training %s set to %s by trainer %s", booking_id, status.value, trainer_id)
    return updated

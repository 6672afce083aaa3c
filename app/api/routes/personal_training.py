import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from app.api.deps import AuthContext, get_current_user, rejection_to_http
from app.api.schemas.personal_training import (
    BookingClient,
    BookingTrainer,
    BookPersonalTrainingRequest,
    ClientBookingPublic,
    PersonalTrainingPublic,
    TrainerBookingPublic,
    UpdateBookingStatusRequest,
)
from app.core.errors import Rejection
from app.services.personal_training_service import (
    book_personal_training,
    list_client_bookings,
    list_trainer_bookings,
    update_booking_status,
)
from app.services.store import GymStore, get_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/personal-training", tags=["personal-training"])


@router.post("/book", response_model=PersonalTrainingPublic, status_code=status.HTTP_201_CREATED)
async def book(
    body: BookPersonalTrainingRequest,
    store: GymStore = Depends(get_store),
    current_user: AuthContext = Depends(get_current_user),
) -> PersonalTrainingPublic:
    try:
        result = await book_personal_training(
            store,
            client_id=current_user.id,
            trainer_id=body.trainer_id,
            day=body.date,
            time=body.time,
            message=body.message,
        )
    except SQLAlchemyError as e:
        logger.exception("Booking personal training failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to book personal training") from e
    if isinstance(result, Rejection):
        raise rejection_to_http(result)
    return PersonalTrainingPublic.model_validate(result)


@router.get("/my-bookings", response_model=list[ClientBookingPublic])
async def my_bookings(
    store: GymStore = Depends(get_store),
    current_user: AuthContext = Depends(get_current_user),
) -> list[ClientBookingPublic]:
    try:
        rows = await list_client_bookings(store, current_user.id)
    except SQLAlchemyError as e:
        logger.exception("Fetching client bookings failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch bookings") from e
    return [
        ClientBookingPublic(
            **PersonalTrainingPublic.model_validate(b).model_dump(),
            trainer=BookingTrainer.model_validate(trainer),
        )
        for b, trainer in rows
    ]


@router.get("/trainer-bookings", response_model=list[TrainerBookingPublic])
async def trainer_bookings(
    store: GymStore = Depends(get_store),
    current_user: AuthContext = Depends(get_current_user),
) -> list[TrainerBookingPublic]:
    try:
        result = await list_trainer_bookings(store, current_user.id, current_user.role)
    except SQLAlchemyError as e:
        logger.exception("Fetching trainer bookings failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch bookings") from e
    if isinstance(result, Rejection):
        raise rejection_to_http(result)
    return [
        TrainerBookingPublic(
            **PersonalTrainingPublic.model_validate(b).model_dump(),
            client=BookingClient.model_validate(client),
        )
        for b, client in result
    ]


@router.patch("/bookings/{booking_id}/status", response_model=PersonalTrainingPublic)
async def set_booking_status(
    booking_id: int,
    body: UpdateBookingStatusRequest,
    store: GymStore = Depends(get_store),
    current_user: AuthContext = Depends(get_current_user),
) -> PersonalTrainingPublic:
    try:
        result = await update_booking_status(store, booking_id, current_user.id, body.status)
    except SQLAlchemyError as e:
        logger.exception("Updating booking %s status failed: %s", booking_id, e)
        raise HTTPException(status_code=500, detail="Failed to update booking status") from e
    if isinstance(result, Rejection):
        raise rejection_to_http(result)
    return PersonalTrainingPublic.model_validate(result)

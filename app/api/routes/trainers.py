import datetime as dt
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from app.api.deps import AuthContext, get_current_user, rejection_to_http
from app.api.schemas.trainer import TrainerAvailability, TrainerPublic
from app.api.schemas.training_session import CreateTrainingSessionRequest, TrainingSessionPublic
from app.core.errors import Rejection
from app.services.availability_service import list_available_times
from app.services.store import GymStore, get_store
from app.services.trainer_service import create_training_sessions, list_trainers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/trainers", tags=["trainers"])


@router.get("", response_model=list[TrainerPublic])
async def trainers(
    store: GymStore = Depends(get_store),
    current_user: AuthContext = Depends(get_current_user),
) -> list[TrainerPublic]:
    try:
        return [TrainerPublic.model_validate(t) for t in await list_trainers(store)]
    except SQLAlchemyError as e:
        logger.exception("Fetching trainers failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch trainers") from e


@router.get("/{trainer_id}/availability/{day}", response_model=TrainerAvailability)
async def trainer_availability(
    trainer_id: int,
    day: dt.date,
    store: GymStore = Depends(get_store),
    current_user: AuthContext = Depends(get_current_user),
) -> TrainerAvailability:
    """Hourly start times still bookable for personal training."""
    try:
        result = await list_available_times(store, trainer_id, day)
    except SQLAlchemyError as e:
        logger.exception("Fetching trainer availability failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch trainer availability") from e
    if isinstance(result, Rejection):
        raise rejection_to_http(result)
    return TrainerAvailability(trainer_id=trainer_id, date=day, available_times=result)


@router.post("/sessions", response_model=list[TrainingSessionPublic], status_code=status.HTTP_201_CREATED)
async def add_session(
    body: CreateTrainingSessionRequest,
    store: GymStore = Depends(get_store),
    current_user: AuthContext = Depends(get_current_user),
) -> list[TrainingSessionPublic]:
    try:
        result = await create_training_sessions(
            store,
            trainer_id=current_user.id,
            role=current_user.role,
            title=body.title,
            day=body.date,
            start_time=body.start_time,
            end_time=body.end_time,
            max_participants=body.max_participants,
            is_recurring=body.is_recurring,
        )
    except SQLAlchemyError as e:
        logger.exception("Creating session failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to create session") from e
    if isinstance(result, Rejection):
        raise rejection_to_http(result)
    return [TrainingSessionPublic.model_validate(s) for s in result]

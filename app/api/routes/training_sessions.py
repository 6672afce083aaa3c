import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from app.api.deps import AuthContext, get_current_user, rejection_to_http
from app.api.schemas.training_session import (
    CalendarEntry,
    MessageResponse,
    Participant,
    RegistrationStatus,
    SessionDetails,
    SessionParticipants,
)
from app.core.errors import Rejection
from app.services import training_session_service
from app.services.store import GymStore, get_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/training-sessions", tags=["training-sessions"])


@router.get("", response_model=list[CalendarEntry])
async def list_sessions(
    store: GymStore = Depends(get_store),
    current_user: AuthContext = Depends(get_current_user),
) -> list[CalendarEntry]:
    try:
        return await training_session_service.list_calendar(store, current_user.id)
    except SQLAlchemyError as e:
        logger.exception("Fetching sessions failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch sessions") from e


@router.post("/{session_id}/register", response_model=MessageResponse)
async def register(
    session_id: int,
    store: GymStore = Depends(get_store),
    current_user: AuthContext = Depends(get_current_user),
) -> MessageResponse:
    try:
        result = await training_session_service.register_for_session(store, session_id, current_user.id)
    except SQLAlchemyError as e:
        logger.exception("Session registration failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to register for session") from e
    if isinstance(result, Rejection):
        raise rejection_to_http(result)
    return MessageResponse(message="Registered for session")


@router.post("/{session_id}/unregister", response_model=MessageResponse)
async def unregister(
    session_id: int,
    store: GymStore = Depends(get_store),
    current_user: AuthContext = Depends(get_current_user),
) -> MessageResponse:
    try:
        result = await training_session_service.unregister_from_session(store, session_id, current_user.id)
    except SQLAlchemyError as e:
        logger.exception("Session unregistration failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to unregister from session") from e
    if isinstance(result, Rejection):
        raise rejection_to_http(result)
    return MessageResponse(message="Unregistered from session")


@router.get("/{session_id}/registration-status", response_model=RegistrationStatus)
async def registration_status(
    session_id: int,
    store: GymStore = Depends(get_store),
    current_user: AuthContext = Depends(get_current_user),
) -> RegistrationStatus:
    try:
        result = await training_session_service.is_registered(store, session_id, current_user.id)
    except SQLAlchemyError as e:
        logger.exception("Fetching registration status failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to check registration status") from e
    if isinstance(result, Rejection):
        raise rejection_to_http(result)
    return RegistrationStatus(is_registered=result)


@router.get("/{session_id}/participants", response_model=SessionParticipants)
async def participants(
    session_id: int,
    store: GymStore = Depends(get_store),
    current_user: AuthContext = Depends(get_current_user),
) -> SessionParticipants:
    try:
        result = await training_session_service.get_session_participants(store, session_id, current_user.id)
    except SQLAlchemyError as e:
        logger.exception("Fetching participants failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch participants") from e
    if isinstance(result, Rejection):
        raise rejection_to_http(result)
    session, users = result
    return SessionParticipants(
        session_details=SessionDetails.model_validate(session),
        participants=[Participant.model_validate(u) for u in users],
    )


@router.delete("/{session_id}/participants/{participant_id}", response_model=MessageResponse)
async def remove_participant(
    session_id: int,
    participant_id: int,
    store: GymStore = Depends(get_store),
    current_user: AuthContext = Depends(get_current_user),
) -> MessageResponse:
    try:
        result = await training_session_service.remove_participant(
            store, session_id, participant_id, current_user.id
        )
    except SQLAlchemyError as e:
        logger.exception("Removing participant failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to remove participant") from e
    if isinstance(result, Rejection):
        raise rejection_to_http(result)
    return MessageResponse(message="Participant removed successfully")

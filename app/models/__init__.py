from app.models.user import User, UserRole
from app.models.training_session import TrainingSession, TrainingSessionParticipant
from app.models.personal_training import ACTIVE_STATUSES, PersonalTraining, TrainingStatus

__all__ = [
    "User",
    "UserRole",
    "TrainingSession",
    "TrainingSessionParticipant",
    "PersonalTraining",
    "TrainingStatus",
    "ACTIVE_STATUSES",
]

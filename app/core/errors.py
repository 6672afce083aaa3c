from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    INVALID_REQUEST = "invalid_request"
    INVALID_TIME_WINDOW = "invalid_time_window"
    SCHEDULING_CONFLICT = "scheduling_conflict"
    INTERNAL_FAILURE = "internal_failure"


@dataclass(frozen=True)
class Rejection:
    """Business-level refusal returned by services instead of raising."""

    kind: ErrorKind
    detail: str


def not_found(detail: str) -> Rejection:
    return Rejection(ErrorKind.NOT_FOUND, detail)


def forbidden(detail: str = "Unauthorized") -> Rejection:
    return Rejection(ErrorKind.FORBIDDEN, detail)


def invalid_request(detail: str) -> Rejection:
    return Rejection(ErrorKind.INVALID_REQUEST, detail)

from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.errors import ErrorKind, Rejection
from app.core.security import decode_access_token

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Identity of the caller, taken from the verified access token."""

    id: int
    email: str
    role: str


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> AuthContext:
    if not credentials or credentials.scheme.lower() != "bearer":
        raise _unauthorized("Missing or invalid authorization header")
    payload = decode_access_token(credentials.credentials)
    if not payload:
        raise _unauthorized("Invalid or expired token")
    try:
        uid = int(payload["sub"])
    except ValueError:
        raise _unauthorized("Invalid token")
    return AuthContext(
        id=uid,
        email=payload.get("email") or "",
        role=payload.get("role") or "",
    )


_STATUS_BY_KIND = {
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_TIME_WINDOW: status.HTTP_400_BAD_REQUEST,
    ErrorKind.SCHEDULING_CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def rejection_to_http(rejection: Rejection) -> HTTPException:
    return HTTPException(status_code=_STATUS_BY_KIND[rejection.kind], detail=rejection.detail)

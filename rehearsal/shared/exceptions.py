# rehearsal/shared/exceptions.py
from typing import Optional

from fastapi import HTTPException, status


class BaseHTTPException(HTTPException):
    """
    HTTPException with a class-level status code and default message.

    Subclasses override ``status_code`` and ``message``; callers may pass a
    more specific message that names what was missing or denied.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(
            status_code=type(self).status_code, detail=message or type(self).message
        )


# Authentication & Authorization Exceptions
class InvalidTokenError(BaseHTTPException):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Missing or invalid token"


class UnlinkedProfileError(BaseHTTPException):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "User not linked to profile"


class AccessDeniedError(BaseHTTPException):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Access denied"


# Resource Not Found Exceptions
class NotFoundError(BaseHTTPException):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Resource not found"


class MemberNotFoundError(NotFoundError):
    message = "Member not found"


class UserNotFoundError(NotFoundError):
    message = "User not found"


# Validation / Request Exceptions
class InvalidDataError(BaseHTTPException):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request data"


class ConflictError(BaseHTTPException):
    status_code = status.HTTP_409_CONFLICT
    message = "Resource already exists"


# Upstream (database / storage) Exceptions
class UpstreamFailureError(BaseHTTPException):
    status_code = status.HTTP_502_BAD_GATEWAY
    message = "Upstream service failed"

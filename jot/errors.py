"""Error kinds and their mapping to HTTP responses."""

import logging
from enum import Enum
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

CREDENTIALS_MESSAGE = "Username or password incorrect"
INTERNAL_MESSAGE = "Internal server error"


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    PASSWORD_INCORRECT = "password_incorrect"
    USER_NOT_FOUND = "user_not_found"
    TOKEN_NOT_FOUND = "token_not_found"
    TOKEN_INVALID = "token_invalid"
    CONFLICT = "conflict"
    DATABASE = "database"
    HASHING = "hashing"
    INTERNAL = "internal"


# Missing and invalid tokens answer 403, not 401, for client compatibility.
STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.PASSWORD_INCORRECT: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.USER_NOT_FOUND: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.TOKEN_NOT_FOUND: status.HTTP_403_FORBIDDEN,
    ErrorKind.TOKEN_INVALID: status.HTTP_403_FORBIDDEN,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.DATABASE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.HASHING: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Kinds whose message is replaced by a generic one in responses.
_HIDDEN_KINDS = {ErrorKind.DATABASE, ErrorKind.HASHING, ErrorKind.INTERNAL}


class ApiError(Exception):
    """Base error carrying its kind; the message is what clients may see."""

    kind: ErrorKind = ErrorKind.INTERNAL
    message: str = INTERNAL_MESSAGE

    def __init__(self, message: Optional[str] = None, details: Optional[dict[str, Any]] = None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def to_dict(self) -> dict[str, Any]:
        if self.kind in _HIDDEN_KINDS:
            return {"error": INTERNAL_MESSAGE}
        payload: dict[str, Any] = {"error": self.message}
        if self.details:
            payload["error_details"] = self.details
        return payload


class InvalidInput(ApiError):
    kind = ErrorKind.INVALID_INPUT
    message = "Invalid input"


class NotFound(ApiError):
    kind = ErrorKind.NOT_FOUND
    message = "Resource not found"


class PasswordIncorrect(ApiError):
    kind = ErrorKind.PASSWORD_INCORRECT
    message = CREDENTIALS_MESSAGE


class UserNotFound(ApiError):
    kind = ErrorKind.USER_NOT_FOUND
    message = CREDENTIALS_MESSAGE


class TokenNotFound(ApiError):
    kind = ErrorKind.TOKEN_NOT_FOUND
    message = "Token was not found"


class TokenInvalid(ApiError):
    kind = ErrorKind.TOKEN_INVALID
    message = "Token is not valid"


class DatabaseError(ApiError):
    kind = ErrorKind.DATABASE
    message = "Error communicating with database"


class ChallengeExists(DatabaseError):
    kind = ErrorKind.CONFLICT
    message = "Device code already in use"


class HashingError(ApiError):
    kind = ErrorKind.HASHING
    message = "Failed to hash password"


class Internal(ApiError):
    kind = ErrorKind.INTERNAL


def register_error_handlers(app: FastAPI) -> None:
    """Render every ApiError as {"error": ...} with its mapped status."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

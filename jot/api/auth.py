"""Authentication & device authorization API endpoints."""

import logging

from fastapi import APIRouter, Depends, Form, Response, status
from fastapi.responses import HTMLResponse, JSONResponse
from sqlmodel import Session

from jot.api.deps import get_current_user, get_settings
from jot.config import Settings
from jot.database import get_session
from jot.errors import (
    ApiError,
    DatabaseError,
    InvalidInput,
    NotFound,
    PasswordIncorrect,
    UserNotFound,
)
from jot.models.user import User
from jot.schemas.auth import (
    DeviceCodeRequest,
    DeviceStatusResponse,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
)
from jot.services.auth_service import approve_device, login
from jot.services.device_service import (
    ChallengeState,
    create_challenge,
    delete_challenge,
    get_challenge_status,
)
from jot.utils.pages import device_auth_error_page, device_auth_page, device_auth_success_page

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_token_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=settings.token_expire_days * 24 * 60 * 60,
        path="/",
        httponly=True,
        samesite="lax",
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
def login_post(
    request: LoginRequest,
    response: Response,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """Authenticate user and receive a token (also set as an HttpOnly cookie)."""
    token = login(request.username, request.password, session, settings)
    _set_token_cookie(response, token, settings)
    return LoginResponse(token=token)


@router.post("/logout")
def logout_post(response: Response, settings: Settings = Depends(get_settings)):
    """Clear the auth cookie. Issued tokens stay valid until they expire."""
    response.delete_cookie(settings.cookie_name, path="/", httponly=True, samesite="lax")
    return {"message": "Logged out"}


@router.post("/device", status_code=status.HTTP_201_CREATED)
def device_post(
    request: DeviceCodeRequest,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """Create a device authorization challenge for a client-chosen code."""
    if not request.device_code:
        raise InvalidInput("device_code is required")

    create_challenge(request.device_code, session, settings.device_code_expire_minutes)
    return {
        "device_code": request.device_code,
        "expires_in": settings.device_code_expire_minutes * 60,
    }


@router.get(
    "/status/{code}",
    response_model=DeviceStatusResponse,
    responses={202: {"description": "Authorization pending"}, 404: {"model": ErrorResponse}},
)
def device_status_get(code: str, session: Session = Depends(get_session)):
    """Poll a challenge: 200 with the token, 202 while pending, 404 if unknown or expired."""
    result = get_challenge_status(code, session)

    if result.state is ChallengeState.FULFILLED:
        return DeviceStatusResponse(access_token=result.token)
    if result.state is ChallengeState.PENDING:
        return JSONResponse(status_code=status.HTTP_202_ACCEPTED, content={"status": "pending"})
    raise NotFound("No device challenge found for the provided code")


@router.delete("/device/{code}", status_code=status.HTTP_204_NO_CONTENT)
def device_delete(
    code: str,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Remove a device authorization challenge."""
    if not delete_challenge(code, session):
        raise NotFound("No device challenge found for the provided code")
    logger.info("User %s deleted a device challenge", user.id)


@router.get("/page/{code}", response_class=HTMLResponse, include_in_schema=False)
def device_auth_get(code: str):
    """Login form a user fills in to approve a device."""
    return HTMLResponse(device_auth_page(code))


@router.post("/page/{code}", response_class=HTMLResponse, include_in_schema=False)
def device_auth_post(
    code: str,
    email: str = Form(default=""),
    password: str = Form(default=""),
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """Approve a device with the submitted credentials and render the outcome."""
    try:
        approve_device(code, email, password, session, settings)
    except (UserNotFound, PasswordIncorrect) as e:
        return _error_page(code, "Invalid username or password", email, e)
    except (InvalidInput, NotFound) as e:
        return _error_page(code, e.message, email, e)
    except DatabaseError as e:
        return _error_page(code, "Database error occurred", email, e)
    except ApiError as e:
        logger.error("Device approval failed: %s", e.message)
        return _error_page(code, "Failed to authorize device", email, e)

    return HTMLResponse(device_auth_success_page())


def _error_page(code: str, message: str, email: str, exc: ApiError) -> HTMLResponse:
    return HTMLResponse(device_auth_error_page(code, message, email), status_code=exc.status_code)

"""Common API dependencies: settings access and current user extraction."""

import logging
from typing import Optional

from fastapi import Depends, Request
from sqlmodel import Session

from jot.config import Settings
from jot.database import get_session
from jot.errors import DatabaseError, Internal, TokenNotFound
from jot.models.user import User
from jot.services.auth_service import get_user_by_id
from jot.utils.security import decode_token

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def get_settings(request: Request) -> Settings:
    """FastAPI dependency: the settings the app was created with."""
    return request.app.state.settings


def extract_token(request: Request, cookie_name: str) -> Optional[str]:
    """Bearer token from the auth cookie, falling back to the Authorization header."""
    token = request.cookies.get(cookie_name)
    if token:
        return token

    authorization = request.headers.get("Authorization")
    if authorization and authorization.startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX):].strip() or None
    return None


def get_current_user(
    request: Request,
    settings: Settings = Depends(get_settings),
    session: Session = Depends(get_session),
) -> User:
    """Extract and validate user from the bearer token.

    Missing and invalid tokens both answer 403. A valid token whose user no
    longer exists is a server-side inconsistency and answers 500.
    """
    token = extract_token(request, settings.cookie_name)
    if token is None:
        raise TokenNotFound()

    claims = decode_token(token, settings.jwt_secret, algorithm=settings.jwt_algorithm)

    try:
        user = get_user_by_id(claims.user_id, session)
    except DatabaseError as e:
        raise Internal("Error while searching for user") from e

    if user is None:
        logger.error("Token subject %s has no matching user", claims.sub)
        raise Internal("Cannot find authorized user")

    request.state.user = user
    return user

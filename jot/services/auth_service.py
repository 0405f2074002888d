"""Authentication business logic: credential checks, token issuance, device approval."""

import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from jot.config import Settings
from jot.errors import DatabaseError, InvalidInput, NotFound, PasswordIncorrect, UserNotFound
from jot.models.user import User
from jot.services.device_service import attach_token
from jot.utils.security import create_token, verify_password

logger = logging.getLogger(__name__)


def find_user_by_identifier(identifier: str, session: Session) -> Optional[User]:
    """Look a user up by email or by name."""
    try:
        return session.exec(
            select(User).where(or_(User.email == identifier, User.name == identifier))
        ).first()
    except SQLAlchemyError as e:
        logger.error("Error while searching for user by identifier: %s", e)
        raise DatabaseError() from e


def get_user_by_id(user_id: int, session: Session) -> Optional[User]:
    try:
        return session.get(User, user_id)
    except SQLAlchemyError as e:
        logger.error("Error while searching for user %s: %s", user_id, e)
        raise DatabaseError() from e


def authenticate_user(identifier: str, password: str, session: Session) -> User:
    """Verify credentials and return the user.

    Raises InvalidInput for empty fields, UserNotFound / PasswordIncorrect
    (same public message) for bad credentials.
    """
    if not identifier or not password:
        raise InvalidInput("Username and password are required")

    user = find_user_by_identifier(identifier, session)
    if user is None:
        logger.info("Login failed: unknown identifier")
        raise UserNotFound()

    if not verify_password(password, user.password_hash):
        logger.info("Login failed: wrong password for user %s", user.id)
        raise PasswordIncorrect()

    return user


def issue_token(user: User, settings: Settings) -> str:
    return create_token(
        user.id,
        settings.jwt_secret,
        timedelta(days=settings.token_expire_days),
        algorithm=settings.jwt_algorithm,
    )


def login(identifier: str, password: str, session: Session, settings: Settings) -> str:
    """Authenticate and return a fresh bearer token."""
    user = authenticate_user(identifier, password, session)
    token = issue_token(user, settings)
    logger.info("User %s logged in", user.id)
    return token


def approve_device(
    device_code: str,
    email: str,
    password: str,
    session: Session,
    settings: Settings,
) -> None:
    """Log the user in and hand the resulting token to a waiting device.

    Raises NotFound when the code is unknown or expired.
    """
    token = login(email, password, session, settings)

    if not attach_token(device_code, token, session):
        raise NotFound(f"Device code '{device_code}' is not valid")

    logger.info("Device challenge approved")

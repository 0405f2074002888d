"""Device authorization challenges.

A polling client registers a code it chose itself, a user approves that code
from a browser (which attaches a fresh token), and the client collects the
token and deletes the challenge. Every operation is one SQL statement, so the
unique index on ``device_code`` and row-level atomicity are the only
synchronization needed.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from jot.errors import ChallengeExists, DatabaseError
from jot.models.device_auth import DeviceAuth

logger = logging.getLogger(__name__)


class ChallengeState(str, Enum):
    NO_CHALLENGE = "no_challenge"
    PENDING = "pending"
    FULFILLED = "fulfilled"


@dataclass(frozen=True)
class ChallengeStatus:
    state: ChallengeState
    token: Optional[str] = None


def _now() -> datetime:
    return datetime.now(timezone.utc)


def create_challenge(device_code: str, session: Session, expire_minutes: int) -> DeviceAuth:
    """Insert a pending challenge expiring ``expire_minutes`` from now."""
    challenge = DeviceAuth(
        device_code=device_code,
        expire_date=_now() + timedelta(minutes=expire_minutes),
    )
    try:
        session.add(challenge)
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.warning("Device code already registered: %s", device_code)
        raise ChallengeExists() from e
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Failed to create device challenge: %s", e)
        raise DatabaseError() from e

    session.refresh(challenge)
    logger.info("Device challenge created, expires %s", challenge.expire_date)
    return challenge


def attach_token(device_code: str, token: str, session: Session) -> bool:
    """Store ``token`` on a live challenge. False if no unexpired row matched.

    Concurrent approvals of the same code race at the database; the last
    write wins.
    """
    try:
        result = session.exec(
            update(DeviceAuth)
            .where(DeviceAuth.device_code == device_code, DeviceAuth.expire_date > _now())
            .values(token=token)
            .execution_options(synchronize_session=False)
        )
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Failed to attach token to device challenge: %s", e)
        raise DatabaseError() from e

    return result.rowcount > 0


def get_challenge_status(device_code: str, session: Session) -> ChallengeStatus:
    """Read a challenge. Expired rows look exactly like missing ones."""
    try:
        challenge = session.exec(
            select(DeviceAuth).where(
                DeviceAuth.device_code == device_code,
                DeviceAuth.expire_date > _now(),
            )
        ).first()
    except SQLAlchemyError as e:
        logger.error("Failed to read device challenge: %s", e)
        raise DatabaseError() from e

    if challenge is None:
        return ChallengeStatus(ChallengeState.NO_CHALLENGE)
    if challenge.token is None:
        return ChallengeStatus(ChallengeState.PENDING)
    return ChallengeStatus(ChallengeState.FULFILLED, token=challenge.token)


def delete_challenge(device_code: str, session: Session) -> bool:
    """Remove a challenge. Returns whether a row was actually deleted."""
    try:
        result = session.exec(
            delete(DeviceAuth)
            .where(DeviceAuth.device_code == device_code)
            .execution_options(synchronize_session=False)
        )
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Failed to delete device challenge: %s", e)
        raise DatabaseError() from e

    return result.rowcount > 0


def purge_expired(session: Session) -> int:
    """Delete every expired challenge. Returns how many were removed."""
    try:
        result = session.exec(
            delete(DeviceAuth)
            .where(DeviceAuth.expire_date <= _now())
            .execution_options(synchronize_session=False)
        )
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Failed to purge expired device challenges: %s", e)
        raise DatabaseError() from e

    if result.rowcount:
        logger.info("Purged %d expired device challenge(s)", result.rowcount)
    return result.rowcount

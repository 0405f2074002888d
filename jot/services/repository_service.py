"""Repository queries."""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from jot.errors import DatabaseError, InvalidInput
from jot.models.repository import Repository

logger = logging.getLogger(__name__)


def list_repositories(session: Session) -> list[Repository]:
    try:
        return list(session.exec(select(Repository).order_by(Repository.id)).all())
    except SQLAlchemyError as e:
        logger.error("Failed to get all repositories: %s", e)
        raise DatabaseError() from e


def list_user_repositories(user_id: int, session: Session) -> list[Repository]:
    try:
        return list(session.exec(
            select(Repository).where(Repository.user_id == user_id).order_by(Repository.id)
        ).all())
    except SQLAlchemyError as e:
        logger.error("Failed to get repositories of user %s: %s", user_id, e)
        raise DatabaseError() from e


def get_repository(repository_id: int, session: Session) -> Optional[Repository]:
    try:
        return session.get(Repository, repository_id)
    except SQLAlchemyError as e:
        logger.error("Failed to get repository by id: %s", e)
        raise DatabaseError() from e


def create_repository(user_id: int, name: str, session: Session) -> Repository:
    name = name.strip()
    if not name:
        raise InvalidInput("Repository name is required")

    repository = Repository(name=name, user_id=user_id)
    try:
        session.add(repository)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Failed to create repository: %s", e)
        raise DatabaseError() from e

    session.refresh(repository)
    return repository

"""Note storage and search."""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from jot.errors import DatabaseError, InvalidInput, NotFound
from jot.models.note import Note
from jot.models.repository import Repository

logger = logging.getLogger(__name__)


def list_notes(session: Session) -> list[Note]:
    try:
        return list(session.exec(select(Note).order_by(Note.id)).all())
    except SQLAlchemyError as e:
        logger.error("Failed to get all notes: %s", e)
        raise DatabaseError() from e


def list_user_notes(user_id: int, session: Session) -> list[Note]:
    try:
        return list(session.exec(
            select(Note).where(Note.user_id == user_id).order_by(Note.id)
        ).all())
    except SQLAlchemyError as e:
        logger.error("Failed to get notes of user %s: %s", user_id, e)
        raise DatabaseError() from e


def get_note(note_id: int, user_id: int, session: Session) -> Optional[Note]:
    """Get a note owned by ``user_id``; other users' notes look missing."""
    try:
        return session.exec(
            select(Note).where(Note.id == note_id, Note.user_id == user_id)
        ).first()
    except SQLAlchemyError as e:
        logger.error("Failed to get note by id: %s", e)
        raise DatabaseError() from e


def create_note(
    user_id: int,
    content: str,
    session: Session,
    tags: Optional[list[str]] = None,
    target_date: Optional[date] = None,
    repository_id: Optional[int] = None,
) -> Note:
    if not content.strip():
        raise InvalidInput("Note content is required")

    if repository_id is not None:
        repository = session.get(Repository, repository_id)
        if repository is None or repository.user_id != user_id:
            raise NotFound("Repository not found")

    note = Note(
        content=content,
        tags=_clean_tags(tags or []),
        user_id=user_id,
        repository_id=repository_id,
    )
    if target_date is not None:
        note.target_date = target_date

    try:
        session.add(note)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Failed to create note: %s", e)
        raise DatabaseError() from e

    session.refresh(note)
    return note


def delete_note(note_id: int, user_id: int, session: Session) -> bool:
    return delete_notes([note_id], user_id, session) > 0


def delete_notes(note_ids: list[int], user_id: int, session: Session) -> int:
    """Delete the caller's notes among ``note_ids``. Returns the number removed."""
    if not note_ids:
        return 0
    try:
        result = session.exec(
            delete(Note)
            .where(col(Note.id).in_(note_ids), Note.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Failed to delete notes: %s", e)
        raise DatabaseError() from e
    return result.rowcount


def search_notes(
    user_id: int,
    session: Session,
    term: Optional[str] = None,
    tags: Optional[list[str]] = None,
    date_expr: Optional[str] = None,
) -> list[Note]:
    """Search the user's notes.

    ``term`` is a case-insensitive substring of the content, every tag in
    ``tags`` must be present, and ``date_expr`` ("today", "yesterday" or
    YYYY-MM-DD) must equal the note's target date.
    """
    statement = select(Note).where(Note.user_id == user_id)

    if term:
        statement = statement.where(
            func.lower(Note.content).contains(term.lower(), autoescape=True)
        )
    if date_expr:
        statement = statement.where(Note.target_date == parse_date_expr(date_expr))

    try:
        notes = list(session.exec(statement.order_by(Note.id)).all())
    except SQLAlchemyError as e:
        logger.error("Failed to search notes: %s", e)
        raise DatabaseError() from e

    # Tags live in a JSON column; match them here rather than in SQL.
    wanted = _clean_tags(tags or [])
    if wanted:
        notes = [n for n in notes if all(tag in n.tags for tag in wanted)]
    return notes


def parse_date_expr(expr: str) -> date:
    today = datetime.now(timezone.utc).date()
    value = expr.strip().lower()
    if value == "today":
        return today
    if value == "yesterday":
        return today - timedelta(days=1)
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise InvalidInput(f"Unrecognized date: {expr}") from e


def first_lines(content: str, lines: Optional[int]) -> str:
    """Keep the first ``lines`` lines of ``content`` (all of it when None)."""
    if lines is None:
        return content
    return "\n".join(content.splitlines()[:lines])


def _clean_tags(tags: list[str]) -> list[str]:
    seen: list[str] = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen

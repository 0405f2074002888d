"""Note API endpoints."""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from jot.api.deps import get_current_user
from jot.database import get_session
from jot.errors import NotFound
from jot.models.note import Note
from jot.models.user import User
from jot.schemas.note import (
    DeleteManyRequest,
    NoteCreateRequest,
    NoteResponse,
    NoteSearchRequest,
)
from jot.services.note_service import (
    create_note,
    delete_note,
    delete_notes,
    first_lines,
    get_note,
    list_notes,
    list_user_notes,
    search_notes,
)

router = APIRouter(tags=["note"], dependencies=[Depends(get_current_user)])


def _to_response(note: Note, lines: int | None = None) -> NoteResponse:
    response = NoteResponse.model_validate(note)
    response.content = first_lines(note.content, lines)
    return response


@router.get("/note", response_model=list[NoteResponse])
def get_all(session: Session = Depends(get_session)):
    """Retrieve all existing notes."""
    return [_to_response(n) for n in list_notes(session)]


@router.post("/note", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
def create(
    request: NoteCreateRequest,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Create a new note for the current user."""
    note = create_note(
        user.id,
        request.content,
        session,
        tags=request.tags,
        target_date=request.target_date,
        repository_id=request.repository_id,
    )
    return _to_response(note)


@router.delete("/note/delete", status_code=status.HTTP_204_NO_CONTENT)
def delete_many(
    request: DeleteManyRequest,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Delete several of the current user's notes by id."""
    delete_notes(request.ids, user.id, session)


@router.post("/note/search", response_model=list[NoteResponse])
def post_search(
    request: NoteSearchRequest,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Search the current user's notes by text, tags and date."""
    notes = search_notes(
        user.id,
        session,
        term=request.term,
        tags=request.tag,
        date_expr=request.date,
    )
    return [_to_response(n, request.lines) for n in notes]


@router.get("/note/{note_id}", response_model=NoteResponse)
def get_by_id(
    note_id: int,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    note = get_note(note_id, user.id, session)
    if note is None:
        raise NotFound()
    return _to_response(note)


@router.delete("/note/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete(
    note_id: int,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    if not delete_note(note_id, user.id, session):
        raise NotFound()


@router.get("/user/note", response_model=list[NoteResponse])
def get_all_by_owner(
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Retrieve all notes owned by the current user."""
    return [_to_response(n) for n in list_user_notes(user.id, session)]

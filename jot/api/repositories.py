"""Repository API endpoints."""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from jot.api.deps import get_current_user
from jot.database import get_session
from jot.errors import NotFound
from jot.models.user import User
from jot.schemas.repository import RepositoryCreateRequest, RepositoryResponse
from jot.services.repository_service import (
    create_repository,
    get_repository,
    list_repositories,
    list_user_repositories,
)

router = APIRouter(
    prefix="/repository",
    tags=["repository"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=list[RepositoryResponse])
def get_all(session: Session = Depends(get_session)):
    """Retrieve all existing repositories."""
    return list_repositories(session)


@router.post("", response_model=RepositoryResponse, status_code=status.HTTP_201_CREATED)
def create(
    request: RepositoryCreateRequest,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Create a repository owned by the current user."""
    return create_repository(user.id, request.name, session)


@router.get("/user", response_model=list[RepositoryResponse])
def get_all_by_owner(
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Retrieve the repositories owned by the current user."""
    return list_user_repositories(user.id, session)


@router.get("/{repository_id}", response_model=RepositoryResponse)
def get_by_id(repository_id: int, session: Session = Depends(get_session)):
    repository = get_repository(repository_id, session)
    if repository is None:
        raise NotFound()
    return repository

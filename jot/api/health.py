"""Health check endpoints."""

from fastapi import APIRouter, Depends

from jot.api.deps import get_current_user
from jot.models.user import User

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/ping")
def health_ping():
    """Lightweight health check (no auth required)."""
    return {"status": "ok"}


@router.get("/auth")
def health_auth(user: User = Depends(get_current_user)):
    """Health check behind the auth gate; echoes the authenticated user."""
    return {"status": "ok", "user_id": user.id}

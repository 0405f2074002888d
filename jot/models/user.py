"""User model."""

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True)
    email: str = Field(unique=True, index=True)
    password_hash: str  # argon2 PHC string
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

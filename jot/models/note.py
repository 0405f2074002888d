"""Note model."""

from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class Note(SQLModel, table=True):
    __tablename__ = "notes"

    id: Optional[int] = Field(default=None, primary_key=True)
    content: str
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    user_id: int = Field(foreign_key="users.id", index=True)
    repository_id: Optional[int] = Field(default=None, foreign_key="repositories.id", index=True)
    target_date: date = Field(default_factory=lambda: datetime.now(timezone.utc).date(), index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

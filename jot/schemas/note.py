"""Note request/response schemas."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class NoteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    tags: list[str]
    user_id: int
    repository_id: Optional[int]
    target_date: date
    created_at: datetime
    updated_at: datetime


class NoteCreateRequest(BaseModel):
    content: str
    tags: list[str] = Field(default_factory=list)
    target_date: Optional[date] = None
    repository_id: Optional[int] = None


class DeleteManyRequest(BaseModel):
    ids: list[int]


class NoteSearchRequest(BaseModel):
    term: Optional[str] = None
    tag: list[str] = Field(default_factory=list)
    date: Optional[str] = None  # 'today' | 'yesterday' | YYYY-MM-DD
    lines: Optional[int] = Field(default=None, ge=0)

"""Note repository model."""

from typing import Optional

from sqlmodel import Field, SQLModel


class Repository(SQLModel, table=True):
    __tablename__ = "repositories"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    user_id: int = Field(foreign_key="users.id", index=True)

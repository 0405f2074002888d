"""Device authorization challenge model."""

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class DeviceAuth(SQLModel, table=True):
    __tablename__ = "device_auth"

    id: Optional[int] = Field(default=None, primary_key=True)
    device_code: str = Field(unique=True, index=True)  # chosen by the polling client
    token: Optional[str] = None  # set once a user approves the code
    expire_date: datetime = Field(index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

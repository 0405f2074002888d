"""Repository request/response schemas."""

from pydantic import BaseModel, ConfigDict


class RepositoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    user_id: int


class RepositoryCreateRequest(BaseModel):
    name: str

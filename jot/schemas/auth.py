"""Auth and device authorization request/response schemas."""

from pydantic import BaseModel


# --- Login ---

class LoginRequest(BaseModel):
    username: str  # email or user name
    password: str


class LoginResponse(BaseModel):
    token: str


# --- Device authorization ---

class DeviceCodeRequest(BaseModel):
    device_code: str


class DeviceStatusResponse(BaseModel):
    access_token: str


# --- Errors ---

class ErrorResponse(BaseModel):
    error: str

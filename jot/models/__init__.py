"""Jot Database Models."""

from jot.models.user import User
from jot.models.device_auth import DeviceAuth
from jot.models.repository import Repository
from jot.models.note import Note

__all__ = [
    "User",
    "DeviceAuth",
    "Repository",
    "Note",
]

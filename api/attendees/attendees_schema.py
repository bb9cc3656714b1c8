# api/attendees/attendees_schema.py

from datetime import datetime
from typing import Optional
from pydantic import EmailStr, Field, field_validator

from api.attendees.attendees_model import AttendeeRole
from utils.schema_utils import CamelModel, as_utc


class AttendeeCreate(CamelModel):
    """
    Payload for staff registering a person at the desk.
    """
    email: EmailStr = Field(..., description="Unique, compared case-insensitively")
    name: str = Field(..., min_length=1, max_length=255)
    role: AttendeeRole = Field(AttendeeRole.attendee)


class AttendeeListItem(CamelModel):
    id: int
    name: str
    email: str
    role: AttendeeRole
    checked_in: bool


class AttendeeProfile(CamelModel):
    id: int
    name: str
    email: str
    role: AttendeeRole
    qr_token: str
    checked_in: bool
    checked_in_at: Optional[datetime] = None

    @field_validator("checked_in_at")
    @classmethod
    def attach_utc(cls, v):
        return as_utc(v)

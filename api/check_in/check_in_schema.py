# api/check_in/check_in_schema.py

from typing import Optional
from pydantic import Field

from utils.schema_utils import CamelModel


class CheckInRequest(CamelModel):
    """
    Payload sent by the scanner: the raw string decoded from the badge.
    """
    qr_token: Optional[str] = Field(None, description="Decoded QR payload")


class AttendeeIdRequest(CamelModel):
    """
    Payload for the manual check-in and check-out actions.
    """
    attendee_id: Optional[int] = Field(None, description="Registry id of the attendee")


class CheckInUser(CamelModel):
    name: str
    email: str


class CheckInResponse(CamelModel):
    success: bool
    already_checked_in: Optional[bool] = None
    user: CheckInUser
    message: str

# api/attendees/attendees_controller.py

from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from api.attendees.attendees_service import AttendeeService, render_qr_png
from api.attendees.attendees_schema import AttendeeCreate, AttendeeListItem, AttendeeProfile
from api.check_in.check_in_exceptions import CheckInError
from api.check_in.check_in_controller import to_http_exception


def list_attendees_controller(db: Session, search: Optional[str]) -> List[AttendeeListItem]:
    rows = AttendeeService(db).list_attendees(search)
    return [AttendeeListItem.model_validate(r) for r in rows]


def register_attendee_controller(payload: AttendeeCreate, db: Session) -> AttendeeProfile:
    try:
        attendee = AttendeeService(db).create(payload.email, payload.name, payload.role)
    except CheckInError as e:
        raise to_http_exception(e)
    return AttendeeProfile.model_validate(attendee)


def _own_record(db: Session, current_user_id: int):
    attendee = AttendeeService(db).find_by_id(current_user_id)
    if not attendee:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return attendee


def get_profile_controller(db: Session, current_user_id: int) -> AttendeeProfile:
    return AttendeeProfile.model_validate(_own_record(db, current_user_id))


def get_qr_png_controller(db: Session, current_user_id: int) -> bytes:
    return render_qr_png(_own_record(db, current_user_id).qr_token)

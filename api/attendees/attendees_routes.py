# api/attendees/attendees_routes.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from config.database import get_db
from middlewares.auth_middleware import auth_middleware
from middlewares.role_middleware import staff_only
from api.attendees.attendees_schema import AttendeeCreate, AttendeeListItem, AttendeeProfile
from api.attendees.attendees_controller import (
    list_attendees_controller,
    register_attendee_controller,
    get_profile_controller,
    get_qr_png_controller,
)

router = APIRouter(tags=["Attendees"])


@router.get(
    "/attendees",
    response_model=List[AttendeeListItem],
    summary="List registered people for the staff search screen",
)
def list_attendees(
    search: Optional[str] = Query(None, max_length=255, description="Matches name or email"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(staff_only),
) -> List[AttendeeListItem]:
    return list_attendees_controller(db, search)


@router.post(
    "/attendees",
    response_model=AttendeeProfile,
    status_code=status.HTTP_201_CREATED,
    summary="Register a person at the desk and issue their badge token",
)
def register_attendee(
    payload: AttendeeCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(staff_only),
) -> AttendeeProfile:
    return register_attendee_controller(payload, db)


@router.get(
    "/me",
    response_model=AttendeeProfile,
    summary="Own profile, including the badge token",
)
def get_me(
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
) -> AttendeeProfile:
    return get_profile_controller(db, current_user["id"])


@router.get(
    "/me/qr",
    response_class=Response,
    responses={200: {"content": {"image/png": {}}}},
    summary="Own badge token rendered as a QR code",
)
def get_my_qr(
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
) -> Response:
    return Response(content=get_qr_png_controller(db, current_user["id"]), media_type="image/png")

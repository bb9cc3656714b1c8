# api/check_in/check_in_routes.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from config.database import get_db
from middlewares.role_middleware import staff_only
from api.check_in.check_in_schema import CheckInRequest, AttendeeIdRequest, CheckInResponse
from api.check_in.check_in_controller import CheckInController

router = APIRouter(tags=["Check-in"])


@router.post(
    "/check-in",
    response_model=CheckInResponse,
    response_model_exclude_none=True,
    summary="Check in the attendee whose badge was scanned",
)
def check_in(
    payload: CheckInRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(staff_only),
) -> CheckInResponse:
    """
    A repeat scan returns 200 with `success: false, alreadyCheckedIn: true`.
    """
    return CheckInController.check_in(payload, db)


@router.post(
    "/manual-check-in",
    response_model=CheckInResponse,
    response_model_exclude_none=True,
    summary="Check in an attendee picked from the staff search list",
)
def manual_check_in(
    payload: AttendeeIdRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(staff_only),
) -> CheckInResponse:
    return CheckInController.manual_check_in(payload, db)


@router.post(
    "/check-out",
    response_model=CheckInResponse,
    response_model_exclude_none=True,
    summary="Undo a check-in",
)
def check_out(
    payload: AttendeeIdRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(staff_only),
) -> CheckInResponse:
    return CheckInController.check_out(payload, db)

# api/check_in/check_in_controller.py

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from api.check_in.check_in_service import CheckInService, CheckInResult
from api.check_in.check_in_exceptions import (
    CheckInError,
    NotFound,
    AlreadyCheckedIn,
    NotCheckedIn,
    ForbiddenRole,
    DuplicateEmail,
)
from api.check_in.check_in_schema import (
    CheckInRequest,
    AttendeeIdRequest,
    CheckInResponse,
    CheckInUser,
)

STATUS_BY_ERROR = {
    NotFound:         status.HTTP_404_NOT_FOUND,
    AlreadyCheckedIn: status.HTTP_400_BAD_REQUEST,
    NotCheckedIn:     status.HTTP_400_BAD_REQUEST,
    ForbiddenRole:    status.HTTP_403_FORBIDDEN,
    DuplicateEmail:   status.HTTP_409_CONFLICT,
}


def to_http_exception(exc: CheckInError) -> HTTPException:
    return HTTPException(
        status_code=STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST),
        detail={"code": exc.code, "message": exc.message},
    )


def missing_field(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"code": "MISSING_FIELD", "message": message},
    )


def _response(result: CheckInResult, message: str) -> CheckInResponse:
    return CheckInResponse(
        success=result.success,
        already_checked_in=True if result.already_checked_in else None,
        user=CheckInUser(name=result.attendee.name, email=result.attendee.email),
        message=message,
    )


class CheckInController:
    @staticmethod
    def check_in(payload: CheckInRequest, db: Session) -> CheckInResponse:
        if not payload.qr_token:
            raise missing_field("QR code value is required")
        try:
            result = CheckInService(db).check_in_by_token(payload.qr_token)
        except CheckInError as e:
            raise to_http_exception(e)

        if result.already_checked_in:
            return _response(result, "Attendee already checked in")
        return _response(result, "Check-in successful")

    @staticmethod
    def manual_check_in(payload: AttendeeIdRequest, db: Session) -> CheckInResponse:
        if payload.attendee_id is None:
            raise missing_field("Attendee ID is required")
        try:
            result = CheckInService(db).check_in_by_id(payload.attendee_id)
        except CheckInError as e:
            raise to_http_exception(e)
        return _response(result, "Check-in successful")

    @staticmethod
    def check_out(payload: AttendeeIdRequest, db: Session) -> CheckInResponse:
        if payload.attendee_id is None:
            raise missing_field("Attendee ID is required")
        try:
            result = CheckInService(db).check_out_by_id(payload.attendee_id)
        except CheckInError as e:
            raise to_http_exception(e)
        return _response(result, "Check-out successful")

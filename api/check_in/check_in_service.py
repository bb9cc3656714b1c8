# api/check_in/check_in_service.py

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from api.attendees.attendees_model import Attendee, AttendeeRole
from api.attendees.attendees_service import AttendeeService
from api.check_in.check_in_exceptions import (
    AlreadyCheckedIn,
    ForbiddenRole,
    NotCheckedIn,
    NotFound,
)

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CheckInResult:
    success: bool
    attendee: Attendee
    already_checked_in: bool = False


class CheckInService:
    """
    Moves attendee records between pending and checked in.

    Every transition is one conditional UPDATE guarded on the current state;
    the affected row count decides the outcome, so concurrent scans of the
    same badge produce exactly one success.
    """

    def __init__(self, db: Session, clock: Optional[Callable[[], datetime]] = None):
        self.db = db
        self.registry = AttendeeService(db)
        self.clock = clock or utc_now

    # ─── Transitions ───────────────────────────────────────────────────────────
    def check_in_by_token(self, qr_token: str) -> CheckInResult:
        """
        Scanner path. A repeat scan is not an error: it returns a result with
        ``already_checked_in`` set so the operator still sees who it was.
        """
        attendee = self.registry.find_by_token(qr_token)
        if attendee is None:
            logger.warning("Check-in rejected: unknown token %r", qr_token)
            raise NotFound("qr_token", qr_token)
        if attendee.is_staff:
            logger.warning("Check-in rejected: staff record %s", attendee.id)
            raise ForbiddenRole(attendee.id)

        if self._transition(attendee.id, checked_in=True):
            logger.info("Checked in attendee %s via badge", attendee.id)
            return CheckInResult(success=True, attendee=attendee)

        logger.info("Attendee %s already checked in (badge rescan)", attendee.id)
        return CheckInResult(success=False, attendee=attendee, already_checked_in=True)

    def check_in_by_id(self, attendee_id: int) -> CheckInResult:
        """
        Manual path used from the staff search list. A repeat here means the
        list was stale, so it raises AlreadyCheckedIn.
        """
        if self._transition(attendee_id, checked_in=True):
            logger.info("Checked in attendee %s manually", attendee_id)
            return CheckInResult(success=True, attendee=self.registry.find_by_id(attendee_id))

        attendee = self._classify_rejection(attendee_id)
        logger.warning("Manual check-in rejected: attendee %s already checked in", attendee.id)
        raise AlreadyCheckedIn(attendee.id)

    def check_out_by_id(self, attendee_id: int) -> CheckInResult:
        """Staff correction: return a checked-in record to pending."""
        if self._transition(attendee_id, checked_in=False):
            logger.info("Checked out attendee %s", attendee_id)
            return CheckInResult(success=True, attendee=self.registry.find_by_id(attendee_id))

        attendee = self._classify_rejection(attendee_id)
        logger.warning("Check-out rejected: attendee %s is not checked in", attendee.id)
        raise NotCheckedIn(attendee.id)

    # ─── Internals ─────────────────────────────────────────────────────────────
    def _transition(self, attendee_id: int, checked_in: bool) -> bool:
        stmt = (
            update(Attendee)
            .where(
                Attendee.id == attendee_id,
                Attendee.role == AttendeeRole.attendee,
                Attendee.checked_in == (not checked_in),
            )
            .values(
                checked_in=checked_in,
                checked_in_at=self.clock() if checked_in else None,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("❌ Check-in transition failed for attendee %s", attendee_id)
            raise
        return result.rowcount == 1

    def _classify_rejection(self, attendee_id: int) -> Attendee:
        """
        Explain why a guarded update touched no row. Raises NotFound or
        ForbiddenRole; otherwise returns the record whose state did not match.
        """
        attendee = self.registry.find_by_id(attendee_id)
        if attendee is None:
            logger.warning("Rejected: no attendee with id %s", attendee_id)
            raise NotFound("id", attendee_id)
        if attendee.is_staff:
            logger.warning("Rejected: attendee %s is staff", attendee_id)
            raise ForbiddenRole(attendee.id)
        return attendee

from typing import List, Dict, Any

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from api.attendees.attendees_model import Attendee, AttendeeRole

# ─── Check-in Statistics ────────────────────────────────────────────────────
# Always derived from the registry on demand; there are no stored counters.


def check_in_rate_percent(checked_in: int, total_registered: int) -> int:
    """
    Percentage of registered people checked in, rounded half up.
    Zero when nobody is registered.
    """
    if total_registered <= 0:
        return 0
    # floor(100 * checked_in / total + 0.5) in integer arithmetic
    return (200 * checked_in + total_registered) // (2 * total_registered)


def get_stats(db: Session) -> Dict[str, int]:
    """
    Counts over the whole registry, read in a single statement so they come
    from one consistent snapshot.
    """
    total, checked_in, attendees, staff = db.query(
        func.count(Attendee.id),
        func.count(case((Attendee.checked_in == True, 1))),  # noqa: E712
        func.count(case((Attendee.role == AttendeeRole.attendee, 1))),
        func.count(case((Attendee.role == AttendeeRole.staff, 1))),
    ).one()

    return {
        "total_registered": total,
        "checked_in": checked_in,
        "pending": total - checked_in,
        "attendee_count": attendees,
        "staff_count": staff,
        "check_in_rate_percent": check_in_rate_percent(checked_in, total),
    }


def get_recent_check_ins(db: Session, limit: int = 10) -> List[Dict[str, Any]]:
    """
    Most recent check-ins first; equal timestamps keep registration order.
    """
    rows = (
        db.query(Attendee)
          .filter(Attendee.checked_in == True)  # noqa: E712
          .order_by(Attendee.checked_in_at.desc(), Attendee.id.asc())
          .limit(limit)
          .all()
    )
    return [
        {
            "id": r.id,
            "name": r.name,
            "email": r.email,
            "checked_in_at": r.checked_in_at,
        }
        for r in rows
    ]

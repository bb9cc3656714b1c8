# api/attendees/attendees_service.py

import io
import logging
import uuid
from typing import List, Optional, Union

import qrcode
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config.settings import settings
from api.attendees.attendees_model import Attendee, AttendeeRole
from api.check_in.check_in_exceptions import DuplicateEmail

logger = logging.getLogger(__name__)

SAMPLE_REGISTRY = [
    ("john.doe@example.com", "John Doe", AttendeeRole.attendee, "SC2026-ATT-001"),
    ("jane.smith@example.com", "Jane Smith", AttendeeRole.attendee, "SC2026-ATT-002"),
    ("michael.johnson@example.com", "Michael Johnson", AttendeeRole.attendee, "SC2026-ATT-003"),
    ("sarah.williams@example.com", "Sarah Williams", AttendeeRole.attendee, "SC2026-ATT-004"),
    ("david.brown@example.com", "David Brown", AttendeeRole.attendee, "SC2026-ATT-005"),
    ("emily.davis@example.com", "Emily Davis", AttendeeRole.attendee, "SC2026-ATT-006"),
    ("robert.miller@example.com", "Robert Miller", AttendeeRole.attendee, "SC2026-ATT-007"),
    ("jennifer.wilson@example.com", "Jennifer Wilson", AttendeeRole.attendee, "SC2026-ATT-008"),
    ("staff@stresscongress.org", "Staff Member", AttendeeRole.staff, "SC2026-STAFF-001"),
    ("admin@stresscongress.org", "Admin User", AttendeeRole.staff, "SC2026-STAFF-002"),
]


def normalize_email(email: str) -> str:
    return email.strip().lower()


def generate_qr_token(prefix: Optional[str] = None) -> str:
    """Return a fresh ``<prefix>-<uuid4>`` badge token."""
    return f"{prefix or settings.EVENT_PREFIX}-{uuid.uuid4()}"


def render_qr_png(payload: str) -> bytes:
    """Render ``payload`` as a PNG QR code."""
    qr = qrcode.QRCode(version=1, box_size=10, border=4)
    qr.add_data(payload)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


class AttendeeService:
    def __init__(self, db: Session):
        self.db = db

    # ─── Lookups ────────────────────────────────────────────────────────────────
    def find_by_email(self, email: str) -> Optional[Attendee]:
        return (
            self.db.query(Attendee)
                .filter(Attendee.email == normalize_email(email))
                .one_or_none()
        )

    def find_by_id(self, attendee_id: int) -> Optional[Attendee]:
        return self.db.get(Attendee, attendee_id)

    def find_by_token(self, qr_token: str) -> Optional[Attendee]:
        return (
            self.db.query(Attendee)
                .filter(Attendee.qr_token == qr_token)
                .one_or_none()
        )

    def list_attendees(self, search: Optional[str] = None) -> List[Attendee]:
        """
        All records ordered by name. ``search`` matches a case-insensitive
        substring of the name or the email.
        """
        query = self.db.query(Attendee)
        term = (search or "").strip().lower()
        if term:
            query = query.filter(
                or_(
                    func.lower(Attendee.name).contains(term, autoescape=True),
                    Attendee.email.contains(term, autoescape=True),
                )
            )
        return query.order_by(Attendee.name.asc(), Attendee.id.asc()).all()

    # ─── Registration ──────────────────────────────────────────────────────────
    def create(
        self,
        email: str,
        name: str,
        role: Union[AttendeeRole, str] = AttendeeRole.attendee,
        qr_token: Optional[str] = None,
    ) -> Attendee:
        """
        Register a person and issue their badge token.
        Raises DuplicateEmail when the normalised email is taken.
        """
        normalized = normalize_email(email)
        if self.find_by_email(normalized):
            raise DuplicateEmail(normalized)

        attendee = Attendee(
            email=normalized,
            name=name.strip(),
            role=AttendeeRole(role),
            qr_token=qr_token or generate_qr_token(),
            checked_in=False,
            checked_in_at=None,
        )
        self.db.add(attendee)
        try:
            self.db.commit()
        except IntegrityError:
            # a concurrent registration won the unique constraint
            self.db.rollback()
            if self.find_by_email(normalized):
                raise DuplicateEmail(normalized)
            raise

        self.db.refresh(attendee)
        logger.info("Registered %s %s (id=%s)", attendee.role.value, attendee.email, attendee.id)
        return attendee

    def seed_sample_registry(self) -> int:
        """Insert the sample registry when the table is empty. Returns rows added."""
        if self.db.query(Attendee.id).first() is not None:
            logger.info("Registry already seeded")
            return 0

        for email, name, role, token in SAMPLE_REGISTRY:
            self.db.add(Attendee(
                email=email,
                name=name,
                role=role,
                qr_token=token,
                checked_in=False,
                checked_in_at=None,
            ))
        self.db.commit()
        logger.info("Seeded %d registry records", len(SAMPLE_REGISTRY))
        return len(SAMPLE_REGISTRY)

# api/attendees/attendees_model.py
from sqlalchemy import Column, Integer, String, Boolean, Enum, DateTime, CheckConstraint
from sqlalchemy.sql import func
from config.database import Base
import enum


class AttendeeRole(enum.Enum):
    attendee = 'attendee'
    staff    = 'staff'


class Attendee(Base):
    __tablename__ = 'attendees'
    __table_args__ = (
        # checked_in_at is set exactly while checked_in is true
        CheckConstraint(
            "(checked_in = true AND checked_in_at IS NOT NULL) OR "
            "(checked_in = false AND checked_in_at IS NULL)",
            name="ck_attendees_checked_in_at",
        ),
        {"sqlite_autoincrement": True},
    )

    id            = Column(Integer, primary_key=True, index=True)
    email         = Column(String(255), nullable=False, unique=True, index=True)
    name          = Column(String(255), nullable=False)
    role          = Column(Enum(AttendeeRole), nullable=False, default=AttendeeRole.attendee)
    qr_token      = Column(String(128), nullable=False, unique=True, index=True)
    checked_in    = Column(Boolean, nullable=False, default=False)
    checked_in_at = Column(DateTime(timezone=True), nullable=True)
    created_at    = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    @property
    def is_staff(self) -> bool:
        return self.role == AttendeeRole.staff

    def __repr__(self):
        return f"<Attendee(id={self.id}, email='{self.email}', checked_in={self.checked_in})>"

from datetime import datetime

from pydantic import field_validator

from utils.schema_utils import CamelModel, as_utc


class StatsOut(CamelModel):
    total_registered: int
    checked_in: int
    pending: int
    attendee_count: int
    staff_count: int
    check_in_rate_percent: int


class RecentCheckInOut(CamelModel):
    id: int
    name: str
    email: str
    checked_in_at: datetime

    @field_validator("checked_in_at")
    @classmethod
    def attach_utc(cls, v):
        return as_utc(v)

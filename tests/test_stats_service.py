from datetime import datetime, timezone

import pytest

from api.check_in.check_in_service import CheckInService
from api.stats.stats_service import check_in_rate_percent, get_recent_check_ins, get_stats
from api.stats.stats_schema import RecentCheckInOut


def test_empty_registry(db):
    assert get_stats(db) == {
        "total_registered": 0,
        "checked_in": 0,
        "pending": 0,
        "attendee_count": 0,
        "staff_count": 0,
        "check_in_rate_percent": 0,
    }
    assert get_recent_check_ins(db) == []


@pytest.mark.parametrize(
    "checked_in,total,expected",
    [(0, 0, 0), (0, 10, 0), (1, 10, 10), (1, 8, 13), (1, 3, 33), (2, 3, 67), (10, 10, 100)],
)
def test_rate_rounds_half_up(checked_in, total, expected):
    assert check_in_rate_percent(checked_in, total) == expected


def test_counts_follow_check_ins(db, seeded, clock):
    service = CheckInService(db, clock=clock)
    service.check_in_by_token("SC2026-ATT-001")
    service.check_in_by_token("SC2026-ATT-002")

    stats = get_stats(db)
    assert stats["total_registered"] == 10
    assert stats["attendee_count"] == 8
    assert stats["staff_count"] == 2
    assert stats["checked_in"] == 2
    assert stats["pending"] == 8
    assert stats["check_in_rate_percent"] == 20
    assert stats["checked_in"] + stats["pending"] == stats["total_registered"]


def test_recent_check_ins_newest_first(db, seeded, clock):
    service = CheckInService(db, clock=clock)
    for token in ("SC2026-ATT-001", "SC2026-ATT-002", "SC2026-ATT-003"):
        service.check_in_by_token(token)

    recent = get_recent_check_ins(db, limit=2)
    assert [r["name"] for r in recent] == ["Michael Johnson", "Jane Smith"]
    assert set(recent[0]) == {"id", "name", "email", "checked_in_at"}


def test_recent_check_ins_ties_keep_registration_order(db, seeded, clock):
    service = CheckInService(db, clock=clock.hold())
    service.check_in_by_token("SC2026-ATT-004")
    service.check_in_by_token("SC2026-ATT-003")

    recent = get_recent_check_ins(db)
    assert [r["name"] for r in recent] == ["Michael Johnson", "Sarah Williams"]


def test_checked_out_records_leave_the_feed(db, seeded, clock):
    service = CheckInService(db, clock=clock)
    john = seeded.find_by_token("SC2026-ATT-001")
    service.check_in_by_id(john.id)
    service.check_out_by_id(john.id)

    assert get_recent_check_ins(db) == []
    assert get_stats(db)["checked_in"] == 0


def test_feed_timestamps_are_utc_on_the_wire(db, seeded, clock):
    CheckInService(db, clock=clock).check_in_by_token("SC2026-ATT-001")

    row = get_recent_check_ins(db)[0]
    out = RecentCheckInOut(**row)
    assert out.checked_in_at.tzinfo is not None
    assert out.checked_in_at.utcoffset().total_seconds() == 0
    assert out.checked_in_at.replace(tzinfo=None) == clock.now.replace(tzinfo=None)


def test_aware_timestamps_pass_through():
    stamp = datetime(2026, 3, 3, 9, 30, tzinfo=timezone.utc)
    out = RecentCheckInOut(id=1, name="John Doe", email="john.doe@example.com", checked_in_at=stamp)
    assert out.checked_in_at == stamp
    assert out.model_dump(by_alias=True, mode="json")["checkedInAt"].endswith("Z")

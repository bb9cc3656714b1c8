import pytest
from sqlalchemy.exc import IntegrityError

from api.attendees.attendees_model import Attendee, AttendeeRole
from api.attendees.attendees_service import generate_qr_token, render_qr_png, SAMPLE_REGISTRY
from api.check_in.check_in_exceptions import DuplicateEmail


def test_create_normalises_email_and_issues_token(registry):
    a = registry.create("  Alice.Smith@Example.COM ", "Alice Smith")

    assert a.id is not None
    assert a.email == "alice.smith@example.com"
    assert a.role == AttendeeRole.attendee
    assert a.qr_token.startswith("SC2026-")
    assert a.checked_in is False
    assert a.checked_in_at is None


def test_lookups_by_email_id_and_token(registry):
    a = registry.create("bob@example.com", "Bob", "staff")

    assert registry.find_by_email("BOB@example.com").id == a.id
    assert registry.find_by_id(a.id).email == "bob@example.com"
    assert registry.find_by_token(a.qr_token).id == a.id
    assert registry.find_by_token("nonexistent-token") is None
    assert registry.find_by_id(9999) is None
    assert a.role == AttendeeRole.staff


def test_duplicate_email_is_rejected_case_insensitively(registry):
    registry.create("carol@example.com", "Carol")

    with pytest.raises(DuplicateEmail) as exc:
        registry.create("CAROL@example.com", "Carol Again")
    assert exc.value.code == "DUPLICATE_EMAIL"


def test_tokens_are_unique_per_record(registry):
    tokens = {registry.create(f"user{i}@example.com", f"User {i}").qr_token for i in range(20)}
    assert len(tokens) == 20


def test_generate_qr_token_uses_prefix():
    assert generate_qr_token("EVT").startswith("EVT-")
    assert generate_qr_token("EVT") != generate_qr_token("EVT")


def test_token_column_is_unique(db, registry):
    a = registry.create("dave@example.com", "Dave")
    db.add(Attendee(email="erin@example.com", name="Erin", role=AttendeeRole.attendee,
                    qr_token=a.qr_token, checked_in=False))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_checked_in_at_must_match_checked_in(db):
    db.add(Attendee(email="frank@example.com", name="Frank", role=AttendeeRole.attendee,
                    qr_token="SC2026-BROKEN", checked_in=True, checked_in_at=None))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_seed_only_runs_on_empty_registry(registry):
    assert registry.seed_sample_registry() == len(SAMPLE_REGISTRY)
    assert registry.seed_sample_registry() == 0
    assert registry.find_by_token("SC2026-ATT-001").name == "John Doe"
    assert registry.find_by_token("SC2026-STAFF-001").role == AttendeeRole.staff


def test_search_matches_name_or_email(seeded):
    names = [a.name for a in seeded.list_attendees("SMITH")]
    assert names == ["Jane Smith"]

    by_email = [a.email for a in seeded.list_attendees("stresscongress")]
    assert sorted(by_email) == ["admin@stresscongress.org", "staff@stresscongress.org"]

    assert len(seeded.list_attendees()) == len(SAMPLE_REGISTRY)
    assert seeded.list_attendees("%") == []


def test_render_qr_png():
    png = render_qr_png("SC2026-ATT-001")
    assert png.startswith(b"\x89PNG")

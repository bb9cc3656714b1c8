import pytest
import requests

from scanner.check_in_client import CheckInClient
from scanner.scan_loop import ScanState


class FakeResponse:
    def __init__(self, status_code, body=None):
        self.status_code = status_code
        self._body = body

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


class FakeSession:
    def __init__(self, response=None, error=None):
        self.headers = {}
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append((url, json, timeout))
        if self.error:
            raise self.error
        return self.response


def make_client(**kwargs):
    session = FakeSession(**kwargs)
    return CheckInClient("http://localhost:8000/api/", "jwt-token", timeout=5, session=session), session


def test_posts_token_with_bearer_header():
    client, session = make_client(response=FakeResponse(200, {
        "success": True,
        "user": {"name": "John Doe", "email": "john.doe@example.com"},
        "message": "Check-in successful",
    }))

    outcome = client.check_in("SC2026-ATT-001")

    assert session.calls == [("http://localhost:8000/api/check-in", {"qrToken": "SC2026-ATT-001"}, 5)]
    assert session.headers["Authorization"] == "Bearer jwt-token"
    assert outcome.state == ScanState.SUCCESS
    assert outcome.name == "John Doe"
    assert outcome.token == "SC2026-ATT-001"


def test_already_checked_in():
    client, _ = make_client(response=FakeResponse(200, {
        "success": False,
        "alreadyCheckedIn": True,
        "user": {"name": "John Doe", "email": "john.doe@example.com"},
        "message": "Attendee already checked in",
    }))
    outcome = client.check_in("SC2026-ATT-001")
    assert outcome.state == ScanState.ALREADY_CHECKED_IN
    assert outcome.message == "John Doe is already checked in"


@pytest.mark.parametrize(
    "response,message",
    [
        (FakeResponse(404, {"detail": {"code": "NOT_FOUND", "message": "Attendee not found"}}), "Attendee not found"),
        (FakeResponse(403, {"detail": {"code": "FORBIDDEN_ROLE", "message": "Staff records cannot be checked in"}}),
         "Staff records cannot be checked in"),
        (FakeResponse(401, {"detail": "Token has expired"}), "Token has expired"),
        (FakeResponse(502), "Check-in failed (HTTP 502)"),
    ],
)
def test_errors_become_error_outcomes(response, message):
    client, _ = make_client(response=response)
    outcome = client.check_in("SC2026-ATT-001")
    assert outcome.state == ScanState.ERROR
    assert outcome.message == message


def test_network_failure():
    client, _ = make_client(error=requests.ConnectionError("connection refused"))
    outcome = client.check_in("SC2026-ATT-001")
    assert outcome.state == ScanState.ERROR
    assert outcome.message.startswith("Network error")

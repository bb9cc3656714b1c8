"""
Failures raised by the attendee registry and the check-in state machine.

Services raise these; controllers translate them into HTTP responses.
Every failure is scoped to a single attempt and never fatal to the process.
"""


class CheckInError(Exception):
    """
    Base failure for the check-in subsystem

    Carries a machine-readable ``code`` next to the human message so the
    request layer and the scanner client can tell failures apart.
    """

    code = "CHECK_IN_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class NotFound(CheckInError):
    """No record matches the given token or id."""

    code = "NOT_FOUND"

    def __init__(self, lookup: str, value):
        super().__init__("Attendee not found")
        self.lookup = lookup
        self.value = value


class AlreadyCheckedIn(CheckInError):
    """Manual check-in of a record that is already checked in."""

    code = "ALREADY_CHECKED_IN"

    def __init__(self, attendee_id: int):
        super().__init__("Attendee already checked in")
        self.attendee_id = attendee_id


class NotCheckedIn(CheckInError):
    """Check-out of a record that is still pending."""

    code = "NOT_CHECKED_IN"

    def __init__(self, attendee_id: int):
        super().__init__("Attendee is not checked in")
        self.attendee_id = attendee_id


class ForbiddenRole(CheckInError):
    """Staff records are never checked in or out."""

    code = "FORBIDDEN_ROLE"

    def __init__(self, attendee_id: int):
        super().__init__("Staff members cannot be checked in or out")
        self.attendee_id = attendee_id


class DuplicateEmail(CheckInError):
    """A record with this email is already registered."""

    code = "DUPLICATE_EMAIL"

    def __init__(self, email: str):
        super().__init__(f"An account with email '{email}' already exists")
        self.email = email

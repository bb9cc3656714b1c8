"""
Client-side scan loop for the staff badge scanner.

The loop is a small state machine driven from a single thread:

    SCANNING -> SUBMITTING -> SUCCESS | ALREADY_CHECKED_IN | ERROR -> SCANNING

It accepts decoded QR payloads only while SCANNING, keeps at most one
submission in flight, drops a payload identical to the last one it
accepted, and returns to SCANNING either when the operator dismisses the
outcome or when the outcome's display time runs out. Responses for a token
that is no longer being submitted are discarded.

Nothing here touches the camera or the network; the runner in
``scanner.camera`` feeds frames in and delivers responses back.
"""

import enum
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)

SUCCESS_RESET_SECONDS = 3.0
NOTICE_RESET_SECONDS = 2.5


class ScanState(enum.Enum):
    SCANNING = "scanning"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ALREADY_CHECKED_IN = "already_checked_in"
    ERROR = "error"


TERMINAL_STATES = (ScanState.SUCCESS, ScanState.ALREADY_CHECKED_IN, ScanState.ERROR)


@dataclass(frozen=True)
class ScanOutcome:
    """Result of one submitted token, as shown to the operator."""
    state: ScanState
    token: str
    name: Optional[str] = None
    email: Optional[str] = None
    message: str = ""

    def __post_init__(self):
        if self.state not in TERMINAL_STATES:
            raise ValueError(f"{self.state} is not an outcome state")

    @classmethod
    def success(cls, token: str, name: str, email: Optional[str] = None) -> "ScanOutcome":
        return cls(ScanState.SUCCESS, token, name, email, f"Welcome, {name}!")

    @classmethod
    def already_checked_in(cls, token: str, name: Optional[str], email: Optional[str] = None) -> "ScanOutcome":
        return cls(
            ScanState.ALREADY_CHECKED_IN, token, name, email,
            f"{name or 'Attendee'} is already checked in",
        )

    @classmethod
    def error(cls, token: str, message: str) -> "ScanOutcome":
        return cls(ScanState.ERROR, token, message=message or "Check-in failed")


class ScanLoop:
    def __init__(
        self,
        submit: Callable[[str], None],
        clock: Callable[[], float] = time.monotonic,
        success_reset: float = SUCCESS_RESET_SECONDS,
        notice_reset: float = NOTICE_RESET_SECONDS,
    ):
        self._submit = submit
        self._clock = clock
        self._success_reset = success_reset
        self._notice_reset = notice_reset

        self.state = ScanState.SCANNING
        self.current_token: Optional[str] = None
        self.last_payload: Optional[str] = None
        self.outcome: Optional[ScanOutcome] = None
        self.reset_at: Optional[float] = None

    @property
    def accepts_frames(self) -> bool:
        return self.state == ScanState.SCANNING

    @property
    def shows_overlay(self) -> bool:
        """The success confirmation replaces the camera preview."""
        return self.state == ScanState.SUCCESS

    def on_decoded(self, payload: str) -> bool:
        """
        Offer a decoded payload. Returns True when it was submitted.
        """
        if not payload or not self.accepts_frames:
            return False
        if payload == self.last_payload:
            return False

        self.last_payload = payload
        self.current_token = payload
        self.outcome = None
        self.state = ScanState.SUBMITTING
        logger.debug("Submitting %r", payload)
        self._submit(payload)
        return True

    def on_response(self, outcome: ScanOutcome) -> bool:
        """
        Deliver the outcome of a submission. Stale outcomes are dropped and
        False is returned.
        """
        if self.state != ScanState.SUBMITTING or outcome.token != self.current_token:
            logger.debug("Discarding stale response for %r", outcome.token)
            return False

        self.outcome = outcome
        self.state = outcome.state
        delay = self._success_reset if outcome.state == ScanState.SUCCESS else self._notice_reset
        self.reset_at = self._clock() + delay
        return True

    def tick(self) -> None:
        """Return to scanning once the shown outcome has timed out."""
        if self.state not in TERMINAL_STATES or self.reset_at is None:
            return
        if self._clock() < self.reset_at:
            return

        if self.state == ScanState.SUCCESS:
            self.dismiss()
        else:
            # keep last_payload so a badge still in frame is not resent
            self._reset()

    def dismiss(self) -> bool:
        """
        Operator dismissal or "scan another": back to scanning, forget the last
        badge. Ignored while a submission is in flight; returns False then.
        """
        if self.state == ScanState.SUBMITTING:
            logger.debug("Dismiss ignored while submitting %r", self.current_token)
            return False
        self._reset()
        self.last_payload = None
        return True

    def _reset(self) -> None:
        self.state = ScanState.SCANNING
        self.current_token = None
        self.outcome = None
        self.reset_at = None

import logging
from typing import Any, Dict, Optional

import requests

from scanner.scan_loop import ScanOutcome

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10  # seconds


class CheckInClient:
    """
    Submits scanned badge tokens to ``POST {base_url}/check-in`` and maps the
    reply to a ScanOutcome. Never retries; failures come back as ERROR outcomes.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: int = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.url = f"{base_url.rstrip('/')}/check-in"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {token}",
            "User-Agent": "stress-congress-scanner/1.0",
        })

    def check_in(self, qr_token: str) -> ScanOutcome:
        try:
            resp = self.session.post(self.url, json={"qrToken": qr_token}, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Check-in request failed: %s", e)
            return ScanOutcome.error(qr_token, f"Network error: {e}")

        try:
            body: Dict[str, Any] = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if resp.status_code == 200:
            user = body.get("user") or {}
            if body.get("success"):
                return ScanOutcome.success(qr_token, user.get("name", ""), user.get("email"))
            if body.get("alreadyCheckedIn"):
                return ScanOutcome.already_checked_in(qr_token, user.get("name"), user.get("email"))

        if resp.status_code == 404:
            return ScanOutcome.error(qr_token, "Attendee not found")

        logger.warning("Check-in returned HTTP %s: %s", resp.status_code, body)
        return ScanOutcome.error(qr_token, _error_message(body, resp.status_code))


def _error_message(body: Dict[str, Any], status_code: int) -> str:
    detail = body.get("detail")
    if isinstance(detail, dict) and detail.get("message"):
        return detail["message"]
    if isinstance(detail, str) and detail:
        return detail
    return f"Check-in failed (HTTP {status_code})"

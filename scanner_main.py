# scanner_main.py
"""
Staff badge scanner:
 - opens a camera and decodes QR badges
 - submits each new badge to POST /api/check-in with a staff bearer token
 - shows success / already-checked-in / error and returns to scanning

Keys (window mode): SPACE or ENTER dismisses an outcome, q or ESC quits.
"""

import sys
import logging
import argparse

from config.log_config import setup_logging
from config.settings import settings

logger = logging.getLogger("scanner")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Camera QR scanner for attendee check-in")
    parser.add_argument("--api-url", default=settings.SCANNER_API_URL, help="Base URL of the API (…/api)")
    parser.add_argument("--token", default=settings.SCANNER_TOKEN, help="Staff bearer token")
    parser.add_argument("--camera", type=int, default=0, help="Camera index for OpenCV")
    parser.add_argument("--headless", action="store_true", help="No preview window; log outcomes only")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.debug else None)
    if not args.token:
        logger.error("❌ A staff token is required (--token or SCANNER_TOKEN)")
        return 2

    from scanner.camera import CameraScanner
    from scanner.check_in_client import CheckInClient

    client = CheckInClient(args.api_url, args.token, timeout=settings.SCANNER_REQUEST_TIMEOUT)
    scanner = CameraScanner(
        client,
        camera_index=args.camera,
        headless=args.headless,
        event_name=settings.APP_NAME,
        success_reset=settings.SCANNER_SUCCESS_RESET_SECONDS,
        notice_reset=settings.SCANNER_NOTICE_RESET_SECONDS,
    )
    try:
        scanner.run()
    except RuntimeError:
        logger.exception("❌ Scanner failed to start")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Optional, Tuple

import cv2
import numpy as np

from scanner.check_in_client import CheckInClient
from scanner.scan_loop import ScanLoop, ScanOutcome, ScanState, SUCCESS_RESET_SECONDS, NOTICE_RESET_SECONDS

logger = logging.getLogger(__name__)

WINDOW_NAME = "Badge scanner"
KEY_QUIT = (ord("q"), 27)
KEY_DISMISS = (ord(" "), 13)

# BGR
COLOR_SUCCESS = (94, 197, 34)
COLOR_WARNING = (11, 158, 245)
COLOR_ERROR = (68, 68, 239)
COLOR_TEXT = (255, 255, 255)


class CameraScanner:
    """
    Runs the scan loop over a camera feed.

    Decoding and loop updates happen on the calling thread. The HTTP call runs
    on a single background worker so the preview keeps rendering while a
    submission is in flight.
    """

    def __init__(
        self,
        client: CheckInClient,
        camera_index: int = 0,
        headless: bool = False,
        event_name: str = "Stress Congress 2026",
        success_reset: float = SUCCESS_RESET_SECONDS,
        notice_reset: float = NOTICE_RESET_SECONDS,
        detector=None,
    ):
        self.client = client
        self.camera_index = camera_index
        self.headless = headless
        self.event_name = event_name
        self.detector = detector or cv2.QRCodeDetector()
        self.executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="check-in")
        self.loop = ScanLoop(self._submit, success_reset=success_reset, notice_reset=notice_reset)
        self._pending: Optional[Tuple[str, Future]] = None

    # ─── Submission ────────────────────────────────────────────────────────────
    def _submit(self, token: str) -> None:
        self._pending = (token, self.executor.submit(self.client.check_in, token))

    def collect(self) -> Optional[ScanOutcome]:
        """Hand a finished submission back to the loop, if there is one."""
        if self._pending is None or not self._pending[1].done():
            return None
        token, future = self._pending
        self._pending = None
        try:
            outcome = future.result()
        except Exception as e:
            logger.exception("❌ Check-in submission crashed")
            outcome = ScanOutcome.error(token, str(e))

        if self.loop.on_response(outcome):
            self._log_outcome(outcome)
            return outcome
        return None

    def wait_for_submission(self, timeout: Optional[float] = None) -> Optional[ScanOutcome]:
        if self._pending is not None:
            wait([self._pending[1]], timeout=timeout)
        return self.collect()

    # ─── Frame handling ────────────────────────────────────────────────────────
    def process_frame(self, frame) -> None:
        self.collect()
        self.loop.tick()
        if not self.loop.accepts_frames:
            return
        payload, _, _ = self.detector.detectAndDecode(frame)
        if payload:
            self.loop.on_decoded(payload)

    def render(self, frame):
        if self.loop.shows_overlay:
            return self._success_overlay(frame.shape)

        view = frame.copy()
        outcome = self.loop.outcome
        if self.loop.state == ScanState.SUBMITTING:
            self._banner(view, "Processing...", (60, 60, 60))
        elif outcome is not None and outcome.state == ScanState.ALREADY_CHECKED_IN:
            self._banner(view, outcome.message, COLOR_WARNING)
        elif outcome is not None and outcome.state == ScanState.ERROR:
            self._banner(view, outcome.message, COLOR_ERROR)
        else:
            self._banner(view, "Position QR code within the frame", (40, 40, 40))
        return view

    def _success_overlay(self, shape):
        view = np.zeros(shape, dtype=np.uint8)
        view[:] = COLOR_SUCCESS
        height, width = shape[:2]
        outcome = self.loop.outcome
        lines = ["Check-in successful", outcome.name or "", self.event_name, "Press SPACE to continue"]
        for i, line in enumerate(lines):
            scale = 1.2 if i < 2 else 0.7
            (text_w, _), _ = cv2.getTextSize(line, cv2.FONT_HERSHEY_SIMPLEX, scale, 2)
            y = height // 3 + i * 50
            cv2.putText(view, line, ((width - text_w) // 2, y), cv2.FONT_HERSHEY_SIMPLEX, scale, COLOR_TEXT, 2, cv2.LINE_AA)
        return view

    @staticmethod
    def _banner(view, text: str, color) -> None:
        height, width = view.shape[:2]
        cv2.rectangle(view, (0, height - 50), (width, height), color, thickness=-1)
        cv2.putText(view, text, (16, height - 18), cv2.FONT_HERSHEY_SIMPLEX, 0.7, COLOR_TEXT, 2, cv2.LINE_AA)

    def _log_outcome(self, outcome: ScanOutcome) -> None:
        if outcome.state == ScanState.SUCCESS:
            logger.info("✅ Checked in %s", outcome.name)
        elif outcome.state == ScanState.ALREADY_CHECKED_IN:
            logger.warning("⚠️ %s", outcome.message)
        else:
            logger.error("❌ %s", outcome.message)

    # ─── Main loop ─────────────────────────────────────────────────────────────
    def run(self) -> None:
        capture = cv2.VideoCapture(self.camera_index)
        if not capture.isOpened():
            raise RuntimeError(f"Cannot open camera {self.camera_index}")

        logger.info("▶️ Scanner started on camera %s", self.camera_index)
        try:
            while True:
                ok, frame = capture.read()
                if not ok:
                    logger.warning("Camera returned no frame; stopping")
                    break

                self.process_frame(frame)
                if self.headless:
                    continue

                cv2.imshow(WINDOW_NAME, self.render(frame))
                key = cv2.waitKey(1) & 0xFF
                if key in KEY_QUIT:
                    break
                if key in KEY_DISMISS:
                    self.loop.dismiss()
        except KeyboardInterrupt:
            logger.info("Interrupted")
        finally:
            capture.release()
            if not self.headless:
                cv2.destroyAllWindows()
            self.executor.shutdown(wait=False)
            logger.info("👋 Scanner stopped")

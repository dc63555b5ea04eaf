"""
Scan Session State Machine
Drives one staff device through badge scan -> ticket scan -> save.

SCAN_BADGE -> BADGE_DONE -> SCAN_LUMA -> SAVING -> SUCCESS
     |                          |           |
     +--------------------------+-----------+--> ERROR

SUCCESS resets itself after a delay; ERROR waits for reset().
"""

import enum
import logging
import threading
import uuid

from qr_mapper.errors import StoreError
from qr_mapper.scanner.extract import (
    DEFAULT_TICKET_DOMAIN_MARKER,
    extract_badge_code,
    is_ticket_url,
)

logger = logging.getLogger(__name__)

BADGE_ERROR_MESSAGE = "Could not read badge ID. Make sure you're scanning a valid badge QR code."
TICKET_ERROR_MESSAGE = "That doesn't look like a valid QR ticket. Please scan the attendee's ticket QR code."
SAVE_ERROR_MESSAGE = "Failed to save. Try again."
CAMERA_ERROR_MESSAGE = "Camera access denied."


class Step(str, enum.Enum):
    SCAN_BADGE = "scan_badge"
    BADGE_DONE = "badge_done"
    SCAN_LUMA = "scan_luma"
    SAVING = "saving"
    SUCCESS = "success"
    ERROR = "error"


SCANNING_STEPS = (Step.SCAN_BADGE, Step.SCAN_LUMA)

PROGRESS = {
    Step.SCAN_BADGE: 25,
    Step.BADGE_DONE: 50,
    Step.SCAN_LUMA: 75,
}


class TimerSet:
    """
    Live delayed callbacks for one session.

    Callbacks run under the session lock and only if their timer is still
    in the set, so a timer that was cancelled while already firing does nothing.
    """

    def __init__(self, lock, timer_factory=threading.Timer):
        self._lock = lock
        self._timer_factory = timer_factory
        self._live = set()

    def schedule(self, delay, callback):
        def fire():
            with self._lock:
                if timer not in self._live:
                    return
                self._live.discard(timer)
                callback()

        timer = self._timer_factory(delay, fire)
        timer.daemon = True
        self._live.add(timer)
        timer.start()
        return timer

    def cancel_all(self):
        for timer in self._live:
            timer.cancel()
        self._live.clear()

    def __len__(self):
        return len(self._live)


class ScanSession:
    """
    Client session for linking one attendee's badge to their ticket.

    `linker(badge_code, ticket_url)` persists the link and raises on failure.
    All public methods are serialized by a re-entrant lock, which also
    covers timer callbacks.
    """

    def __init__(
        self,
        linker,
        session_id=None,
        ticket_marker=DEFAULT_TICKET_DOMAIN_MARKER,
        badge_ack_delay=2.0,
        success_reset_delay=3.0,
        timer_factory=threading.Timer,
    ):
        self.session_id = session_id or uuid.uuid4().hex
        self._linker = linker
        self.ticket_marker = ticket_marker
        self.badge_ack_delay = badge_ack_delay
        self.success_reset_delay = success_reset_delay

        self._lock = threading.RLock()
        self._timers = TimerSet(self._lock, timer_factory)
        self.closed = False

        self.capture_generation = 0
        self._clear()

    def _clear(self):
        self.step = Step.SCAN_BADGE
        self.badge_code = ""
        self.ticket_url = ""
        self.error_message = ""
        self.camera_error = ""
        self._processing = False

    @property
    def pending_timers(self):
        return len(self._timers)

    # --- scan events ------------------------------------------------------

    def handle_scan(self, raw_value):
        """Feed one decoded QR payload. Returns the step after handling it."""
        with self._lock:
            if self.closed or not raw_value or self._processing:
                return self.step

            if self.step == Step.SCAN_BADGE:
                self._on_badge_scan(raw_value)
            elif self.step == Step.SCAN_LUMA:
                self._on_ticket_scan(raw_value)

            return self.step

    def _on_badge_scan(self, raw_value):
        self._processing = True

        code = extract_badge_code(raw_value)
        if not code:
            self._update(step=Step.ERROR, error_message=BADGE_ERROR_MESSAGE)
            return

        self._update(badge_code=code, step=Step.BADGE_DONE)
        self._timers.schedule(self.badge_ack_delay, self._start_ticket_scan)

    def _start_ticket_scan(self):
        self.capture_generation += 1
        self._processing = False
        self._update(step=Step.SCAN_LUMA)

    def _on_ticket_scan(self, raw_value):
        self._processing = True

        if not is_ticket_url(raw_value, self.ticket_marker):
            self._update(step=Step.ERROR, error_message=TICKET_ERROR_MESSAGE)
            return

        self._update(ticket_url=raw_value)

    # --- saving -----------------------------------------------------------

    def _update(self, **changes):
        for name, value in changes.items():
            setattr(self, name, value)

        # Save only once both codes are present and we are still on the ticket step
        if self.badge_code and self.ticket_url and self.step == Step.SCAN_LUMA:
            self._save()

    def _save(self):
        self._update(step=Step.SAVING)

        try:
            self._linker(self.badge_code, self.ticket_url)
        except StoreError as e:
            logger.warning("Session %s failed to save badge %s: %s", self.session_id, self.badge_code, e)
            self._processing = False
            self._update(step=Step.ERROR, error_message=f"Database error: {e}")
            return
        except Exception as e:
            logger.exception("Session %s failed to save badge %s", self.session_id, self.badge_code)
            self._processing = False
            self._update(step=Step.ERROR, error_message=str(e) or SAVE_ERROR_MESSAGE)
            return

        self._update(step=Step.SUCCESS)
        self._timers.schedule(self.success_reset_delay, self.reset)

    # --- user actions -----------------------------------------------------

    def reset(self):
        """Full reset for the next attendee."""
        with self._lock:
            self._timers.cancel_all()
            self._clear()
            self.capture_generation += 1

    def report_camera_error(self, message=None):
        with self._lock:
            if self.closed or self.step not in SCANNING_STEPS:
                return
            self.camera_error = message or CAMERA_ERROR_MESSAGE
            logger.info("Session %s camera error: %s", self.session_id, self.camera_error)

    def retry_camera(self):
        with self._lock:
            self.camera_error = ""
            self.capture_generation += 1

    def close(self):
        with self._lock:
            self._timers.cancel_all()
            self.closed = True

    # --- views ------------------------------------------------------------

    def snapshot(self):
        with self._lock:
            return {
                "session_id":         self.session_id,
                "step":               self.step.value,
                "scan_step":          1 if self.step in (Step.SCAN_BADGE, Step.BADGE_DONE) else 2,
                "progress":           PROGRESS.get(self.step, 100),
                "badge_code":         self.badge_code,
                "ticket_url":         self.ticket_url,
                "error_message":      self.error_message,
                "camera_error":       self.camera_error,
                "capture_generation": self.capture_generation,
                "can_reset":          self.step in SCANNING_STEPS or self.step == Step.ERROR,
            }

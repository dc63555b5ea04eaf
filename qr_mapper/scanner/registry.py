"""
Scan Session Registry
In-memory scan sessions, one per open staff scanner page.
Sessions are local to this process; run the app as a single worker.
"""

import logging
import threading
import time

from qr_mapper.scanner.session import ScanSession

logger = logging.getLogger(__name__)


class SessionRegistry:
    def __init__(self, linker, ttl=1800.0, clock=time.monotonic, **session_options):
        self._linker = linker
        self._ttl = ttl
        self._clock = clock
        self._session_options = session_options
        self._sessions = {}
        self._last_seen = {}
        self._lock = threading.Lock()

    def create(self):
        self.prune()
        session = ScanSession(self._linker, **self._session_options)
        with self._lock:
            self._sessions[session.session_id] = session
            self._last_seen[session.session_id] = self._clock()
        logger.info("Opened scan session %s", session.session_id)
        return session

    def get(self, session_id):
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                self._last_seen[session_id] = self._clock()
            return session

    def discard(self, session_id):
        with self._lock:
            session = self._sessions.pop(session_id, None)
            self._last_seen.pop(session_id, None)
        if session is not None:
            session.close()
            logger.info("Closed scan session %s", session_id)
        return session is not None

    def prune(self):
        """Close sessions idle for longer than the ttl."""
        cutoff = self._clock() - self._ttl
        with self._lock:
            expired = [sid for sid, seen in self._last_seen.items() if seen < cutoff]
        for session_id in expired:
            self.discard(session_id)
        return len(expired)

    def __len__(self):
        with self._lock:
            return len(self._sessions)

# bcc_utils/sequencing.py
"""
Latest-request-wins gate for asynchronous lookups.

Each request takes a monotonically increasing token; a response may be
applied only if its token is still the newest one issued, so a slow
superseded response can never overwrite a fresher result.
"""
from __future__ import annotations

import itertools
import threading


class LatestOnly:
    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._latest = 0
        self._lock = threading.Lock()

    def issue(self) -> int:
        with self._lock:
            self._latest = next(self._counter)
            return self._latest

    @property
    def latest(self) -> int:
        return self._latest

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._latest

    def invalidate(self) -> None:
        """Supersede everything in flight without starting a new request."""
        self.issue()

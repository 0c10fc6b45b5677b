"""
Notes API — Note ID Generator
===============================

What:  Issues note IDs as decimal strings of milliseconds since the epoch.
Why:   A raw clock reading repeats when two notes are created in the same
       millisecond. The generator keeps the time-ordered format but never
       hands out the same value twice in one process, and skips any ID
       already present in the collection being appended to.
How:   next = max(now_ms, last_issued + 1), bumped past existing IDs.
"""

import threading
import time
from typing import Callable, Iterable, Optional


class IdGenerator:
    """Monotonic, collision-free millisecond IDs."""

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        # clock returns milliseconds since the epoch; injectable for tests
        self._clock = clock or (lambda: time.time_ns() // 1_000_000)
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self, existing: Optional[Iterable[str]] = None) -> str:
        taken = set(existing or ())
        with self._lock:
            candidate = max(self._clock(), self._last + 1)
            while str(candidate) in taken:
                candidate += 1
            self._last = candidate
        return str(candidate)


# ── Singleton Instance ────────────────────────────────────────────────────
# Process-wide so every NoteService shares one sequence
id_generator = IdGenerator()

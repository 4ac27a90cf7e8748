# section_numbering/section_counter.py
from __future__ import annotations

import threading


class SectionCounter:
    """
    Two-level section numbering ("1", "1.1", "1.2", "2", ...).

    Notes:
      - Only level == 1 is top-level. Any other int bumps the subsection count.
      - The subsection count is NOT restarted by a new top-level section,
        so (1, 2, 2, 1, 2) gives "1", "1.1", "1.2", "2", "2.3".
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counter_1 = 0
        self._counter_2 = 0

    @property
    def counter_1(self) -> int:
        return self._counter_1

    @property
    def counter_2(self) -> int:
        return self._counter_2

    def reset(self) -> None:
        with self._lock:
            self._counter_1 = 0
            self._counter_2 = 0

    def increment_and_get_counter(self, level: int) -> str:
        with self._lock:
            if level == 1:
                self._counter_1 += 1
                return str(self._counter_1)

            self._counter_2 += 1
            return f"{self._counter_1}.{self._counter_2}"

    def __repr__(self) -> str:
        return f"SectionCounter(counter_1={self._counter_1}, counter_2={self._counter_2})"


# Process-wide instance for callers that number a single document at a time.
DEFAULT_COUNTER = SectionCounter()


def reset() -> None:
    DEFAULT_COUNTER.reset()


def increment_and_get_counter(level: int) -> str:
    return DEFAULT_COUNTER.increment_and_get_counter(level)

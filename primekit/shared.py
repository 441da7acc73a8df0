"""
Thread-safe structures shared by the workers of one sieve run.

Every method takes the instance lock, so no external locking is needed.
Marks are idempotent (set/clear) or order-independent (toggle parity),
so the final contents do not depend on worker scheduling.
"""

import threading
from typing import Dict, Iterable, List, Tuple


class MarkingMap:
    """
    Map from integer to bool.

    Absent keys read as unmarked. `toggle` is XOR-on-write: an absent key
    becomes True, True becomes False, False becomes True. A key toggled an
    odd number of times therefore ends True, an even number False.
    """

    def __init__(self):
        self._marks: Dict[int, bool] = {}
        self._lock = threading.Lock()

    def mark(self, n: int) -> None:
        with self._lock:
            self._marks[n] = True

    def mark_range(self, start: int, stop: int, step: int) -> None:
        """Mark every value of range(start, stop, step) under one lock hold."""
        with self._lock:
            for n in range(start, stop, step):
                self._marks[n] = True

    def toggle(self, n: int) -> None:
        with self._lock:
            self._marks[n] = not self._marks.get(n, False)

    def clear(self, n: int) -> None:
        """Turn a True entry False. Absent and False entries are left alone."""
        with self._lock:
            if self._marks.get(n, False):
                self._marks[n] = False

    def clear_range(self, start: int, stop: int, step: int) -> None:
        with self._lock:
            for n in range(start, stop, step):
                if self._marks.get(n, False):
                    self._marks[n] = False

    def get(self, n: int) -> bool:
        with self._lock:
            return self._marks.get(n, False)

    def __contains__(self, n: int) -> bool:
        with self._lock:
            return n in self._marks

    def __len__(self) -> int:
        with self._lock:
            return len(self._marks)

    def items(self) -> List[Tuple[int, bool]]:
        """Snapshot of (key, mark) pairs."""
        with self._lock:
            return list(self._marks.items())


class PrimeSet:
    """Append-only, deduplicating collection of discovered primes."""

    def __init__(self):
        self._values = set()
        self._lock = threading.Lock()

    def add(self, p: int) -> None:
        with self._lock:
            self._values.add(p)

    def update(self, values: Iterable[int]) -> None:
        with self._lock:
            self._values.update(values)

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)

    def __contains__(self, p: int) -> bool:
        with self._lock:
            return p in self._values

    def snapshot(self) -> List[int]:
        """Ascending copy of the current contents."""
        with self._lock:
            values = list(self._values)
        values.sort()
        return values

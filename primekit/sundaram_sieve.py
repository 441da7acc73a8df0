"""
Sieve of Sundaram over a shared marking map.

With m = (limit - 1) // 2, every k in [1, m] of the form i + j + 2ij
(1 <= i <= j) is marked; each unmarked k gives the odd prime 2k + 1.
For fixed i the marked values form an arithmetic progression starting
at 2i + 2i^2 with step 2i + 1, so one work item per i marks it in bulk.
"""

from math import isqrt
from typing import Optional

from .cancellation import CancellationToken
from .parallel import parallel_for
from .shared import MarkingMap
from .sieve import PrimeSieve


class SundaramSieve(PrimeSieve):
    """Parallel Sieve of Sundaram."""

    name = "sundaram"

    def _populate(self, token: Optional[CancellationToken]) -> None:
        m = (self.limit - 1) // 2
        marked = MarkingMap()

        def mark_row(i: int) -> None:
            marked.mark_range(2 * i + 2 * i * i, m + 1, 2 * i + 1)

        parallel_for(1, isqrt(m) + 1, mark_row, token, self.num_workers)

        # _populate only runs for limit >= 2.
        self._primes.add(2)

        def collect(k: int) -> None:
            if k not in marked:
                self._primes.add(2 * k + 1)

        parallel_for(1, m + 1, collect, token, self.num_workers)

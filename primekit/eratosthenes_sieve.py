"""
Sieve of Eratosthenes over a shared marking map.

Each work item i in [2, isqrt(limit)] marks i*i, i*i + i, ... as
composite. Composite i are not skipped: their marks are redundant but
harmless, and skipping them would make items depend on each other.
"""

from math import isqrt
from typing import Optional

from .cancellation import CancellationToken
from .parallel import parallel_for
from .shared import MarkingMap
from .sieve import PrimeSieve


class EratosthenesSieve(PrimeSieve):
    """Parallel Sieve of Eratosthenes."""

    name = "eratosthenes"

    def _populate(self, token: Optional[CancellationToken]) -> None:
        limit = self.limit
        composites = MarkingMap()

        def mark_multiples(i: int) -> None:
            composites.mark_range(i * i, limit + 1, i)

        parallel_for(2, isqrt(limit) + 1, mark_multiples, token, self.num_workers)

        def collect(n: int) -> None:
            if n not in composites:
                self._primes.add(n)

        parallel_for(2, limit + 1, collect, token, self.num_workers)

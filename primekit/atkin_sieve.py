"""
Sieve of Atkin over a shared toggle map.

Phase 1 flips candidates hit by the three quadratic forms:

    n = 4x^2 + y^2,  n mod 12 in {1, 5}
    n = 3x^2 + y^2,  n mod 12 == 7
    n = 3x^2 - y^2,  x > y and n mod 12 == 11

Flips are XOR-on-write (see MarkingMap.toggle): a candidate with an odd
number of representations ends True, an even number cancels out. The
(x, y) grid is flattened to one index range so every pair is its own
work item.

Phase 2 clears multiples of r^2 for every r >= 5 still True, removing
the non-square-free survivors. 2 and 3 are never produced by the forms
and are added directly.
"""

from math import isqrt
from typing import Optional

from .cancellation import CancellationToken
from .parallel import parallel_for
from .shared import MarkingMap
from .sieve import PrimeSieve


class AtkinSieve(PrimeSieve):
    """Parallel Sieve of Atkin."""

    name = "atkin"

    def _populate(self, token: Optional[CancellationToken]) -> None:
        limit = self.limit
        root = isqrt(limit)
        candidates = MarkingMap()

        def toggle_forms(i: int) -> None:
            x, y = divmod(i, root)
            x += 1
            y += 1
            qx, qy = x * x, y * y

            n = 4 * qx + qy
            if n <= limit and n % 12 in (1, 5):
                candidates.toggle(n)

            n = 3 * qx + qy
            if n <= limit and n % 12 == 7:
                candidates.toggle(n)

            if x > y:
                n = 3 * qx - qy
                if n <= limit and n % 12 == 11:
                    candidates.toggle(n)

        parallel_for(0, root * root, toggle_forms, token, self.num_workers)

        def clear_square_multiples(r: int) -> None:
            if candidates.get(r):
                q = r * r
                candidates.clear_range(q, limit + 1, q)

        parallel_for(5, root + 1, clear_square_multiples, token, self.num_workers)

        if limit >= 2:
            self._primes.add(2)
        if limit >= 3:
            self._primes.add(3)

        survivors = candidates.items()

        def collect(i: int) -> None:
            n, flag = survivors[i]
            if flag:
                self._primes.add(n)

        parallel_for(0, len(survivors), collect, token, self.num_workers)

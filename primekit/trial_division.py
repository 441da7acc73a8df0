"""
Trial division by 6k +/- 1 candidates.

After 2 and 3 are ruled out every prime factor has the form 6k + 5 or
6k + 7, so each step tests d and d + 2 for d = 5, 11, 17, ...
"""

from math import isqrt
from typing import Optional

from .cancellation import CancellationToken
from .primality import PrimalityResult, PrimalityTest

# Divisor pairs tried between cancellation polls.
POLL_INTERVAL = 4096


class TrialDivisionTest(PrimalityTest):
    """Exact test. Never returns PROBABLY_PRIME."""

    def _test_small(self, n: int, token: Optional[CancellationToken]) -> PrimalityResult:
        return self._divide(n, token)

    def _test_big(self, n: int, token: Optional[CancellationToken]) -> PrimalityResult:
        # Same algorithm; only practical when n has a small factor.
        return self._divide(n, token)

    @staticmethod
    def _divide(n: int, token: Optional[CancellationToken]) -> PrimalityResult:
        root = isqrt(n)
        for step, d in enumerate(range(5, root + 1, 6)):
            if token is not None and step % POLL_INTERVAL == 0:
                token.raise_if_cancelled()
            if n % d == 0 or n % (d + 2) == 0:
                return PrimalityResult.COMPOSITE
        return PrimalityResult.PRIME

"""
Primality test dispatch.

Responsibility: shared input handling for every strategy. Strategies only
see odd n >= 5 not divisible by 3, on one of two paths:

- small path: n fits in an unsigned 64-bit word
- big path: anything larger, arbitrary precision
"""

import enum
import operator
from abc import ABC, abstractmethod
from concurrent.futures import Executor, Future
from typing import Optional

from .cancellation import CancellationToken
from .modular import U64_MAX
from .parallel import submit


class PrimalityResult(enum.Enum):
    COMPOSITE = "composite"
    PRIME = "prime"
    PROBABLY_PRIME = "probably_prime"


class PrimalityTest(ABC):
    """Base class for single-integer primality tests."""

    def test_integer(self, n: int, token: Optional[CancellationToken] = None) -> PrimalityResult:
        """
        Decide whether n is prime.

        Parameters
        ----------
        n : int
            Any integer, including numpy integers. Values <= 1 are composite
            by convention.
        token : CancellationToken, optional
            Polled by the strategy's inner loop.

        Returns
        -------
        PrimalityResult
            PRIME only from exact reasoning, PROBABLY_PRIME only from
            probabilistic reasoning.

        Raises
        ------
        TypeError
            If n is not an integer.
        OperationCancelled
            If the token was cancelled before a verdict was reached.
        """
        n = operator.index(n)
        if n <= 1:
            return PrimalityResult.COMPOSITE
        if n <= 3:
            return PrimalityResult.PRIME
        if n % 2 == 0 or n % 3 == 0:
            return PrimalityResult.COMPOSITE
        if n <= U64_MAX:
            return self._test_small(n, token)
        return self._test_big(n, token)

    def test_integer_async(self, n: int, token: Optional[CancellationToken] = None,
                           executor: Optional[Executor] = None) -> Future:
        """Run test_integer on an executor; the future carries the result."""
        return submit(executor, self.test_integer, n, token)

    @abstractmethod
    def _test_small(self, n: int, token: Optional[CancellationToken]) -> PrimalityResult:
        """n is odd, 5 <= n <= 2**64 - 1, and not divisible by 3."""

    @abstractmethod
    def _test_big(self, n: int, token: Optional[CancellationToken]) -> PrimalityResult:
        """n > 2**64 - 1, odd, not divisible by 3."""

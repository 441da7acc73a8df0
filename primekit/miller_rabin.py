"""
Miller-Rabin probabilistic primality test.

Write n - 1 = d * 2^s with d odd. A round with random base a passes if
a^d = 1 or n - 1 (mod n), or if squaring reaches n - 1 within s - 1
steps. A failing round proves n composite. Each round lets a composite
through with probability at most 1/4.

The small path runs on modular.mod_pow / mod_mul, which never let a
64-bit product overflow; the big path uses the built-in pow.
"""

from typing import Callable, Optional, Tuple

import numpy as np

from .cancellation import CancellationToken
from .modular import mod_mul, mod_pow, mod_pow_big, random_big_integer
from .primality import PrimalityResult, PrimalityTest

# Error bound 4**-64 per composite.
DEFAULT_TRIALS = 64


def decompose(n: int) -> Tuple[int, int]:
    """
    Split n - 1 into (d, s) with n - 1 == d * 2**s and d odd.

    Parameters
    ----------
    n : int
        Odd integer >= 3.
    """
    d = n - 1
    s = (d & -d).bit_length() - 1
    return d >> s, s


class MillerRabinTest(PrimalityTest):
    """
    Probabilistic test.

    Parameters
    ----------
    trials : int
        Number of random witnesses; values below 1 are raised to 1.
    seed : int, optional
        Seed for the witness generator. Not cryptographically secure.
    """

    def __init__(self, trials: int = DEFAULT_TRIALS, seed: Optional[int] = None):
        self._trials = max(1, int(trials))
        self._rng = np.random.default_rng(seed)

    @property
    def trials(self) -> int:
        return self._trials

    def __repr__(self) -> str:
        return f"MillerRabinTest(trials={self._trials})"

    def _test_small(self, n: int, token: Optional[CancellationToken]) -> PrimalityResult:
        return self._run_rounds(n, mod_pow, mod_mul, token)

    def _test_big(self, n: int, token: Optional[CancellationToken]) -> PrimalityResult:
        return self._run_rounds(n, mod_pow_big, lambda a, b, m: a * b % m, token)

    def _run_rounds(self, n: int, power: Callable[[int, int, int], int],
                    multiply: Callable[[int, int, int], int],
                    token: Optional[CancellationToken]) -> PrimalityResult:
        d, s = decompose(n)
        for _ in range(self._trials):
            if token is not None:
                token.raise_if_cancelled()
            a = random_big_integer(self._rng, 2, n - 2)
            if not self._round_passes(a, d, s, n, power, multiply):
                return PrimalityResult.COMPOSITE
        return PrimalityResult.PROBABLY_PRIME

    @staticmethod
    def _round_passes(a: int, d: int, s: int, n: int,
                      power: Callable[[int, int, int], int],
                      multiply: Callable[[int, int, int], int]) -> bool:
        x = power(a, d, n)
        if x == 1 or x == n - 1:
            return True
        for _ in range(s - 1):
            x = multiply(x, x, n)
            if x == n - 1:
                return True
            if x == 1:
                return False
        return False

"""
primekit: parallel prime sieves and primality tests.
"""

from typing import Optional

from .atkin_sieve import AtkinSieve
from .cancellation import CancellationToken
from .eratosthenes_sieve import EratosthenesSieve
from .errors import (
    DivisionByZeroModulus,
    InvalidArgument,
    InvalidLifecycleState,
    OperationCancelled,
    PrimeKitError,
)
from .miller_rabin import DEFAULT_TRIALS, MillerRabinTest
from .primality import PrimalityResult, PrimalityTest
from .sieve import PrimeSieve, SieveState
from .sundaram_sieve import SundaramSieve
from .trial_division import TrialDivisionTest

SIEVES = {
    "atkin": AtkinSieve,
    "eratosthenes": EratosthenesSieve,
    "sundaram": SundaramSieve,
}


def trial_division() -> TrialDivisionTest:
    """New deterministic trial division test."""
    return TrialDivisionTest()


def miller_rabin(trials: int = DEFAULT_TRIALS, seed: Optional[int] = None) -> MillerRabinTest:
    """New Miller-Rabin test drawing `trials` random witnesses per call."""
    return MillerRabinTest(trials, seed=seed)


__all__ = [
    "AtkinSieve", "EratosthenesSieve", "SundaramSieve", "PrimeSieve", "SieveState", "SIEVES",
    "PrimalityTest", "PrimalityResult", "TrialDivisionTest", "MillerRabinTest",
    "trial_division", "miller_rabin", "DEFAULT_TRIALS", "CancellationToken",
    "PrimeKitError", "InvalidLifecycleState", "InvalidArgument",
    "DivisionByZeroModulus", "OperationCancelled",
]

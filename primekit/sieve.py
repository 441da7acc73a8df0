"""
Sieve lifecycle engine and the selection/peek query layer.

Responsibility: state machine, shared prime set, run guard and queries.
Concrete sieves only implement `_populate`.

State machine (forward only):

    INITIAL -> SIEVING_STARTED -> SIEVING_COMPLETED

A cancelled run stays at SIEVING_STARTED and keeps whatever primes it
already found. Queries are allowed from SIEVING_STARTED on, so a query
issued while a run is still in flight sees a partial snapshot.
"""

import enum
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Executor, Future
from typing import Callable, Optional

import numpy as np

from .cancellation import CancellationToken, is_cancelled
from .errors import InvalidArgument, InvalidLifecycleState
from .parallel import submit
from .shared import PrimeSet

Predicate = Callable[[int], bool]


class SieveState(enum.Enum):
    INITIAL = "initial"
    SIEVING_STARTED = "sieving_started"
    SIEVING_COMPLETED = "sieving_completed"


def _accept_all(n: int) -> bool:
    return True


class PrimeSieve(ABC):
    """
    Base class for sieves that enumerate all primes up to `limit`.

    Parameters
    ----------
    limit : int
        Inclusive upper bound, non-negative.
    num_workers : int, optional
        Threads used by the parallel population step. Defaults to CPU count.
    seed : int, optional
        Seed for the generator used by `peek_one`.
    verbose : bool
        Print progress lines.
    """

    name = "sieve"

    def __init__(self, limit: int, num_workers: Optional[int] = None,
                 seed: Optional[int] = None, verbose: bool = False):
        if limit < 0:
            raise InvalidArgument(f"limit must be non-negative, got {limit}")
        self._limit = int(limit)
        self._state = SieveState.INITIAL
        self._state_lock = threading.Lock()
        self._primes = PrimeSet()
        self._rng = np.random.default_rng(seed)
        self.num_workers = num_workers
        self.verbose = verbose

    def __repr__(self) -> str:
        return f"{type(self).__name__}(limit={self._limit}, state={self._state.name})"

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def state(self) -> SieveState:
        return self._state

    @property
    def count(self) -> int:
        """Primes found so far; 0 before any run."""
        if self._state is SieveState.INITIAL:
            return 0
        return len(self._primes)

    # ---------- Lifecycle ----------

    def _begin(self) -> None:
        # Atomic check-and-set: only the caller that wins runs the algorithm.
        with self._state_lock:
            if self._state is not SieveState.INITIAL:
                raise InvalidLifecycleState(
                    f"{type(self).__name__} has already been run (state={self._state.name})")
            self._state = SieveState.SIEVING_STARTED

    def _run(self, token: Optional[CancellationToken]) -> int:
        if self._limit >= 2:
            if self.verbose:
                print(f"    {self.name}: sieving up to {self._limit:,}...")
            # Raises OperationCancelled; state then stays SIEVING_STARTED.
            self._populate(token)
        self._state = SieveState.SIEVING_COMPLETED
        count = len(self._primes)
        if self.verbose:
            print(f"    {self.name}: found {count:,} primes")
        return count

    def sieve(self) -> int:
        """
        Run the sieve synchronously.

        Returns
        -------
        int
            Number of primes in [2, limit].

        Raises
        ------
        InvalidLifecycleState
            If this instance has already been run.
        """
        self._begin()
        return self._run(None)

    def sieve_async(self, token: Optional[CancellationToken] = None,
                    executor: Optional[Executor] = None) -> Future:
        """
        Run the sieve on a background thread.

        The run guard is checked here, in the caller's thread, so a second
        run fails immediately instead of through the future. The future
        resolves to the prime count, or raises OperationCancelled when
        `token` is cancelled before the run finishes.
        """
        self._begin()
        return submit(executor, self._run, token)

    @abstractmethod
    def _populate(self, token: Optional[CancellationToken]) -> None:
        """Fill self._primes with every prime in [2, limit]. Only called for limit >= 2."""

    # ---------- Queries ----------

    def select_all(self, predicate: Optional[Predicate] = None,
                   count_limit: Optional[int] = None,
                   token: Optional[CancellationToken] = None) -> np.ndarray:
        """
        Select known primes satisfying `predicate`, in ascending order.

        Parameters
        ----------
        predicate : callable, optional
            Filter applied to each prime. Defaults to accepting everything.
        count_limit : int, optional
            Maximum number of values returned (the smallest matches win).
            None means no limit.
        token : CancellationToken, optional
            Stops the scan early; the matches collected so far are returned.

        Returns
        -------
        np.ndarray
            Strictly ascending int64 array, possibly empty.

        Raises
        ------
        InvalidLifecycleState
            If no run has started.
        InvalidArgument
            If count_limit < 1.
        """
        if self._state is SieveState.INITIAL:
            raise InvalidLifecycleState("sieve has not been run yet")
        if count_limit is not None and count_limit < 1:
            raise InvalidArgument(f"count_limit must be >= 1, got {count_limit}")
        if predicate is None:
            predicate = _accept_all

        selected = []
        # snapshot() is sorted and duplicate-free.
        for p in self._primes.snapshot():
            if is_cancelled(token):
                break
            if count_limit is not None and len(selected) >= count_limit:
                break
            if predicate(p):
                selected.append(p)

        return np.array(selected, dtype=np.int64)

    def peek_one(self, predicate: Optional[Predicate] = None,
                 token: Optional[CancellationToken] = None) -> Optional[int]:
        """Return one uniformly random known prime satisfying `predicate`, or None."""
        candidates = self.select_all(predicate, None, token)
        if len(candidates) == 0:
            return None
        return int(candidates[self._rng.integers(len(candidates))])

    def select_all_async(self, predicate: Optional[Predicate] = None,
                         count_limit: Optional[int] = None,
                         token: Optional[CancellationToken] = None,
                         executor: Optional[Executor] = None) -> Future:
        return submit(executor, self.select_all, predicate, count_limit, token)

    def peek_one_async(self, predicate: Optional[Predicate] = None,
                       token: Optional[CancellationToken] = None,
                       executor: Optional[Executor] = None) -> Future:
        return submit(executor, self.peek_one, predicate, token)

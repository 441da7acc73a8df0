"""
Exception taxonomy.

Lifecycle and argument errors are raised before any work starts.
Cancellation has its own type so callers can tell it apart from both
success and failure.
"""


class PrimeKitError(Exception):
    """Base class for every error raised by primekit."""


class InvalidLifecycleState(PrimeKitError, RuntimeError):
    """Sieve run attempted twice, or a query attempted before any run."""


class InvalidArgument(PrimeKitError, ValueError):
    """Argument outside its accepted range (count limits, sampling bounds)."""


class DivisionByZeroModulus(PrimeKitError, ZeroDivisionError):
    """Modular exponentiation requested with modulus 0."""


class OperationCancelled(PrimeKitError):
    """A cooperative cancellation stopped the computation early."""

"""
Cooperative cancellation token.

Workers poll the token between work items; nothing is interrupted
preemptively.
"""

import threading
from typing import Optional

from .errors import OperationCancelled


class CancellationToken:
    """Thread-safe, one-shot cancellation flag."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelled("operation was cancelled")

    def cancel_after(self, seconds: float) -> threading.Timer:
        """Cancel once `seconds` have elapsed. Returns the started timer."""
        timer = threading.Timer(seconds, self.cancel)
        timer.daemon = True
        timer.start()
        return timer


def is_cancelled(token: Optional[CancellationToken]) -> bool:
    """True iff a token was given and it has been cancelled."""
    return token is not None and token.is_cancelled

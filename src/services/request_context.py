# src/services/request_context.py

"""Per-request deadline and cancellation signal."""

import threading
import time
from dataclasses import dataclass, field


@dataclass
class RequestContext:
    """Carries one request's deadline and cancellation flag down to the fetch.

    Each inbound request owns exactly one context; nothing here is
    shared between requests.
    """

    deadline: float
    cancel_event: threading.Event = field(default_factory=threading.Event)

    @classmethod
    def with_timeout(cls, seconds: float) -> "RequestContext":
        return cls(deadline=time.monotonic() + seconds)

    def remaining(self) -> float:
        """Seconds left before the deadline (never negative)."""
        return max(0.0, self.deadline - time.monotonic())

    def cancel(self) -> None:
        self.cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    @property
    def expired(self) -> bool:
        return self.cancelled or self.remaining() <= 0

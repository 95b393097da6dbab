"""
Request-scoped context passed by value through every repository method.
"""

import threading
import uuid
from dataclasses import dataclass, field
from typing import Any

from paystore.errors import CancelledError


@dataclass(frozen=True)
class Context:
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    fields: dict[str, Any] = field(default_factory=dict)
    cancel_event: threading.Event = field(default_factory=threading.Event, repr=False)

    def bind(self, **fields) -> "Context":
        """Derive a context with extra log fields and the same cancellation."""
        return Context(
            request_id=self.request_id,
            fields={**self.fields, **fields},
            cancel_event=self.cancel_event,
        )

    def cancel(self) -> None:
        self.cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def raise_if_cancelled(self) -> None:
        if self.cancel_event.is_set():
            raise CancelledError(f"request {self.request_id} cancelled")


def background() -> Context:
    """Context for work that is not tied to an incoming request."""
    return Context(fields={"origin": "background"})

from __future__ import annotations

import itertools
import logging
import threading
from typing import Callable, List, Optional, Tuple, TypeAlias

from .diagnostics import DiagnosticsSink, get_diagnostics_sink
from .errors import SubscriberFailure
from .events import EventPayload

EventCallback: TypeAlias = Callable[[EventPayload], None]


class SubscriptionRegistry:
    """Ordered callbacks for a single topic, delivered with fault isolation."""

    def __init__(self, topic: str, diagnostics: Optional[DiagnosticsSink] = None) -> None:
        self.topic = topic
        self._subscriptions: List[Tuple[int, EventCallback]] = []
        self._tokens = itertools.count(1)
        self._lock = threading.Lock()
        self._diagnostics = diagnostics or get_diagnostics_sink()
        self._logger = logging.getLogger(__name__)

    def register(self, callback: EventCallback) -> int:
        """Append a callback and return its unique token."""
        with self._lock:
            token = next(self._tokens)
            self._subscriptions.append((token, callback))
        return token

    def unregister(self, token: int) -> None:
        """Remove the callback registered under ``token``; unknown tokens are ignored."""
        with self._lock:
            for index, (existing, _) in enumerate(self._subscriptions):
                if existing == token:
                    del self._subscriptions[index]
                    return

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def notify_all(self, event: EventPayload) -> None:
        """Invoke every callback registered at call time, in registration order.

        Works on a snapshot, so callbacks may register or unregister during
        delivery without affecting this pass.
        """
        with self._lock:
            snapshot = list(self._subscriptions)

        if not snapshot:
            self._logger.debug(f"No subscribers for topic '{self.topic}'")
            return

        self._logger.debug(f"Notifying {len(snapshot)} subscriber(s) of '{self.topic}'")
        for _, callback in snapshot:
            self._safe_dispatch(callback, event)

    def _safe_dispatch(self, callback: EventCallback, event: EventPayload) -> None:
        """Dispatch wrapper to keep one callback failure from stopping delivery."""
        callback_name = getattr(callback, "__name__", str(callback))
        try:
            callback(event)
        except Exception as exc:
            self._logger.exception(
                f"Subscriber error in '{callback_name}' for topic '{self.topic}'",
                exc_info=exc,
            )
            failure = SubscriberFailure(
                f"Subscriber '{callback_name}' failed on '{self.topic}': {exc}",
                topic=self.topic,
                callback_name=callback_name,
            )
            failure.__cause__ = exc
            self._diagnostics.record(failure)

    def clear(self) -> None:
        """Remove all subscriptions."""
        with self._lock:
            self._subscriptions.clear()

"""Diagnostics sink for recoverable failures that must stay off the critical path."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .errors import RootStoreError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiagnosticRecord:
    """One recorded failure."""

    kind: str
    message: str
    error: BaseException
    timestamp: float = field(default_factory=time.time)


DiagnosticsListener = Callable[[DiagnosticRecord], None]


class DiagnosticsSink:
    """Collects recovered failures and forwards them to listeners.

    Listeners are typically crash reporters. A failing listener is logged and
    skipped; recording never raises.
    """

    def __init__(self) -> None:
        self._records: List[DiagnosticRecord] = []
        self._listeners: List[DiagnosticsListener] = []
        self._lock = threading.Lock()

    def record(self, error: BaseException) -> DiagnosticRecord:
        """Record a failure, classified by its exception type."""
        entry = DiagnosticRecord(kind=type(error).__name__, message=str(error), error=error)
        with self._lock:
            self._records.append(entry)
            listeners = list(self._listeners)

        cause = error.__cause__
        if cause is not None:
            logger.warning(f"{entry.kind}: {entry.message} (caused by {cause!r})")
        else:
            logger.warning(f"{entry.kind}: {entry.message}")

        for listener in listeners:
            try:
                listener(entry)
            except Exception as e:
                logger.warning(f"Error in diagnostics listener: {e}")
        return entry

    def add_listener(self, listener: DiagnosticsListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    @property
    def records(self) -> List[DiagnosticRecord]:
        with self._lock:
            return list(self._records)

    def records_of(self, kind: type[RootStoreError] | str) -> List[DiagnosticRecord]:
        """Return records of one kind, given as an error class or its name."""
        name = kind if isinstance(kind, str) else kind.__name__
        return [r for r in self.records if r.kind == name]

    def count(self, kind: type[RootStoreError] | str) -> int:
        return len(self.records_of(kind))

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


# Process-wide default, used when a component is not given its own sink
_default_sink: Optional[DiagnosticsSink] = None


def get_diagnostics_sink() -> DiagnosticsSink:
    """Get the process-wide diagnostics sink, creating it on first use."""
    global _default_sink
    if _default_sink is None:
        _default_sink = DiagnosticsSink()
    return _default_sink


def set_diagnostics_sink(sink: Optional[DiagnosticsSink]) -> None:
    """Replace the process-wide diagnostics sink (``None`` resets it)."""
    global _default_sink
    _default_sink = sink

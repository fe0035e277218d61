"""In-memory session storage."""

from __future__ import annotations

import threading
from typing import Optional


class MemorySessionStorage:
    """Keeps the session blob in process memory. Nothing survives a restart."""

    def __init__(self, blob: Optional[bytes] = None) -> None:
        self._blob = blob
        self._lock = threading.Lock()

    def read(self) -> Optional[bytes]:
        with self._lock:
            return self._blob

    def write(self, blob: bytes) -> None:
        with self._lock:
            self._blob = bytes(blob)

    def clear(self) -> None:
        with self._lock:
            self._blob = None

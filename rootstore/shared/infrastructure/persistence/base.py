"""Storage collaborator contract."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class SessionStorage(Protocol):
    """Opaque persisted-session storage.

    Every method may raise ``OSError``. Methods are blocking; async callers
    run them in an executor.
    """

    def read(self) -> Optional[bytes]:
        """Return the stored blob, or ``None`` if nothing is stored."""
        ...

    def write(self, blob: bytes) -> None:
        ...

    def clear(self) -> None:
        ...

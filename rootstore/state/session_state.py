"""Session sub-store: read-only account view over the root session."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .root_store import RootStore


class SessionState:
    """Read-only view of the current account for UI consumers."""

    def __init__(self, root: "RootStore") -> None:
        self._root = root

    @property
    def has_session(self) -> bool:
        return self._root.current_session().is_authenticated

    @property
    def identity(self) -> Optional[str]:
        session = self._root.current_session()
        return session.identity if session.is_authenticated else None  # type: ignore[union-attr]

    @property
    def handle(self) -> Optional[str]:
        session = self._root.current_session()
        return session.handle if session.is_authenticated else None  # type: ignore[union-attr]

"""Session Monitor: the single funnel for session-invalid signals."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rootstore.shared.core.diagnostics import DiagnosticsSink
from rootstore.shared.core.errors import PersistenceClearFailure
from rootstore.shared.core.events import DROP_REASON_INVALID_SESSION
from rootstore.shared.infrastructure.persistence.base import SessionStorage

if TYPE_CHECKING:
    from rootstore.state.root_store import RootStore

logger = logging.getLogger(__name__)


class SessionMonitor:
    """Turns any number of concurrent invalid-session reports into one drop.

    One monitor is bound to one RootStore. Nothing here suspends, so each
    call runs to completion on the caller's thread or event loop.
    """

    def __init__(
        self,
        store: "RootStore",
        storage: SessionStorage,
        diagnostics: DiagnosticsSink,
    ):
        self.store = store
        self.storage = storage
        self.diagnostics = diagnostics

    def report_invalid_session(self) -> bool:
        """Report that a request was rejected for lack of a valid session.

        The first report against an authenticated store drops the session,
        clears the persisted blob and notifies drop handlers. Every other
        report (including any after a logout) does nothing.

        Returns:
            True if this call performed the drop
        """
        ended = self.store._end_session()
        if ended is None:
            logger.debug(f"Redundant invalid-session report for epoch {self.store.epoch}")
            return False

        logger.info(f"Session invalidated for {ended.identity} (epoch {self.store.epoch})")
        self._clear_persisted_session()
        self.store.trigger_session_drop(DROP_REASON_INVALID_SESSION, ended.identity)
        return True

    def logout(self) -> bool:
        """End the session at the user's request.

        Shares the drop guard with ``report_invalid_session`` but does not
        notify drop handlers.

        Returns:
            True if this call performed the logout
        """
        ended = self.store._end_session()
        if ended is None:
            logger.debug(f"Logout on epoch {self.store.epoch} with no active session")
            return False

        logger.info(f"Logged out {ended.identity} (epoch {self.store.epoch})")
        self._clear_persisted_session()
        self.store._spend_drop()
        return True

    def _clear_persisted_session(self) -> None:
        """Best-effort clear; the in-memory transition stands even if this fails."""
        try:
            self.storage.clear()
        except Exception as e:
            failure = PersistenceClearFailure(f"Failed to clear persisted session: {e}")
            failure.__cause__ = e
            self.diagnostics.record(failure)

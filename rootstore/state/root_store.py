"""Root State Store.

The aggregate that owns the current session, the nested sub-stores and the
broadcast surface (session drop, screen soft reset) for one epoch.
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Any, Callable, Dict, List, Optional

from rootstore.shared.core.diagnostics import DiagnosticsSink, get_diagnostics_sink
from rootstore.shared.core.events import (
    DROP_REASON_INVALID_SESSION,
    TOPIC_SCREEN_SOFT_RESET,
    TOPIC_SESSION_DROPPED,
    create_screen_soft_reset_event,
    create_session_dropped_event,
)
from rootstore.shared.core.subscription_registry import EventCallback, SubscriptionRegistry
from rootstore.shared.domain.context.session.models import (
    UNAUTHENTICATED,
    Authenticated,
    Session,
)
from rootstore.shared.domain.context.session.session_monitor import SessionMonitor
from rootstore.shared.infrastructure.persistence.base import SessionStorage

from .session_state import SessionState
from .shell_state import ColorMode, ShellState

logger = logging.getLogger(__name__)

Unsubscribe = Callable[[], None]


class DropGuard:
    """Per-epoch latch preventing duplicate drop events.

    ``tripped`` flips once when some caller claims the end of the epoch;
    ``delivered`` flips once when the drop broadcast is spent. Neither ever
    flips back.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tripped = False
        self._delivered = False

    @property
    def is_set(self) -> bool:
        return self._tripped

    @property
    def delivered(self) -> bool:
        return self._delivered

    def test_and_set(self, precondition: Optional[Callable[[], bool]] = None) -> bool:
        """Atomically flip the guard from unset to set.

        Args:
            precondition: Optional check evaluated under the guard lock; the
                guard is only set when it returns True

        Returns:
            True if this call set the guard, False if it was already set or
            the precondition failed
        """
        with self._lock:
            if self._tripped:
                return False
            if precondition is not None and not precondition():
                return False
            self._tripped = True
            return True

    def claim_delivery(self) -> bool:
        """Claim the single drop delivery of this epoch. Also sets the guard."""
        with self._lock:
            if self._delivered:
                return False
            self._delivered = True
            self._tripped = True
            return True


class RootStore:
    """Aggregate root for one login epoch.

    A RootStore is fully built by its constructor: the session is set, the
    sub-stores exist and the drop guard is unset. It is never reused across
    epochs; logging in or out produces a new instance (see StoreBootstrapper).

    Usage:
        store = await StoreBootstrapper(storage).setup()
        unsubscribe = store.register_session_drop_handler(show_notice)
        store.monitor.report_invalid_session()
    """

    SHELL = "shell"
    SESSION = "session"

    def __init__(
        self,
        session: Session,
        storage: SessionStorage,
        *,
        diagnostics: Optional[DiagnosticsSink] = None,
        color_mode: ColorMode = "system",
    ) -> None:
        """Initialize the store.

        Args:
            session: Session of this epoch
            storage: Storage collaborator holding the persisted session
            diagnostics: Sink for recovered failures (process default if omitted)
            color_mode: Initial color mode of the shell sub-store
        """
        self.epoch = uuid.uuid4().hex
        self._session: Session = session
        self._guard = DropGuard()
        self._retired = False
        self._diagnostics = diagnostics or get_diagnostics_sink()

        self._drop_handlers = SubscriptionRegistry(TOPIC_SESSION_DROPPED, self._diagnostics)
        self._soft_reset_listeners = SubscriptionRegistry(TOPIC_SCREEN_SOFT_RESET, self._diagnostics)

        self._sub_stores: Dict[str, Any] = {
            self.SHELL: ShellState(color_mode),
            self.SESSION: SessionState(self),
        }

        self.monitor = SessionMonitor(self, storage, self._diagnostics)

    def __repr__(self) -> str:
        return f"RootStore(epoch={self.epoch!r}, session={self._session!r})"

    # --- Reads ---

    def current_session(self) -> Session:
        """Return the current session value."""
        return self._session

    @property
    def drop_guard(self) -> DropGuard:
        return self._guard

    @property
    def is_retired(self) -> bool:
        return self._retired

    @property
    def diagnostics(self) -> DiagnosticsSink:
        return self._diagnostics

    @property
    def shell(self) -> ShellState:
        return self._sub_stores[self.SHELL]

    @property
    def session(self) -> SessionState:
        return self._sub_stores[self.SESSION]

    @property
    def sub_store_keys(self) -> List[str]:
        return list(self._sub_stores)

    def sub_store(self, key: str) -> Any:
        """Return the nested sub-store registered under ``key``.

        Raises:
            KeyError: If no sub-store uses that key
        """
        try:
            return self._sub_stores[key]
        except KeyError:
            raise KeyError(f"Unknown sub-store: {key!r}") from None

    # --- Subscriptions ---

    def register_session_drop_handler(self, callback: EventCallback) -> Unsubscribe:
        """Register a callback for this epoch's session drop.

        Returns:
            A function that removes exactly this registration
        """
        return self._subscribe(self._drop_handlers, callback)

    def register_screen_soft_reset_listener(self, callback: EventCallback) -> Unsubscribe:
        """Register a callback for screen soft resets.

        Returns:
            A function that removes exactly this registration
        """
        return self._subscribe(self._soft_reset_listeners, callback)

    @staticmethod
    def _subscribe(registry: SubscriptionRegistry, callback: EventCallback) -> Unsubscribe:
        token = registry.register(callback)

        def unsubscribe() -> None:
            registry.unregister(token)

        return unsubscribe

    # --- Broadcasts ---

    def emit_screen_soft_reset(self) -> None:
        """Tell navigation listeners to return the current screen to its top state."""
        self._soft_reset_listeners.notify_all(create_screen_soft_reset_event(self.epoch))

    def trigger_session_drop(
        self,
        reason: str = DROP_REASON_INVALID_SESSION,
        identity: Optional[str] = None,
    ) -> bool:
        """Deliver this epoch's drop event to registered handlers.

        Used by SessionMonitor after it has ended the session. A call made
        while the guard is still unset runs the monitor's full transition
        first, so handlers never see a drop while the session is still
        authenticated. Only the first call per epoch delivers; later calls
        are no-ops.

        Returns:
            True if the event was delivered by this call
        """
        if not self._guard.is_set:
            return self.monitor.report_invalid_session()

        if not self._guard.claim_delivery():
            logger.debug(f"Session drop already delivered for epoch {self.epoch}")
            return False

        logger.info(f"Delivering session drop for epoch {self.epoch} ({reason})")
        self._drop_handlers.notify_all(
            create_session_dropped_event(self.epoch, identity, reason)
        )
        return True

    # --- Epoch transitions (SessionMonitor / StoreBootstrapper only) ---

    def _end_session(self) -> Optional[Authenticated]:
        """Claim the drop guard and drop the session to Unauthenticated.

        The guard is only claimed while the session is authenticated, so a
        store that never had a session never fires a drop.

        Returns:
            The session that was ended, or None if this call lost the race
        """
        if not self._guard.test_and_set(lambda: self._session.is_authenticated):
            return None
        ended = self._session
        self._session = UNAUTHENTICATED
        return ended  # type: ignore[return-value]

    def _spend_drop(self) -> None:
        """Mark this epoch's drop as used without notifying anyone."""
        self._guard.claim_delivery()

    def _retire(self) -> None:
        """Disable this store after a newer epoch replaced it."""
        self._retired = True
        self._guard.test_and_set()
        self._guard.claim_delivery()
        logger.debug(f"Retired store epoch {self.epoch}")

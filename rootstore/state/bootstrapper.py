"""Store Bootstrapper - one-time asynchronous hydration of the RootStore."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import ClassVar, Optional

from rootstore.shared.core.diagnostics import DiagnosticsSink, get_diagnostics_sink
from rootstore.shared.core.errors import (
    BootstrapStateError,
    BootstrapWarning,
    DuplicateSetupError,
    PersistenceWriteFailure,
    SessionDecodeError,
)
from rootstore.shared.domain.context.session.models import (
    UNAUTHENTICATED,
    Authenticated,
    Session,
    decode_session_blob,
    encode_session_blob,
)
from rootstore.shared.infrastructure.persistence.base import SessionStorage

from .root_store import RootStore
from .shell_state import ColorMode

logger = logging.getLogger(__name__)


class StoreBootstrapper:
    """Builds the RootStore at process start and replaces it per epoch.

    Only one bootstrap may be outstanding per process. ``setup()`` claims a
    process-wide slot that stays held until ``teardown()``.

    Usage:
        bootstrapper = StoreBootstrapper(storage)
        store = await bootstrapper.setup()
        ...
        store = await bootstrapper.start_epoch(session)  # login
        store = await bootstrapper.end_epoch()           # logout
    """

    _slot_held: ClassVar[bool] = False
    _slot_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(
        self,
        storage: SessionStorage,
        *,
        diagnostics: Optional[DiagnosticsSink] = None,
        color_mode: ColorMode = "system",
    ) -> None:
        self.storage = storage
        self.diagnostics = diagnostics or get_diagnostics_sink()
        self.color_mode = color_mode
        self._owns_slot = False
        self._store: Optional[RootStore] = None

    @property
    def store(self) -> Optional[RootStore]:
        """The store of the current epoch, or None before setup."""
        return self._store

    async def setup(self) -> RootStore:
        """Read the persisted session and build the first RootStore.

        Returns:
            A fully-constructed store

        Raises:
            DuplicateSetupError: If a bootstrap is already outstanding in this
                process
        """
        self._claim_slot()
        try:
            session = await self._read_persisted_session()
            self._store = self._build_store(session)
        except BaseException:
            self._release_slot()
            raise

        logger.info(
            f"Store bootstrapped (epoch {self._store.epoch}, "
            f"authenticated={session.is_authenticated})"
        )
        return self._store

    async def start_epoch(self, session: Authenticated) -> RootStore:
        """Begin a new login epoch.

        Retires the current store before persisting, so a late report
        against the old epoch cannot clear the new blob, then returns a new
        store. A failed write is recorded, not raised.

        Raises:
            BootstrapStateError: If ``setup()`` has not completed
        """
        previous = self._require_store()
        previous._retire()

        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self.storage.write, encode_session_blob(session))
        except OSError as e:
            failure = PersistenceWriteFailure(f"Failed to persist session for {session.identity}: {e}")
            failure.__cause__ = e
            self.diagnostics.record(failure)

        return self._replace_store(previous, session)

    async def end_epoch(self) -> RootStore:
        """Log out of the current epoch and return a new unauthenticated store.

        Raises:
            BootstrapStateError: If ``setup()`` has not completed
        """
        previous = self._require_store()
        previous.monitor.logout()
        return self._replace_store(previous, UNAUTHENTICATED)

    def teardown(self) -> None:
        """Retire the current store and release the process bootstrap slot."""
        if self._store is not None:
            self._store._retire()
            self._store = None
        self._release_slot()
        logger.debug("Bootstrapper torn down")

    @classmethod
    def reset(cls) -> None:
        """Release the process bootstrap slot.

        Primarily used for testing. In production, call ``teardown()`` on the
        bootstrapper that holds the slot.
        """
        with cls._slot_lock:
            cls._slot_held = False

    # --- Internals ---

    def _claim_slot(self) -> None:
        cls = type(self)
        with cls._slot_lock:
            if cls._slot_held:
                logger.error("setup() called while a bootstrap is already outstanding")
                raise DuplicateSetupError(
                    "Store bootstrap already in progress or completed; call teardown() first"
                )
            cls._slot_held = True
        self._owns_slot = True

    def _release_slot(self) -> None:
        if not self._owns_slot:
            return
        cls = type(self)
        with cls._slot_lock:
            cls._slot_held = False
        self._owns_slot = False

    def _require_store(self) -> RootStore:
        if self._store is None:
            raise BootstrapStateError("setup() has not completed")
        return self._store

    def _build_store(self, session: Session) -> RootStore:
        return RootStore(
            session,
            self.storage,
            diagnostics=self.diagnostics,
            color_mode=self.color_mode,
        )

    def _replace_store(self, previous: RootStore, session: Session) -> RootStore:
        store = self._build_store(session)
        previous._retire()
        self._store = store
        logger.info(f"Epoch {previous.epoch} replaced by {store.epoch}")
        return store

    async def _read_persisted_session(self) -> Session:
        """Read and decode the persisted session.

        Missing data yields Unauthenticated. Unreadable or malformed data
        also yields Unauthenticated and records a BootstrapWarning.
        """
        loop = asyncio.get_running_loop()
        try:
            blob = await loop.run_in_executor(None, self.storage.read)
        except OSError as e:
            self._warn(f"Persisted session unreadable: {e}", e)
            return UNAUTHENTICATED

        if blob is None:
            logger.info("No persisted session found")
            return UNAUTHENTICATED

        try:
            return decode_session_blob(blob)
        except SessionDecodeError as e:
            self._warn(f"Persisted session corrupt: {e}", e)
            return UNAUTHENTICATED

    def _warn(self, message: str, cause: Exception) -> None:
        warning = BootstrapWarning(message)
        warning.__cause__ = cause
        self.diagnostics.record(warning)

"""Error taxonomy for the root store and session lifecycle."""

from __future__ import annotations


class RootStoreError(Exception):
    """Base class for all root store errors."""


class BootstrapWarning(RootStoreError):
    """Persisted session was corrupt or unreadable during startup.

    Never raised to the caller of ``setup()``; recorded in diagnostics and
    the store falls back to an unauthenticated session.
    """


class DuplicateSetupError(RootStoreError, RuntimeError):
    """``setup()`` was called while another bootstrap is outstanding."""


class BootstrapStateError(RootStoreError, RuntimeError):
    """An epoch operation was attempted before ``setup()`` completed."""


class PersistenceClearFailure(RootStoreError):
    """Clearing the persisted session failed during drop or logout."""


class PersistenceWriteFailure(RootStoreError):
    """Persisting a freshly authenticated session failed."""


class SubscriberFailure(RootStoreError):
    """A registered callback raised while being notified."""

    def __init__(self, message: str, topic: str, callback_name: str) -> None:
        super().__init__(message)
        self.topic = topic
        self.callback_name = callback_name


class SessionDecodeError(RootStoreError, ValueError):
    """A persisted session blob could not be decoded."""


class StorageError(RootStoreError, OSError):
    """I/O failure raised by a storage backend."""

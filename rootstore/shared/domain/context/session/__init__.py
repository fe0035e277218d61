"""Session values, blob codec and the session monitor."""

from .models import (
    UNAUTHENTICATED,
    Authenticated,
    PersistedSession,
    Session,
    Unauthenticated,
    decode_session_blob,
    encode_session_blob,
)
from .session_monitor import SessionMonitor

__all__ = [
    "UNAUTHENTICATED",
    "Authenticated",
    "PersistedSession",
    "Session",
    "Unauthenticated",
    "decode_session_blob",
    "encode_session_blob",
    "SessionMonitor",
]

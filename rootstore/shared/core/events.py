"""Canonical event definitions for the root store."""

from __future__ import annotations

import time
from typing import Any, Dict, TypeAlias

EventPayload: TypeAlias = Dict[str, Any]

# Event Topics
TOPIC_SESSION_DROPPED = "session.dropped"
TOPIC_SCREEN_SOFT_RESET = "screen.soft_reset"

# Drop reasons
DROP_REASON_INVALID_SESSION = "invalid_session"


def create_session_dropped_event(
    epoch: str,
    identity: str | None,
    reason: str = DROP_REASON_INVALID_SESSION,
) -> EventPayload:
    """Create a session dropped event.

    Args:
        epoch: Epoch id of the store whose session was dropped
        identity: Account identity that lost its session, if known
        reason: Why the session was dropped
    """
    return {
        "epoch": epoch,
        "identity": identity,
        "reason": reason,
        "ts": time.time(),
    }


def create_screen_soft_reset_event(epoch: str) -> EventPayload:
    """Create a screen soft reset event."""
    return {
        "epoch": epoch,
        "ts": time.time(),
    }

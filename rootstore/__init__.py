"""RootStore package: root state store and session lifecycle controller."""

from .shared.core.subscription_registry import SubscriptionRegistry
from .shared.domain.context.session.models import (
    UNAUTHENTICATED,
    Authenticated,
    Session,
    Unauthenticated,
)
from .shared.domain.context.session.session_monitor import SessionMonitor
from .state import DropGuard, RootStore, StoreBootstrapper

__all__ = [
    "Authenticated",
    "DropGuard",
    "RootStore",
    "Session",
    "SessionMonitor",
    "StoreBootstrapper",
    "SubscriptionRegistry",
    "UNAUTHENTICATED",
    "Unauthenticated",
]

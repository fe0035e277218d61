"""
Shared Core Module
==================

Subscription registry, events, error taxonomy, diagnostics and configuration.
"""

# Event System
from .subscription_registry import SubscriptionRegistry, EventCallback
from .events import EventPayload
from . import events

# Errors & Diagnostics
from .errors import (
    RootStoreError,
    BootstrapWarning,
    DuplicateSetupError,
    BootstrapStateError,
    PersistenceClearFailure,
    PersistenceWriteFailure,
    SubscriberFailure,
    SessionDecodeError,
    StorageError,
)
from .diagnostics import DiagnosticRecord, DiagnosticsSink, get_diagnostics_sink, set_diagnostics_sink

# Configuration
from .configuration import (
    ConfigManager,
    SystemConfig,
    get_config_manager,
    get_config,
    ValidationLevel,
)
from .logging_config import configure_logging

__all__ = [
    # Event System
    "SubscriptionRegistry",
    "EventCallback",
    "EventPayload",
    "events",
    # Errors
    "RootStoreError",
    "BootstrapWarning",
    "DuplicateSetupError",
    "BootstrapStateError",
    "PersistenceClearFailure",
    "PersistenceWriteFailure",
    "SubscriberFailure",
    "SessionDecodeError",
    "StorageError",
    # Diagnostics
    "DiagnosticRecord",
    "DiagnosticsSink",
    "get_diagnostics_sink",
    "set_diagnostics_sink",
    # Configuration
    "ConfigManager",
    "SystemConfig",
    "get_config_manager",
    "get_config",
    "ValidationLevel",
    "configure_logging",
]

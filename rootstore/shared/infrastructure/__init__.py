"""
Shared Infrastructure Module
=============================

Technical adapters for external systems (session storage, HTTP).
"""

# Persistence
from rootstore.shared.infrastructure.persistence import (
    SessionStorage,
    FileSessionStorage,
    MemorySessionStorage,
)

# Network
from rootstore.shared.infrastructure.network import SessionWatch, install_session_watch

__all__ = [
    # Persistence
    "SessionStorage",
    "FileSessionStorage",
    "MemorySessionStorage",
    # Network
    "SessionWatch",
    "install_session_watch",
]

"""Persistence adapters (memory, FS)."""

from rootstore.shared.infrastructure.persistence.base import SessionStorage
from rootstore.shared.infrastructure.persistence.file_storage import FileSessionStorage
from rootstore.shared.infrastructure.persistence.memory_storage import MemorySessionStorage

__all__ = ["SessionStorage", "FileSessionStorage", "MemorySessionStorage"]

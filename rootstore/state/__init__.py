"""Root state layer.

Architecture:
- RootStore: aggregate for one login epoch (session, sub-stores, broadcasts)
- StoreBootstrapper: one-time hydration and epoch replacement
- ShellState / SessionState: nested sub-stores
"""

from .root_store import DropGuard, RootStore
from .bootstrapper import StoreBootstrapper
from .session_state import SessionState
from .shell_state import ShellState

__all__ = ["DropGuard", "RootStore", "StoreBootstrapper", "SessionState", "ShellState"]

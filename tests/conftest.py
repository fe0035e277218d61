"""Pytest configuration for RootStore."""

import sys
from pathlib import Path
from typing import List, Optional

import pytest

# Make the package importable without installation
root_path = Path(__file__).parent.parent
if str(root_path) not in sys.path:
    sys.path.insert(0, str(root_path))

from rootstore.shared.core.diagnostics import DiagnosticsSink, set_diagnostics_sink  # noqa: E402
from rootstore.shared.core.errors import StorageError  # noqa: E402
from rootstore.shared.domain.context.session.models import Authenticated  # noqa: E402
from rootstore.shared.infrastructure.persistence import MemorySessionStorage  # noqa: E402
from rootstore.state import RootStore, StoreBootstrapper  # noqa: E402


class FailingStorage(MemorySessionStorage):
    """Memory storage whose operations can be made to fail."""

    def __init__(
        self,
        blob: Optional[bytes] = None,
        *,
        fail_read: bool = False,
        fail_write: bool = False,
        fail_clear: bool = False,
    ) -> None:
        super().__init__(blob)
        self.fail_read = fail_read
        self.fail_write = fail_write
        self.fail_clear = fail_clear
        self.clear_calls = 0

    def read(self) -> Optional[bytes]:
        if self.fail_read:
            raise StorageError("disk unavailable")
        return super().read()

    def write(self, blob: bytes) -> None:
        if self.fail_write:
            raise StorageError("disk full")
        super().write(blob)

    def clear(self) -> None:
        self.clear_calls += 1
        if self.fail_clear:
            raise StorageError("read-only filesystem")
        super().clear()


@pytest.fixture(autouse=True)
def _reset_process_state():
    StoreBootstrapper.reset()
    set_diagnostics_sink(None)
    yield
    StoreBootstrapper.reset()
    set_diagnostics_sink(None)


@pytest.fixture
def diagnostics() -> DiagnosticsSink:
    return DiagnosticsSink()


@pytest.fixture
def storage() -> FailingStorage:
    return FailingStorage()


@pytest.fixture
def alice() -> Authenticated:
    return Authenticated(identity="did:plc:alice", credential="tok-alice", handle="alice.test")


@pytest.fixture
def authed_store(alice: Authenticated, storage: FailingStorage, diagnostics: DiagnosticsSink) -> RootStore:
    storage.write(b'{"identity": "did:plc:alice", "credential": "tok-alice"}')
    return RootStore(alice, storage, diagnostics=diagnostics)


@pytest.fixture
def recorder():
    """Callback that records every event it receives."""

    class Recorder:
        def __init__(self) -> None:
            self.events: List[dict] = []

        def __call__(self, event: dict) -> None:
            self.events.append(event)

    return Recorder()

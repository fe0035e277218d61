"""Tests for SessionMonitor's exactly-once drop under concurrency."""

from __future__ import annotations

import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from rootstore.shared.core.diagnostics import DiagnosticsSink
from rootstore.shared.core.errors import PersistenceClearFailure
from rootstore.shared.domain.context.session.models import UNAUTHENTICATED
from rootstore.state import RootStore


def test_first_report_drops_session(authed_store: RootStore, storage, recorder) -> None:
    authed_store.register_session_drop_handler(recorder)

    assert authed_store.monitor.report_invalid_session() is True

    assert authed_store.current_session() == UNAUTHENTICATED
    assert storage.read() is None
    assert storage.clear_calls == 1
    assert len(recorder.events) == 1
    assert recorder.events[0]["identity"] == "did:plc:alice"


def test_redundant_reports_do_nothing(authed_store: RootStore, storage, recorder) -> None:
    authed_store.register_session_drop_handler(recorder)
    authed_store.monitor.report_invalid_session()

    for _ in range(5):
        assert authed_store.monitor.report_invalid_session() is False

    assert storage.clear_calls == 1
    assert len(recorder.events) == 1


@pytest.mark.parametrize("reporters", [1, 2, 16, 64])
def test_concurrent_threads_produce_one_drop(authed_store: RootStore, storage, reporters: int) -> None:
    delivered = []
    authed_store.register_session_drop_handler(lambda e: delivered.append(threading.get_ident()))
    barrier = threading.Barrier(reporters)

    def report() -> bool:
        barrier.wait()
        return authed_store.monitor.report_invalid_session()

    with ThreadPoolExecutor(max_workers=reporters) as pool:
        results = list(pool.map(lambda _: report(), range(reporters)))

    assert results.count(True) == 1
    assert len(delivered) == 1
    assert storage.clear_calls == 1
    assert authed_store.current_session() == UNAUTHENTICATED


@pytest.mark.asyncio
async def test_concurrent_tasks_produce_one_drop(authed_store: RootStore, recorder) -> None:
    authed_store.register_session_drop_handler(recorder)

    async def failing_request() -> bool:
        await asyncio.sleep(0)
        return authed_store.monitor.report_invalid_session()

    results = await asyncio.gather(*(failing_request() for _ in range(50)))

    assert results.count(True) == 1
    assert len(recorder.events) == 1
    assert authed_store.current_session() == UNAUTHENTICATED


def test_clear_failure_keeps_in_memory_transition(
    authed_store: RootStore, storage, diagnostics: DiagnosticsSink, recorder
) -> None:
    storage.fail_clear = True
    authed_store.register_session_drop_handler(recorder)

    assert authed_store.monitor.report_invalid_session() is True

    assert authed_store.current_session() == UNAUTHENTICATED
    assert storage.read() is not None
    assert len(recorder.events) == 1
    records = diagnostics.records_of(PersistenceClearFailure)
    assert len(records) == 1
    assert isinstance(records[0].error.__cause__, OSError)


def test_report_on_unauthenticated_store_is_noop(storage, diagnostics, recorder) -> None:
    store = RootStore(UNAUTHENTICATED, storage, diagnostics=diagnostics)
    store.register_session_drop_handler(recorder)

    assert store.monitor.report_invalid_session() is False

    assert recorder.events == []
    assert storage.clear_calls == 0
    assert store.current_session() == UNAUTHENTICATED


def test_logout_shares_guard_with_drop(authed_store: RootStore, storage, recorder) -> None:
    authed_store.register_session_drop_handler(recorder)

    assert authed_store.monitor.logout() is True
    assert authed_store.monitor.report_invalid_session() is False
    assert authed_store.trigger_session_drop() is False

    assert recorder.events == []
    assert authed_store.current_session() == UNAUTHENTICATED
    assert storage.clear_calls == 1


def test_logout_after_drop_is_noop(authed_store: RootStore, storage) -> None:
    authed_store.monitor.report_invalid_session()
    assert authed_store.monitor.logout() is False
    assert storage.clear_calls == 1


def test_unexpected_clear_error_is_contained(authed_store: RootStore, diagnostics: DiagnosticsSink, recorder) -> None:
    def broken_clear() -> None:
        raise RuntimeError("keychain locked")

    authed_store.monitor.storage.clear = broken_clear  # type: ignore[method-assign]
    authed_store.register_session_drop_handler(recorder)

    assert authed_store.monitor.report_invalid_session() is True

    assert authed_store.current_session() == UNAUTHENTICATED
    assert len(recorder.events) == 1
    records = diagnostics.records_of(PersistenceClearFailure)
    assert len(records) == 1
    assert isinstance(records[0].error.__cause__, RuntimeError)

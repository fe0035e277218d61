"""Tests for the httpx session watch."""

from __future__ import annotations

import httpx
import pytest

from rootstore.shared.domain.context.session.models import UNAUTHENTICATED
from rootstore.shared.infrastructure.network import SessionWatch, install_session_watch
from rootstore.state import RootStore


def _transport(status: int) -> httpx.MockTransport:
    return httpx.MockTransport(lambda request: httpx.Response(status))


def test_sync_client_reports_401(authed_store: RootStore, recorder) -> None:
    authed_store.register_session_drop_handler(recorder)
    client = httpx.Client(transport=_transport(401), base_url="https://api.test")
    install_session_watch(client, lambda: authed_store)

    with client:
        client.get("/timeline")
        client.get("/notifications")

    assert authed_store.current_session() == UNAUTHENTICATED
    assert len(recorder.events) == 1


def test_other_statuses_are_ignored(authed_store: RootStore, recorder) -> None:
    authed_store.register_session_drop_handler(recorder)
    client = httpx.Client(transport=_transport(500), base_url="https://api.test")
    install_session_watch(client, lambda: authed_store)

    with client:
        client.get("/timeline")

    assert authed_store.current_session().is_authenticated is True
    assert recorder.events == []


@pytest.mark.asyncio
async def test_async_client_reports_configured_status(authed_store: RootStore, recorder) -> None:
    authed_store.register_session_drop_handler(recorder)
    client = httpx.AsyncClient(transport=_transport(419), base_url="https://api.test")
    watch = install_session_watch(client, lambda: authed_store, statuses=[401, 419])

    async with client:
        await client.get("/timeline")

    assert watch.statuses == frozenset({401, 419})
    assert len(recorder.events) == 1


def test_watch_follows_current_store(alice, storage, diagnostics) -> None:
    stores = [RootStore(alice, storage, diagnostics=diagnostics)]
    watch = SessionWatch(lambda: stores[-1])
    request = httpx.Request("GET", "https://api.test/timeline")

    assert watch.check(httpx.Response(401, request=request)) is True
    stores.append(RootStore(alice, storage, diagnostics=diagnostics))
    assert watch.check(httpx.Response(401, request=request)) is True
    assert watch.check(httpx.Response(401, request=request)) is False

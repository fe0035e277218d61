"""Tests for host wiring."""

from __future__ import annotations

import httpx
import pytest

from rootstore.app.main import SESSION_EXPIRED_NOTICE, create_storage, init_app
from rootstore.shared.core.configuration import NetworkConfig, ShellConfig, StorageConfig, SystemConfig
from rootstore.shared.domain.context.session.models import Authenticated
from rootstore.shared.infrastructure.persistence import FileSessionStorage, MemorySessionStorage


def test_create_storage_from_config(tmp_path):
    file_config = SystemConfig(storage=StorageConfig(path=str(tmp_path / "s.json")))
    assert isinstance(create_storage(file_config), FileSessionStorage)
    assert isinstance(create_storage(SystemConfig(storage=StorageConfig(backend="memory"))), MemorySessionStorage)


@pytest.mark.asyncio
async def test_init_app_registers_drop_notice(caplog):
    storage = MemorySessionStorage(b'{"identity": "did:x", "credential": "tok"}')
    config = SystemConfig(shell=ShellConfig(color_mode="dark"))

    bootstrapper, store = await init_app(config, storage)
    try:
        assert store.shell.color_mode == "dark"
        with caplog.at_level("WARNING"):
            store.monitor.report_invalid_session()
        assert SESSION_EXPIRED_NOTICE in caplog.text
        assert storage.read() is None
    finally:
        bootstrapper.teardown()


def _client(status: int) -> httpx.Client:
    return httpx.Client(
        transport=httpx.MockTransport(lambda request: httpx.Response(status)),
        base_url="https://api.test",
    )


@pytest.mark.asyncio
async def test_init_app_installs_session_watch_from_config():
    storage = MemorySessionStorage(b'{"identity": "did:x", "credential": "tok"}')
    config = SystemConfig(network=NetworkConfig(invalid_session_statuses=[419]))
    client = _client(419)

    bootstrapper, store = await init_app(config, storage, client=client)
    try:
        with client:
            client.get("/timeline")
        assert store.current_session().is_authenticated is False
        assert storage.read() is None
    finally:
        bootstrapper.teardown()


@pytest.mark.asyncio
async def test_session_watch_ignores_statuses_outside_config():
    storage = MemorySessionStorage(b'{"identity": "did:x", "credential": "tok"}')
    config = SystemConfig(network=NetworkConfig(invalid_session_statuses=[419]))
    client = _client(401)

    bootstrapper, store = await init_app(config, storage, client=client)
    try:
        with client:
            client.get("/timeline")
        assert store.current_session().is_authenticated is True
    finally:
        bootstrapper.teardown()


@pytest.mark.asyncio
async def test_session_watch_follows_new_epoch_and_stops_after_teardown():
    storage = MemorySessionStorage()
    client = _client(401)

    bootstrapper, first = await init_app(SystemConfig(), storage, client=client)
    second = await bootstrapper.start_epoch(Authenticated(identity="did:y", credential="tok-y"))
    with client:
        client.get("/timeline")
        assert second.current_session().is_authenticated is False

        bootstrapper.teardown()
        client.get("/timeline")

    assert first.is_retired is True


@pytest.mark.asyncio
async def test_init_app_hands_store_to_subsystems(caplog):
    received = []

    def analytics_init(store):
        received.append(("analytics", store))

    def broken_init(store):
        raise RuntimeError("push registration unavailable")

    def notifications_init(store):
        received.append(("notifications", store))

    with caplog.at_level("WARNING"):
        bootstrapper, store = await init_app(
            SystemConfig(),
            MemorySessionStorage(),
            subsystems=[analytics_init, broken_init, notifications_init],
        )
    try:
        assert received == [("analytics", store), ("notifications", store)]
        assert "Could not initialize subsystem 'broken_init'" in caplog.text
    finally:
        bootstrapper.teardown()

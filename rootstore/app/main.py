"""RootStore host - application entry point."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable, Iterable, Optional, Tuple, Union

import httpx
from dotenv import load_dotenv

from rootstore.shared.core.configuration import SystemConfig, get_config
from rootstore.shared.core.events import EventPayload
from rootstore.shared.core.logging_config import configure_logging
from rootstore.shared.infrastructure.network import install_session_watch
from rootstore.shared.infrastructure.persistence import (
    FileSessionStorage,
    MemorySessionStorage,
    SessionStorage,
)
from rootstore.state import RootStore, StoreBootstrapper

logger = logging.getLogger(__name__)

SESSION_EXPIRED_NOTICE = "Sorry! Your session expired. Please log in again."


def create_storage(config: SystemConfig) -> SessionStorage:
    """Build the storage backend named in the configuration."""
    if config.storage.backend == "memory":
        return MemorySessionStorage()
    return FileSessionStorage(config.storage.path)


def show_session_expired_notice(event: EventPayload) -> None:
    logger.warning(f"{SESSION_EXPIRED_NOTICE} (identity={event.get('identity')})")


SubsystemInit = Callable[[RootStore], None]


async def init_app(
    config: SystemConfig,
    storage: Optional[SessionStorage] = None,
    *,
    client: Optional[Union[httpx.Client, httpx.AsyncClient]] = None,
    subsystems: Iterable[SubsystemInit] = (),
) -> Tuple[StoreBootstrapper, RootStore]:
    """Bootstrap the store and wire it to its collaborators.

    Nothing interactive should render until this returns.

    Args:
        config: System configuration
        storage: Storage collaborator (built from config if omitted)
        client: httpx client whose authorization failures end the session;
            the watch follows whichever store is current
        subsystems: ``init(store)`` callables (analytics, notifications)
            handed the resolved store once
    """
    bootstrapper = StoreBootstrapper(
        storage or create_storage(config),
        color_mode=config.shell.color_mode,
    )
    store = await bootstrapper.setup()

    for init in subsystems:
        init_name = getattr(init, "__name__", str(init))
        try:
            init(store)
            logger.info(f"Subsystem '{init_name}' initialized")
        except Exception as e:
            logger.warning(f"Could not initialize subsystem '{init_name}': {e}")

    store.register_session_drop_handler(show_session_expired_notice)

    if client is not None:
        install_session_watch(
            client,
            lambda: bootstrapper.store,
            statuses=config.network.invalid_session_statuses,
        )
        logger.info(f"Session watch installed for statuses {config.network.invalid_session_statuses}")

    logger.info(f"Application initialized (epoch {store.epoch})")
    return bootstrapper, store


async def main() -> None:
    # Load environment variables from .env in the working directory
    load_dotenv(dotenv_path=Path.cwd() / ".env")

    config = get_config()
    configure_logging(config.logging)

    async with httpx.AsyncClient() as client:
        bootstrapper, store = await init_app(config, client=client)
        try:
            session = store.current_session()
            logger.info(f"Session ready: authenticated={session.is_authenticated}")
        finally:
            bootstrapper.teardown()


if __name__ == "__main__":
    asyncio.run(main())

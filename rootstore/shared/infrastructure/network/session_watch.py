"""httpx response hook that reports authorization failures to the SessionMonitor."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterable, Optional, Union

import httpx

if TYPE_CHECKING:
    from rootstore.state.root_store import RootStore

logger = logging.getLogger(__name__)

StoreProvider = Callable[[], Optional["RootStore"]]


class SessionWatch:
    """Reports responses with an invalid-session status.

    The store is looked up on every response so the watch keeps following
    the current epoch after login/logout replaces the store.
    """

    def __init__(self, get_store: StoreProvider, statuses: Iterable[int] = (401,)):
        self.get_store = get_store
        self.statuses = frozenset(statuses)

    def check(self, response: httpx.Response) -> bool:
        """Report the response if its status marks the session invalid.

        Returns:
            True if this response triggered the session drop
        """
        if response.status_code not in self.statuses:
            return False
        store = self.get_store()
        if store is None:
            logger.debug(f"{response.status_code} with no active store; ignoring")
            return False
        logger.debug(f"{response.status_code} from {response.request.url}; reporting invalid session")
        return store.monitor.report_invalid_session()

    def __call__(self, response: httpx.Response) -> None:
        self.check(response)

    async def async_hook(self, response: httpx.Response) -> None:
        self.check(response)


def install_session_watch(
    client: Union[httpx.Client, httpx.AsyncClient],
    get_store: StoreProvider,
    statuses: Iterable[int] = (401,),
) -> SessionWatch:
    """Attach a SessionWatch to an httpx client's response hooks."""
    watch = SessionWatch(get_store, statuses)
    hooks = client.event_hooks
    hook = watch.async_hook if isinstance(client, httpx.AsyncClient) else watch
    hooks.setdefault("response", []).append(hook)
    client.event_hooks = hooks
    return watch

"""Network adapters (httpx)."""

from rootstore.shared.infrastructure.network.session_watch import SessionWatch, install_session_watch

__all__ = ["SessionWatch", "install_session_watch"]

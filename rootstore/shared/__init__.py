"""
RootStore Shared Kernel
=======================

Architecture:
- core: subscription registry, events, errors, diagnostics, configuration, logging
- infrastructure: Technical adapters (session storage, httpx)
- domain: Session values and the session monitor
"""

__version__ = "1.0.0"

__all__ = []

"""Shell sub-store: application chrome state shared across screens."""

from __future__ import annotations

import logging
import threading
from typing import Any, Literal, Optional, get_args

ColorMode = Literal["system", "light", "dark"]

logger = logging.getLogger(__name__)


class ShellState:
    """State for the application shell (drawer, lightbox, theme).

    Lives under the ``"shell"`` key of a RootStore and is rebuilt with every
    new epoch.
    """

    def __init__(self, color_mode: ColorMode = "system") -> None:
        self._lock = threading.Lock()
        self.color_mode: ColorMode = "system"
        self.set_color_mode(color_mode)

        self.is_drawer_open: bool = False
        self.minimal_shell_mode: bool = False
        self.active_lightbox: Optional[Any] = None

    # --- Public Actions ---

    def set_color_mode(self, mode: str) -> None:
        """Change the color mode.

        Raises:
            ValueError: If mode is not one of system, light, dark
        """
        if mode not in get_args(ColorMode):
            raise ValueError(f"Unknown color mode: {mode!r}")
        self.color_mode = mode  # type: ignore[assignment]

    def open_drawer(self) -> None:
        self.is_drawer_open = True

    def close_drawer(self) -> None:
        self.is_drawer_open = False

    def set_minimal_shell_mode(self, value: bool) -> None:
        self.minimal_shell_mode = value

    def open_lightbox(self, lightbox: Any) -> None:
        """Show a lightbox, replacing any one already open."""
        with self._lock:
            if self.active_lightbox is not None:
                logger.debug("Replacing open lightbox")
            self.active_lightbox = lightbox

    def close_lightbox(self) -> None:
        with self._lock:
            self.active_lightbox = None

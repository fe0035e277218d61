"""File-backed session storage."""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from rootstore.shared.core.errors import StorageError

logger = logging.getLogger(__name__)


class FileSessionStorage:
    """Stores the session blob in a single file.

    Writes go through a sibling temp file and ``os.replace`` so a crash
    mid-write never leaves a truncated blob behind.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def read(self) -> Optional[bytes]:
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read session file {self.path}: {e}") from e

    def write(self, blob: bytes) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(blob)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StorageError(f"Failed to write session file {self.path}: {e}") from e
        logger.debug(f"Session written to {self.path}")

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to clear session file {self.path}: {e}") from e
        logger.debug(f"Session file cleared: {self.path}")

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class CachedImage:
    """Process-wide read-through cache for a static image file.

    The bytes are read on first successful access and shared read-only
    afterwards. A failed read is logged and retried on the next call.
    """

    def __init__(self, path: str | Path, *, label: str):
        self._path = Path(path)
        self._label = label
        self._data: Optional[bytes] = None
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def get(self) -> Optional[bytes]:
        if self._data is not None:
            return self._data

        with self._lock:
            if self._data is None:
                try:
                    self._data = self._path.read_bytes()
                except OSError as e:
                    logger.error("Could not load %s image from %s: %s", self._label, self._path, e)
                    return None
            return self._data

"""In-process cache of page data, invalidated by path."""

import logging
import threading
from typing import Any

logger = logging.getLogger(__name__)


class PageCache:
    """Cache of view payloads keyed by ``(path, key)``.

    Mutations that change what a page shows call :meth:`revalidate_path`
    so the next read rebuilds the payload.
    """

    def __init__(self):
        self._entries: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def get(self, path: str, key: str) -> Any | None:
        with self._lock:
            return self._entries.get(path, {}).get(key)

    def set(self, path: str, key: str, value: Any) -> None:
        with self._lock:
            self._entries.setdefault(path, {})[key] = value

    def revalidate_path(self, path: str) -> None:
        """Drop every cached entry for ``path``."""
        with self._lock:
            dropped = self._entries.pop(path, None)
        logger.debug("Revalidated %s (%d entries dropped)", path, len(dropped or {}))

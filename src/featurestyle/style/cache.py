"""
Per-table cache of table-level styles and icons.

Two independent slots, ``styles`` and ``icons``. Each starts out NOT_LOADED,
which is distinct from a loaded-but-empty set. The only operations are
get_or_load and clear, and both take the same lock, so a clear can never be
lost to a populate that raced it.
"""

import threading
from typing import Any, Callable, Dict

from featurestyle.logging_config import logger

STYLES = "styles"
ICONS = "icons"
SLOTS = (STYLES, ICONS)


class _NotLoaded:
    def __repr__(self) -> str:
        return "NOT_LOADED"


NOT_LOADED = _NotLoaded()


class TableStyleCache:
    """Lazily populated (styles, icons) pair for one feature table."""

    def __init__(self, table_name: str):
        self.table_name = table_name
        self._lock = threading.Lock()
        self._slots: Dict[str, Any] = {slot: NOT_LOADED for slot in SLOTS}

    def get_or_load(self, slot: str, loader: Callable[[], Any]) -> Any:
        """
        Return the cached value of a slot, loading it on first use.

        Reads optimistically, then re-checks under the lock before calling the
        loader so contending threads do not each hit storage.
        """
        value = self._slots[slot]
        if value is not NOT_LOADED:
            return value

        with self._lock:
            value = self._slots[slot]
            if value is NOT_LOADED:
                value = loader()
                self._slots[slot] = value
                logger.debug(f"Cached table {slot} for {self.table_name}")
        return value

    def clear(self, *slots: str) -> None:
        """Reset the named slots (all slots if none are named) to NOT_LOADED."""
        targets = slots or SLOTS
        unknown = [slot for slot in targets if slot not in self._slots]
        if unknown:
            raise KeyError(f"Unknown cache slot: {', '.join(unknown)}")
        with self._lock:
            for slot in targets:
                self._slots[slot] = NOT_LOADED
